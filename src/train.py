"""train.py

Train a HAR activity classifier and record its learning curve.

Workflow:
    1) Load ``train.ndjson`` (see ``convert.py``).
    2) Assemble the softmax (default) or MLP pipeline.
    3) Train, then write the per-epoch history to ``progress.csv``
       (``loss`` for softmax, ``loss,score`` for the MLP).
    4) Ask whether to keep the model; save it only on ``y``.

Usage
-----
From the project root:

    python src/train.py
    python src/train.py --model mlp
"""

from __future__ import annotations

import argparse

from config import (
    HAR_DATASET,
    PROGRESS_CSV_PATH,
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    get_model_path,
)
from data_utils import load_ndjson_dataset
from io_utils import write_progress_csv
from persistence import PersistentModel, confirm
from pipeline_utils import build_pipeline


def train(
    model: str = DEFAULT_MODEL,
    dataset_path: str = HAR_DATASET.train_ndjson,
    progress_path: str = PROGRESS_CSV_PATH,
) -> PersistentModel:
    """Train the chosen classifier and write its progress file."""
    model = model.lower()

    print("[HAR] Loading data into memory ...")
    dataset = load_ndjson_dataset(dataset_path)
    print(
        f"[HAR] {len(dataset)} samples | {dataset.num_features} features | "
        f"classes: {', '.join(dataset.possible_outcomes())}"
    )

    estimator = PersistentModel(build_pipeline(model), get_model_path(model))

    print("[HAR] Training ...")
    losses = estimator.train(dataset)

    # Only the MLP scores a holdout set during training
    scores = estimator.scores() if model == "mlp" else None
    write_progress_csv(progress_path, losses, scores)
    print(f"[HAR] Progress saved to {progress_path}")

    return estimator


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Train a softmax or MLP classifier on the HAR NDJSON training set."
    )
    parser.add_argument(
        "--model",
        choices=AVAILABLE_MODELS,
        default=DEFAULT_MODEL,
        help="Classifier to train; also selects the model file it is saved to.",
    )
    parser.add_argument(
        "--dataset",
        default=HAR_DATASET.train_ndjson,
        help="NDJSON file with the training records.",
    )
    parser.add_argument(
        "--progress",
        default=PROGRESS_CSV_PATH,
        help="CSV file to write the training history to.",
    )
    args = parser.parse_args()

    estimator = train(
        model=args.model,
        dataset_path=args.dataset,
        progress_path=args.progress,
    )

    if confirm("Save this model? (y|[n]): "):
        estimator.save()
