"""explore.py

Embed a random sample of the HAR training set into 2-D for plotting.

Workflow:
    1) Load the raw feature / label CSVs of the training split.
    2) Shuffle and keep the first ``EMBEDDING_LIMIT`` rows.
    3) Project and embed with t-SNE (default) or PCA.
    4) Write ``embedding.csv`` with header ``x,y,label``.

Usage
-----
From the project root:

    python src/explore.py
    python src/explore.py --method pca --no-labels
"""

from __future__ import annotations

import argparse
import time

from config import (
    HAR_DATASET,
    EMBEDDING_CSV_PATH,
    EMBEDDING_LIMIT,
    AVAILABLE_EMBEDDERS,
    DEFAULT_EMBEDDER,
)
from data_utils import load_csv_dataset
from io_utils import write_embedding_csv
from pipeline_utils import build_pipeline, embed


def explore(
    method: str = DEFAULT_EMBEDDER,
    limit: int = EMBEDDING_LIMIT,
    output_path: str = EMBEDDING_CSV_PATH,
    include_labels: bool = True,
    seed: int | None = None,
) -> None:
    """Embed a shuffled subset of the training split and save the coordinates."""
    print("╔═══════════════════════════════════════════════════════════════╗")
    print("║                                                               ║")
    print(f"║ HAR Dataset Embedder using {method.upper():<35}║")
    print("║                                                               ║")
    print("╚═══════════════════════════════════════════════════════════════╝")
    print()

    print("[HAR] Loading data into memory ...")
    dataset = load_csv_dataset(
        HAR_DATASET.train_samples_csv,
        HAR_DATASET.train_labels_csv,
    )
    dataset = dataset.randomize(seed=seed).head(limit)
    print(f"[HAR] Embedding {len(dataset)} samples with {dataset.num_features} features")

    start_time = time.perf_counter()
    embedding = embed(build_pipeline(method), dataset)
    duration = time.perf_counter() - start_time
    print(f"[HAR] Embedding time: {duration:.2f} sec")

    write_embedding_csv(output_path, embedding, include_labels=include_labels)
    print(f"[HAR] Embedding saved to {output_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Embed a random sample of the HAR training set into 2-D."
    )
    parser.add_argument(
        "--method",
        choices=AVAILABLE_EMBEDDERS,
        default=DEFAULT_EMBEDDER,
        help="Embedder to use at the end of the pipeline.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=EMBEDDING_LIMIT,
        help="Number of shuffled training rows to embed.",
    )
    parser.add_argument(
        "--output",
        default=EMBEDDING_CSV_PATH,
        help="CSV file to write the coordinates to.",
    )
    parser.add_argument(
        "--no-labels",
        action="store_true",
        help="Write only the x,y columns.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the row shuffle (unseeded by default).",
    )
    args = parser.parse_args()

    explore(
        method=args.method,
        limit=args.limit,
        output_path=args.output,
        include_labels=not args.no_labels,
        seed=args.seed,
    )
