"""validate.py

Score a saved HAR classifier on the test split.

Loads ``test.ndjson`` and a model written by ``train.py``, predicts
every row, prints the multiclass breakdown and confusion matrix and
saves them to ``report.json``.

Usage
-----
From the project root:

    python src/validate.py
    python src/validate.py --model mlp
"""

from __future__ import annotations

import argparse
import json
import time

from config import (
    HAR_DATASET,
    REPORT_JSON_PATH,
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    get_model_path,
)
from data_utils import load_ndjson_dataset
from io_utils import write_report_json
from persistence import PersistentModel
from report_utils import generate_report


def validate(
    model_path: str = get_model_path(DEFAULT_MODEL),
    dataset_path: str = HAR_DATASET.test_ndjson,
    report_path: str = REPORT_JSON_PATH,
) -> dict:
    """Predict the test split with a persisted model and write the report."""
    print("[HAR] Loading data into memory ...")
    dataset = load_ndjson_dataset(dataset_path)

    estimator = PersistentModel.load(model_path)

    print("[HAR] Making predictions ...")
    start_time = time.perf_counter()
    predictions = estimator.predict(dataset)
    duration = time.perf_counter() - start_time
    print(f"[HAR] Predicted {len(predictions)} samples in {duration:.2f} sec")

    report = generate_report(predictions, dataset.labels)

    print(json.dumps(report, indent=4))

    write_report_json(report_path, report)
    print(f"[HAR] Report saved to {report_path}")

    return report


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Evaluate a saved HAR classifier on the NDJSON test set."
    )
    parser.add_argument(
        "--model",
        choices=AVAILABLE_MODELS,
        default=DEFAULT_MODEL,
        help="Which saved classifier to load.",
    )
    parser.add_argument(
        "--dataset",
        default=HAR_DATASET.test_ndjson,
        help="NDJSON file with the test records.",
    )
    parser.add_argument(
        "--report",
        default=REPORT_JSON_PATH,
        help="JSON file to write the report to.",
    )
    args = parser.parse_args()

    validate(
        model_path=get_model_path(args.model),
        dataset_path=args.dataset,
        report_path=args.report,
    )
