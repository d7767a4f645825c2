"""convert.py

Build the NDJSON train/test files from the raw HAR CSV pairs.

Each output line is one record: the numeric features followed by a
``label`` field. ``train.py`` and ``validate.py`` read these files.

Usage
-----
From the project root:

    python src/convert.py
"""

from __future__ import annotations

from config import HAR_DATASET
from data_utils import LabeledDataset, load_csv_dataset, write_ndjson_dataset
from pipeline_utils import NumericStringConverter


def convert_split(samples_csv: str, labels_csv: str, ndjson_path: str) -> int:
    """Convert one CSV pair and return the number of records written."""
    dataset = load_csv_dataset(samples_csv, labels_csv)
    numeric = NumericStringConverter().fit_transform(dataset.samples)

    write_ndjson_dataset(LabeledDataset(numeric, dataset.labels), ndjson_path)
    print(f"[HAR] Wrote {len(dataset)} records to {ndjson_path}")

    return len(dataset)


if __name__ == "__main__":
    convert_split(
        HAR_DATASET.train_samples_csv,
        HAR_DATASET.train_labels_csv,
        HAR_DATASET.train_ndjson,
    )
    convert_split(
        HAR_DATASET.test_samples_csv,
        HAR_DATASET.test_labels_csv,
        HAR_DATASET.test_ndjson,
    )
