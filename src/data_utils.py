"""data_utils.py

Loaders for the HAR dataset in its two on-disk formats.

    * The raw release stores each split as a pair of headerless CSVs:
      ``X_*.csv`` holds one feature vector per row and ``y_*.csv`` holds
      the activity label in its first column. Features are read as
      strings and left for ``NumericStringConverter`` to parse.
    * The NDJSON files hold one JSON record per line; the last field of
      every record is the label and the remaining fields are features.

Both loaders return a ``LabeledDataset`` so callers never have to know
which format a split came from.
"""

from __future__ import annotations

from typing import Iterator, Optional

import numpy as np
import pandas as pd


class LabeledDataset:
    """Ordered (feature vector, label) pairs held in memory.

    Samples are kept as a 2-D array so every row has the same width;
    labels are kept as strings. Row order is insertion order until
    ``randomize`` is called.
    """

    def __init__(self, samples, labels):
        samples = np.asarray(samples)
        labels = np.asarray(labels).astype(str)

        if samples.ndim != 2:
            raise ValueError(
                "Samples must be a 2-D table of equal-width feature rows, "
                f"got an array with {samples.ndim} dimension(s)."
            )
        if labels.ndim != 1:
            raise ValueError("Labels must be a single column.")
        if samples.shape[0] != labels.shape[0]:
            raise ValueError(
                f"Number of samples ({samples.shape[0]}) does not match "
                f"number of labels ({labels.shape[0]})."
            )

        self.samples = samples
        self.labels = labels

    def __len__(self) -> int:
        return self.samples.shape[0]

    @property
    def num_features(self) -> int:
        return self.samples.shape[1]

    def randomize(self, seed: Optional[int] = None) -> "LabeledDataset":
        """Return a uniformly shuffled copy (unseeded unless ``seed`` is set)."""
        order = np.random.default_rng(seed).permutation(len(self))
        return LabeledDataset(self.samples[order], self.labels[order])

    def head(self, n: int) -> "LabeledDataset":
        """Return the first ``n`` rows (or every row if there are fewer)."""
        if n < 0:
            raise ValueError(f"Cannot take a negative number of rows ({n}).")
        return LabeledDataset(self.samples[:n], self.labels[:n])

    def possible_outcomes(self) -> list[str]:
        return sorted(set(self.labels.tolist()))

    def zip(self) -> Iterator[list]:
        """Yield each row as ``[*features, label]``."""
        for features, label in zip(self.samples.tolist(), self.labels.tolist()):
            yield [*features, label]


# -------------------------------------------------------------------
# File loaders (CSV / NDJSON -> LabeledDataset)
# -------------------------------------------------------------------


def load_csv_dataset(samples_path: str, labels_path: str) -> LabeledDataset:
    """Read a feature CSV and a label CSV into one dataset.

    Both files are headerless, comma delimited and use ``"`` as quote
    character. Row ``i`` of the label file labels row ``i`` of the
    feature file; differing row counts or rows of differing width raise
    ``ValueError``.
    """
    samples = pd.read_csv(
        samples_path, header=None, sep=",", quotechar='"', dtype=str
    )
    labels = pd.read_csv(
        labels_path, header=None, sep=",", quotechar='"', dtype=str
    )

    # pandas pads short rows with NaN up to the widest row
    short_rows = samples.index[samples.isna().any(axis=1)].tolist()
    if short_rows:
        raise ValueError(
            f"Feature rows {short_rows[:10]} in '{samples_path}' are shorter than "
            f"{samples.shape[1]} columns or contain empty fields."
        )

    return LabeledDataset(samples.values, labels.iloc[:, 0].values)


def load_ndjson_dataset(path: str) -> LabeledDataset:
    """Read newline-delimited JSON records; the last field is the label."""
    df = pd.read_json(path, lines=True, dtype=False)
    if df.shape[1] < 2:
        raise ValueError(
            f"Records in '{path}' need at least one feature and a label."
        )

    labels = df.iloc[:, -1].values
    samples = df.iloc[:, :-1].values

    return LabeledDataset(samples, labels)


def write_ndjson_dataset(dataset: LabeledDataset, path: str) -> None:
    """Write a dataset as NDJSON records with a trailing ``label`` field."""
    columns = [f"x{i}" for i in range(dataset.num_features)]
    df = pd.DataFrame(dataset.samples, columns=columns)
    df["label"] = dataset.labels
    df.to_json(path, orient="records", lines=True)


__all__ = [
    "LabeledDataset",
    "load_csv_dataset",
    "load_ndjson_dataset",
    "write_ndjson_dataset",
]
