# tests/conftest.py
from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from data_utils import LabeledDataset


def make_rows(n_per_class: int = 5, seed: int = 0) -> tuple[np.ndarray, np.ndarray]:
    """Two well separated clusters with 3 numeric features, labels A / B."""
    rng = np.random.default_rng(seed)
    a = rng.normal(loc=-3.0, scale=0.5, size=(n_per_class, 3))
    b = rng.normal(loc=3.0, scale=0.5, size=(n_per_class, 3))
    samples = np.round(np.vstack([a, b]), 6)
    labels = np.array(["A"] * n_per_class + ["B"] * n_per_class)
    return samples, labels


def write_csv_pair(directory: Path, samples: np.ndarray, labels) -> tuple[Path, Path]:
    samples_path = directory / "X.csv"
    labels_path = directory / "y.csv"
    samples_path.write_text(
        "".join(",".join(repr(float(v)) for v in row) + "\n" for row in samples)
    )
    labels_path.write_text("".join(f"{label}\n" for label in labels))
    return samples_path, labels_path


def write_ndjson(path: Path, samples: np.ndarray, labels) -> Path:
    with path.open("w") as f:
        for row, label in zip(samples.tolist(), labels):
            record = {f"x{i}": v for i, v in enumerate(row)}
            record["label"] = label
            f.write(json.dumps(record) + "\n")
    return path


@pytest.fixture
def small_dataset() -> LabeledDataset:
    """10 rows, 3 numeric features, labels in {A, B}."""
    samples, labels = make_rows(n_per_class=5)
    return LabeledDataset(samples, labels)


@pytest.fixture
def large_dataset() -> LabeledDataset:
    samples, labels = make_rows(n_per_class=20, seed=1)
    return LabeledDataset(samples, labels)


@pytest.fixture
def csv_pair(tmp_path: Path) -> tuple[Path, Path]:
    samples, labels = make_rows(n_per_class=5)
    return write_csv_pair(tmp_path, samples, labels)


@pytest.fixture
def train_ndjson(tmp_path: Path) -> Path:
    samples, labels = make_rows(n_per_class=10, seed=2)
    return write_ndjson(tmp_path / "train.ndjson", samples, labels)


@pytest.fixture
def test_ndjson(tmp_path: Path) -> Path:
    samples, labels = make_rows(n_per_class=5, seed=3)
    return write_ndjson(tmp_path / "test.ndjson", samples, labels)
