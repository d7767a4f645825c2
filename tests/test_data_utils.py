# tests/test_data_utils.py
import numpy as np
import pytest

from data_utils import (
    LabeledDataset,
    load_csv_dataset,
    load_ndjson_dataset,
    write_ndjson_dataset,
)


def test_load_csv_pairs_rows_with_labels(csv_pair):
    """Row i of the label file labels row i of the feature file."""
    samples_path, labels_path = csv_pair

    dataset = load_csv_dataset(str(samples_path), str(labels_path))

    assert len(dataset) == 10
    assert dataset.num_features == 3
    assert dataset.labels.tolist() == ["A"] * 5 + ["B"] * 5

    # Features stay as strings until NumericStringConverter runs
    first_line = samples_path.read_text().splitlines()[0].split(",")
    assert dataset.samples[0].tolist() == first_line


def test_load_csv_row_count_mismatch_fails(tmp_path):
    samples_path = tmp_path / "X.csv"
    labels_path = tmp_path / "y.csv"
    samples_path.write_text("1,2,3\n4,5,6\n7,8,9\n")
    labels_path.write_text("A\nB\n")

    with pytest.raises(ValueError, match="does not match"):
        load_csv_dataset(str(samples_path), str(labels_path))


def test_load_csv_rejects_short_rows(tmp_path):
    samples_path = tmp_path / "X.csv"
    labels_path = tmp_path / "y.csv"
    samples_path.write_text("1,2,3\n4,5\n7,8,9\n")
    labels_path.write_text("A\nB\nA\n")

    with pytest.raises(ValueError, match="shorter"):
        load_csv_dataset(str(samples_path), str(labels_path))


def test_load_csv_handles_quoted_fields(tmp_path):
    samples_path = tmp_path / "X.csv"
    labels_path = tmp_path / "y.csv"
    samples_path.write_text('"1.5","2.5"\n"3.5","4.5"\n')
    labels_path.write_text('"WALKING"\n"SITTING"\n')

    dataset = load_csv_dataset(str(samples_path), str(labels_path))

    assert dataset.samples.tolist() == [["1.5", "2.5"], ["3.5", "4.5"]]
    assert dataset.labels.tolist() == ["WALKING", "SITTING"]


def test_constructor_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        LabeledDataset(np.zeros((3, 2)), ["A", "B"])


def test_constructor_rejects_ragged_rows():
    with pytest.raises(ValueError):
        LabeledDataset(np.array([1.0, 2.0, 3.0]), ["A", "B", "C"])


def test_randomize_then_head_returns_distinct_original_rows(small_dataset):
    original = {tuple(row) for row in small_dataset.zip()}

    subset = small_dataset.randomize().head(4)

    rows = [tuple(row) for row in subset.zip()]
    assert len(subset) == 4
    assert len(set(rows)) == 4
    assert set(rows) <= original


def test_randomize_with_seed_is_reproducible(small_dataset):
    first = small_dataset.randomize(seed=7)
    second = small_dataset.randomize(seed=7)

    assert first.labels.tolist() == second.labels.tolist()
    np.testing.assert_array_equal(first.samples, second.samples)


def test_randomize_does_not_mutate_original(small_dataset):
    before = small_dataset.labels.tolist()
    small_dataset.randomize(seed=1)
    assert small_dataset.labels.tolist() == before


def test_head_larger_than_dataset_keeps_everything(small_dataset):
    assert len(small_dataset.head(1000)) == len(small_dataset)


def test_head_negative_rejected(small_dataset):
    with pytest.raises(ValueError):
        small_dataset.head(-1)


def test_zip_appends_label(small_dataset):
    rows = list(small_dataset.zip())
    assert len(rows) == 10
    assert all(len(row) == 4 for row in rows)
    assert rows[0][-1] == "A"
    assert rows[-1][-1] == "B"


def test_possible_outcomes(small_dataset):
    assert small_dataset.possible_outcomes() == ["A", "B"]


def test_ndjson_last_field_is_label(tmp_path):
    path = tmp_path / "records.ndjson"
    path.write_text(
        '{"a": 1.0, "b": 2.0, "activity": "LAYING"}\n'
        '{"a": 3.0, "b": 4.0, "activity": "STANDING"}\n'
    )

    dataset = load_ndjson_dataset(str(path))

    assert dataset.num_features == 2
    assert dataset.labels.tolist() == ["LAYING", "STANDING"]
    assert dataset.samples.astype(float).tolist() == [[1.0, 2.0], [3.0, 4.0]]


def test_write_ndjson_is_readable(tmp_path, small_dataset):
    path = tmp_path / "out.ndjson"

    write_ndjson_dataset(small_dataset, str(path))
    restored = load_ndjson_dataset(str(path))

    assert len(path.read_text().splitlines()) == 10
    assert restored.labels.tolist() == small_dataset.labels.tolist()
    np.testing.assert_allclose(restored.samples.astype(float), small_dataset.samples)
