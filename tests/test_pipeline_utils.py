# tests/test_pipeline_utils.py
import numpy as np
import pytest

from data_utils import LabeledDataset, load_csv_dataset
from estimators import SoftmaxClassifier, MLPClassifier
from pipeline_utils import (
    NumericStringConverter,
    build_pipeline,
    build_softmax_pipeline,
    build_tsne_pipeline,
    build_pca_pipeline,
    embed,
)


def test_numeric_string_converter_parses_strings():
    X = np.array([["1.5", "-2"], ["3e-2", "4"]], dtype=object)

    converted = NumericStringConverter().fit_transform(X)

    assert converted.dtype == np.float64
    np.testing.assert_allclose(converted, [[1.5, -2.0], [0.03, 4.0]])


def test_numeric_string_converter_rejects_text():
    with pytest.raises(ValueError, match="Non-numeric"):
        NumericStringConverter().transform(np.array([["1.0", "walking"]]))


def test_numeric_string_converter_rejects_missing_values():
    X = np.array([["1.0", "2.0"], ["3.0", np.nan]], dtype=object)

    with pytest.raises(ValueError, match="Missing"):
        NumericStringConverter().transform(X)


def test_tsne_perplexity_capped_for_small_samples(small_dataset):
    pipeline = build_tsne_pipeline(projection_dims=3, max_iter=250, verbose=False)

    embedding = embed(pipeline, small_dataset)

    assert pipeline.named_steps["embedder"].perplexity == 9.0
    assert embedding.samples.shape == (10, 2)


def test_softmax_pipeline_stage_order():
    pipeline = build_softmax_pipeline(projection_dims=10)

    assert [name for name, _ in pipeline.steps] == [
        "numeric",
        "projection",
        "scaler",
        "classifier",
    ]
    assert pipeline.named_steps["projection"].n_components == 10
    assert isinstance(pipeline[-1], SoftmaxClassifier)


def test_build_pipeline_dispatches_by_name():
    assert isinstance(build_pipeline("MLP")[-1], MLPClassifier)
    assert build_pipeline("tsne").named_steps["embedder"].perplexity == 30.0


def test_build_pipeline_unknown_name():
    with pytest.raises(ValueError, match="Unknown pipeline"):
        build_pipeline("random_forest")


def test_classifier_pipeline_on_string_features(csv_pair):
    dataset = load_csv_dataset(*(str(p) for p in csv_pair))
    pipeline = build_softmax_pipeline(
        projection_dims=3, verbose=False, epochs=5, min_change=0.0
    )

    pipeline.fit(dataset.samples, dataset.labels)
    predictions = pipeline.predict(dataset.samples)

    assert len(predictions) == len(dataset)
    assert set(predictions) <= {"A", "B"}


def test_pca_embedding_keeps_rows_and_labels(small_dataset):
    embedding = embed(build_pca_pipeline(), small_dataset)

    assert len(embedding) == len(small_dataset)
    assert embedding.num_features == 2
    assert embedding.labels.tolist() == small_dataset.labels.tolist()


def test_tsne_embedding_keeps_rows_and_labels(csv_pair):
    dataset = load_csv_dataset(*(str(p) for p in csv_pair))
    pipeline = build_tsne_pipeline(
        projection_dims=3, perplexity=3.0, max_iter=250, verbose=False
    )

    embedding = embed(pipeline, dataset)

    assert isinstance(embedding, LabeledDataset)
    assert embedding.samples.shape == (10, 2)
    assert embedding.labels.tolist() == dataset.labels.tolist()
