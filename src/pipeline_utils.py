"""pipeline_utils.py

Assemble the preprocessing + estimator pipelines used by the scripts.

Every experiment is a fixed, ordered list of transformers followed by
one terminal estimator, wrapped in an ``sklearn.pipeline.Pipeline`` so
that training fits the stages in order and prediction replays them in
the same order:

    softmax: numeric strings -> Gaussian projection -> z-scale -> softmax
    mlp:     numeric strings -> z-scale -> multilayer perceptron
    tsne:    numeric strings -> sparse projection -> t-SNE
    pca:     numeric strings -> z-scale -> PCA

Hyperparameter defaults come from ``config.py``; keyword arguments
override them per call.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.decomposition import PCA
from sklearn.manifold import TSNE
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.random_projection import GaussianRandomProjection, SparseRandomProjection

from config import (
    RANDOM_SEED,
    GAUSSIAN_PROJECTION_DIMS,
    SPARSE_PROJECTION_DIMS,
    EMBEDDING_DIMENSIONS,
    TSNE_PERPLEXITY,
    TSNE_EXAGGERATION,
    TSNE_LEARNING_RATE,
    TSNE_MAX_ITER,
    MLP_HIDDEN_LAYERS,
)
from data_utils import LabeledDataset
from estimators import SoftmaxClassifier, MLPClassifier


class NumericStringConverter(TransformerMixin, BaseEstimator):
    """Convert numeric strings (as read from CSV) to floats.

    Stateless: ``fit`` learns nothing. Values that are not numbers, and
    missing values, raise ``ValueError``.
    """

    def fit(self, X, y=None):
        return self

    def transform(self, X) -> np.ndarray:
        try:
            converted = np.asarray(X, dtype=np.float64)
        except ValueError as exc:
            raise ValueError(f"Non-numeric feature value encountered: {exc}") from exc

        if np.isnan(converted).any():
            raise ValueError("Missing feature value (NaN) encountered.")
        return converted


def build_softmax_pipeline(
    projection_dims: int = GAUSSIAN_PROJECTION_DIMS,
    random_state: Optional[int] = RANDOM_SEED,
    verbose: bool = True,
    **classifier_params,
) -> Pipeline:
    """Random projection + standardization in front of a softmax classifier."""
    return Pipeline([
        ("numeric", NumericStringConverter()),
        ("projection", GaussianRandomProjection(
            n_components=projection_dims,
            random_state=random_state,
        )),
        ("scaler", StandardScaler()),
        ("classifier", SoftmaxClassifier(
            random_state=random_state,
            verbose=verbose,
            **classifier_params,
        )),
    ])


def build_mlp_pipeline(
    hidden_layers: Sequence[int] = MLP_HIDDEN_LAYERS,
    random_state: Optional[int] = RANDOM_SEED,
    verbose: bool = True,
    **classifier_params,
) -> Pipeline:
    """Standardized features into a multilayer perceptron."""
    return Pipeline([
        ("numeric", NumericStringConverter()),
        ("scaler", StandardScaler()),
        ("classifier", MLPClassifier(
            hidden_layers=hidden_layers,
            random_state=random_state,
            verbose=verbose,
            **classifier_params,
        )),
    ])


def build_tsne_pipeline(
    projection_dims: int = SPARSE_PROJECTION_DIMS,
    dimensions: int = EMBEDDING_DIMENSIONS,
    perplexity: float = TSNE_PERPLEXITY,
    exaggeration: float = TSNE_EXAGGERATION,
    learning_rate: float = TSNE_LEARNING_RATE,
    max_iter: int = TSNE_MAX_ITER,
    random_state: Optional[int] = RANDOM_SEED,
    verbose: bool = True,
) -> Pipeline:
    """Sparse random projection followed by a t-SNE embedder."""
    return Pipeline([
        ("numeric", NumericStringConverter()),
        ("projection", SparseRandomProjection(
            n_components=projection_dims,
            random_state=random_state,
        )),
        ("embedder", TSNE(
            n_components=dimensions,
            perplexity=perplexity,
            early_exaggeration=exaggeration,
            learning_rate=learning_rate,
            max_iter=max_iter,
            metric="euclidean",
            random_state=random_state,
            verbose=1 if verbose else 0,
        )),
    ])


def build_pca_pipeline(
    dimensions: int = EMBEDDING_DIMENSIONS,
    random_state: Optional[int] = RANDOM_SEED,
) -> Pipeline:
    """Standardized features projected onto the leading principal components."""
    return Pipeline([
        ("numeric", NumericStringConverter()),
        ("scaler", StandardScaler()),
        ("embedder", PCA(
            n_components=dimensions,
            random_state=random_state,
        )),
    ])


PIPELINE_BUILDERS = {
    "softmax": build_softmax_pipeline,
    "mlp": build_mlp_pipeline,
    "tsne": build_tsne_pipeline,
    "pca": build_pca_pipeline,
}


def build_pipeline(name: str, **params) -> Pipeline:
    """Build one of the named pipelines (``PIPELINE_BUILDERS`` keys)."""
    normalized = name.lower()
    if normalized not in PIPELINE_BUILDERS:
        raise ValueError(
            f"Unknown pipeline '{name}'. Choose from: {', '.join(PIPELINE_BUILDERS)}"
        )
    return PIPELINE_BUILDERS[normalized](**params)


def embed(pipeline: Pipeline, dataset: LabeledDataset) -> LabeledDataset:
    """Fit an embedding pipeline and return coordinates labelled like ``dataset``.

    Row ``i`` of the result is the embedding of row ``i`` of the input.
    t-SNE perplexity is capped at ``len(dataset) - 1`` for small samples.
    """
    embedder = pipeline.steps[-1][1]
    if isinstance(embedder, TSNE) and embedder.perplexity >= len(dataset):
        perplexity = float(max(len(dataset) - 1, 1))
        print(f"[t-SNE] Lowering perplexity to {perplexity} for {len(dataset)} samples")
        pipeline.set_params(**{f"{pipeline.steps[-1][0]}__perplexity": perplexity})

    coordinates = pipeline.fit_transform(dataset.samples)

    if hasattr(embedder, "kl_divergence_"):
        print(f"[t-SNE] Final KL divergence: {embedder.kl_divergence_:.4f}")
    elif hasattr(embedder, "explained_variance_ratio_"):
        retained = float(np.sum(embedder.explained_variance_ratio_))
        print(f"[PCA] Variance retained by {embedder.n_components_} components: {retained:.4f}")

    return LabeledDataset(coordinates, dataset.labels)


__all__ = [
    "NumericStringConverter",
    "build_softmax_pipeline",
    "build_mlp_pipeline",
    "build_tsne_pipeline",
    "build_pca_pipeline",
    "build_pipeline",
    "embed",
]
