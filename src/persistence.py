"""persistence.py

Train / predict wrapper around a pipeline plus its joblib model file.

``PersistentModel`` pairs a fitted (or to-be-fitted) pipeline with the
path it is saved to. Nothing is written to disk until ``save`` is
called, which the training script only does after the user confirms.
"""

from __future__ import annotations

import os
import time

import joblib
import numpy as np
from sklearn.pipeline import Pipeline

from data_utils import LabeledDataset


class PersistentModel:
    """A pipeline that knows where it is persisted."""

    def __init__(self, pipeline: Pipeline, path: str):
        self.pipeline = pipeline
        self.path = path

    @property
    def estimator(self):
        """The terminal estimator of the pipeline."""
        return self.pipeline[-1]

    def train(self, dataset: LabeledDataset) -> tuple[float, ...]:
        """Fit the whole pipeline on ``dataset`` and return the loss history."""
        start_time = time.perf_counter()
        self.pipeline.fit(dataset.samples, dataset.labels)
        duration = time.perf_counter() - start_time
        print(f"[HAR] Trained on {len(dataset)} samples in {duration:.2f} sec")
        return self.steps()

    def predict(self, dataset: LabeledDataset) -> np.ndarray:
        """Return one predicted label per row of ``dataset``."""
        return self.pipeline.predict(dataset.samples)

    def steps(self) -> tuple[float, ...]:
        return self.estimator.steps()

    def scores(self) -> tuple[float, ...]:
        return self.estimator.scores()

    def save(self) -> None:
        """Write the fitted pipeline to ``self.path`` with joblib."""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        joblib.dump(self.pipeline, self.path)
        print(f"[HAR] Saved model to: {self.path}")

    @classmethod
    def load(cls, path: str) -> "PersistentModel":
        """Restore a model previously written by ``save``."""
        if not os.path.exists(path):
            raise FileNotFoundError(f"No persisted model found at '{path}'.")
        pipeline = joblib.load(path)
        return cls(pipeline, path)


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on stdin; anything but ``y`` means no."""
    return input(prompt).strip().lower() == "y"


__all__ = ["PersistentModel", "confirm"]
