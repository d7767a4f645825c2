"""estimators.py

scikit-learn compatible classifiers backed by the PyTorch modules in
``models.py``.

Wrapping the training loop behind ``fit`` / ``predict`` lets the
classifiers sit at the end of an ``sklearn.pipeline.Pipeline`` next to
the random projections and scalers, and lets ``joblib`` persist the
whole fitted pipeline as one object.

Each classifier records one loss value per epoch (``steps()``); the MLP
also scores a holdout split after every epoch (``scores()``).
"""

from __future__ import annotations

import copy
import math
import time
from typing import Optional, Sequence

import numpy as np
import torch
import torch.nn as nn
import torch.optim as optim
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.metrics import matthews_corrcoef
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import LabelEncoder
from sklearn.utils.validation import check_is_fitted
from torch.utils.data import DataLoader, TensorDataset

from config import (
    SOFTMAX_BATCH_SIZE,
    SOFTMAX_LEARNING_RATE,
    SOFTMAX_MOMENTUM,
    SOFTMAX_ALPHA,
    SOFTMAX_EPOCHS,
    SOFTMAX_MIN_CHANGE,
    SOFTMAX_WINDOW,
    MLP_HIDDEN_LAYERS,
    MLP_DROPOUT,
    MLP_BATCH_SIZE,
    MLP_LEARNING_RATE,
    MLP_ALPHA,
    MLP_EPOCHS,
    MLP_MIN_CHANGE,
    MLP_WINDOW,
    MLP_HOLDOUT,
    NUM_WORKERS,
)
from models import SoftmaxRegression, MultilayerPerceptron


class _NeuralClassifier(ClassifierMixin, BaseEstimator):
    """Shared mini-batch training loop for the torch-backed classifiers.

    Subclasses provide the network (``_build_module``), the optimizer
    (``_build_optimizer``) and the holdout fraction used for scoring.
    """

    tag = "NN"

    def _build_module(self, num_features: int, num_classes: int) -> nn.Module:
        raise NotImplementedError

    def _build_optimizer(self, module: nn.Module) -> optim.Optimizer:
        raise NotImplementedError

    def _holdout_fraction(self) -> float:
        return 0.0

    # ---------------------------
    # Training
    # ---------------------------

    def fit(self, X, y):
        """Train the network on features ``X`` and string labels ``y``."""
        X = np.asarray(X, dtype=np.float32)
        y = np.asarray(y).astype(str)

        if X.ndim != 2:
            raise ValueError(f"Expected a 2-D feature matrix, got {X.ndim} dimension(s).")
        if X.shape[0] != y.shape[0]:
            raise ValueError(
                f"Number of samples ({X.shape[0]}) does not match "
                f"number of labels ({y.shape[0]})."
            )

        if self.random_state is not None:
            torch.manual_seed(self.random_state)

        self.encoder_ = LabelEncoder()
        y_encoded = self.encoder_.fit_transform(y)
        self.classes_ = self.encoder_.classes_
        self.n_features_in_ = X.shape[1]

        # Use GPU if available; otherwise, fall back to CPU
        device = torch.device("cuda" if torch.cuda.is_available() else "cpu")

        holdout = self._holdout_fraction()
        if holdout > 0:
            X_train, X_val, y_train, y_val = train_test_split(
                X,
                y_encoded,
                test_size=holdout,
                random_state=self.random_state,
            )
        else:
            X_train, y_train = X, y_encoded
            X_val, y_val = None, None

        self.module_ = self._build_module(X.shape[1], len(self.classes_)).to(device)
        self.losses_: list[float] = []
        self.scores_: list[float] = []

        self._train_loop(X_train, y_train, X_val, y_val, device)

        # Keep the fitted network on CPU so it pickles and predicts anywhere
        self.module_.to("cpu")
        self.module_.eval()

        return self

    def _train_loop(self, X_train, y_train, X_val, y_val, device) -> None:
        train_loader = DataLoader(
            TensorDataset(
                torch.from_numpy(X_train),
                torch.from_numpy(np.asarray(y_train, dtype=np.int64)),
            ),
            batch_size=self.batch_size,
            shuffle=True,  # shuffle each epoch for SGD
            num_workers=NUM_WORKERS,
        )

        criterion = nn.CrossEntropyLoss()
        optimizer = self._build_optimizer(self.module_)

        best_loss = math.inf
        best_score = -math.inf
        best_state = None
        previous_loss = math.inf
        stale_epochs = 0
        train_start = time.perf_counter()

        for epoch in range(1, self.epochs + 1):
            self.module_.train()
            running_loss = 0.0
            total = 0

            for features, labels in train_loader:
                features = features.to(device)
                labels = labels.to(device)

                optimizer.zero_grad()
                outputs = self.module_(features)
                loss = criterion(outputs, labels)
                loss.backward()
                optimizer.step()

                running_loss += loss.item() * features.size(0)
                total += labels.size(0)

            epoch_loss = running_loss / total

            if not math.isfinite(epoch_loss):
                print(f"[{self.tag}] Numerical instability detected at epoch {epoch}, stopping.")
                break

            self.losses_.append(epoch_loss)

            if X_val is not None:
                score = self._score_holdout(X_val, y_val, device)
                self.scores_.append(score)

                if self.verbose:
                    print(
                        f"[{self.tag}] Epoch [{epoch}/{self.epochs}] "
                        f"Loss: {epoch_loss:.4f} Score: {score:.4f}"
                    )

                if score > best_score:
                    best_score = score
                    best_state = copy.deepcopy(self.module_.state_dict())
                    stale_epochs = 0
                else:
                    stale_epochs += 1

                if score >= 1.0:
                    break
            else:
                if self.verbose:
                    print(f"[{self.tag}] Epoch [{epoch}/{self.epochs}] Loss: {epoch_loss:.4f}")

                if epoch_loss < best_loss:
                    best_loss = epoch_loss
                    stale_epochs = 0
                else:
                    stale_epochs += 1

            if stale_epochs >= self.window:
                break

            if abs(previous_loss - epoch_loss) < self.min_change:
                break

            previous_loss = epoch_loss

        if best_state is not None:
            self.module_.load_state_dict(best_state)

        if self.verbose:
            total_time = time.perf_counter() - train_start
            print(
                f"[{self.tag}] Training complete | Epochs: {len(self.losses_)} | "
                f"Total: {total_time:.2f} sec"
            )

    def _score_holdout(self, X_val, y_val, device) -> float:
        self.module_.eval()
        with torch.no_grad():
            outputs = self.module_(torch.from_numpy(X_val).to(device))
            _, predicted = torch.max(outputs, dim=1)
        return float(matthews_corrcoef(y_val, predicted.cpu().numpy()))

    # ---------------------------
    # Inference
    # ---------------------------

    def predict_proba(self, X) -> np.ndarray:
        """Return class probabilities with columns ordered as ``classes_``."""
        check_is_fitted(self, "module_")
        features = torch.from_numpy(np.asarray(X, dtype=np.float32))

        self.module_.eval()
        with torch.no_grad():
            probabilities = torch.softmax(self.module_(features), dim=1)

        return probabilities.numpy()

    def predict(self, X) -> np.ndarray:
        """Return the most probable label for every row of ``X``."""
        probabilities = self.predict_proba(X)
        return self.classes_[np.argmax(probabilities, axis=1)]

    def steps(self) -> tuple[float, ...]:
        """Loss value of every completed training epoch."""
        check_is_fitted(self, "module_")
        return tuple(self.losses_)

    def scores(self) -> tuple[float, ...]:
        """Holdout score of every completed epoch (empty without a holdout)."""
        check_is_fitted(self, "module_")
        return tuple(self.scores_)


class SoftmaxClassifier(_NeuralClassifier):
    """Multinomial logistic regression trained with momentum SGD.

    Parameters
    ----------
    batch_size:
        Rows per mini-batch.
    learning_rate, momentum:
        Passed to ``torch.optim.SGD``.
    alpha:
        L2 regularization strength (SGD weight decay).
    epochs:
        Upper bound on passes over the training set.
    min_change:
        Stop once the epoch loss changes by less than this amount.
    window:
        Stop after this many epochs without a new lowest loss.
    """

    tag = "Softmax"

    def __init__(
        self,
        batch_size: int = SOFTMAX_BATCH_SIZE,
        learning_rate: float = SOFTMAX_LEARNING_RATE,
        momentum: float = SOFTMAX_MOMENTUM,
        alpha: float = SOFTMAX_ALPHA,
        epochs: int = SOFTMAX_EPOCHS,
        min_change: float = SOFTMAX_MIN_CHANGE,
        window: int = SOFTMAX_WINDOW,
        random_state: Optional[int] = None,
        verbose: bool = False,
    ):
        self.batch_size = batch_size
        self.learning_rate = learning_rate
        self.momentum = momentum
        self.alpha = alpha
        self.epochs = epochs
        self.min_change = min_change
        self.window = window
        self.random_state = random_state
        self.verbose = verbose

    def _build_module(self, num_features: int, num_classes: int) -> nn.Module:
        return SoftmaxRegression(num_features, num_classes)

    def _build_optimizer(self, module: nn.Module) -> optim.Optimizer:
        return optim.SGD(
            module.parameters(),
            lr=self.learning_rate,
            momentum=self.momentum,
            weight_decay=self.alpha,
        )


class MLPClassifier(_NeuralClassifier):
    """Multilayer perceptron trained with Adam and holdout early stopping.

    A ``holdout`` fraction of the training rows is set aside and scored
    (Matthews correlation) after each epoch; the best-scoring weights are
    restored when training ends. With ``holdout=0`` the MLP falls back to
    the loss-based stopping rule of ``SoftmaxClassifier``.
    Training also ends as soon as the holdout score reaches 1.0, which on
    small datasets can happen after the first epoch.
    """

    tag = "MLP"

    def __init__(
        self,
        hidden_layers: Sequence[int] = MLP_HIDDEN_LAYERS,
        dropout: float = MLP_DROPOUT,
        batch_size: int = MLP_BATCH_SIZE,
        learning_rate: float = MLP_LEARNING_RATE,
        alpha: float = MLP_ALPHA,
        epochs: int = MLP_EPOCHS,
        min_change: float = MLP_MIN_CHANGE,
        window: int = MLP_WINDOW,
        holdout: float = MLP_HOLDOUT,
        random_state: Optional[int] = None,
        verbose: bool = False,
    ):
        self.hidden_layers = hidden_layers
        self.dropout = dropout
        self.batch_size = batch_size
        self.learning_rate = learning_rate
        self.alpha = alpha
        self.epochs = epochs
        self.min_change = min_change
        self.window = window
        self.holdout = holdout
        self.random_state = random_state
        self.verbose = verbose

    def _holdout_fraction(self) -> float:
        if not 0.0 <= self.holdout < 1.0:
            raise ValueError(f"holdout must be in [0, 1), got {self.holdout}.")
        return self.holdout

    def _build_module(self, num_features: int, num_classes: int) -> nn.Module:
        return MultilayerPerceptron(
            num_features,
            num_classes,
            hidden_layers=tuple(self.hidden_layers),
            dropout=self.dropout,
        )

    def _build_optimizer(self, module: nn.Module) -> optim.Optimizer:
        return optim.Adam(
            module.parameters(),
            lr=self.learning_rate,
            weight_decay=self.alpha,
        )


__all__ = ["SoftmaxClassifier", "MLPClassifier"]
