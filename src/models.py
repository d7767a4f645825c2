"""models.py

Model definitions for the HAR classifiers.

The idea is to keep this file focused purely on network *architecture*.
Training logic (loss functions, optimizers, loops, stopping rules) is
handled in ``estimators.py``.

"""

from __future__ import annotations

from typing import Sequence

import torch
import torch.nn as nn


class SoftmaxRegression(nn.Module):
    """Multinomial logistic regression as a single linear layer.

    Input:  (N, num_features)
    Output: (N, num_classes) logits

    The softmax itself is applied by ``nn.CrossEntropyLoss`` during
    training and by ``torch.softmax`` when probabilities are requested.
    """

    def __init__(self, num_features: int, num_classes: int):
        super().__init__()
        self.linear = nn.Linear(num_features, num_classes)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.linear(x)


class MultilayerPerceptron(nn.Module):
    """Fully connected network with LeakyReLU hidden layers.

    Architecture (defaults from config)
    -----------------------------------
    Input:  (N, num_features)

    For each width in ``hidden_layers``:
        Linear -> LeakyReLU -> Dropout(p=dropout)

    Output: Linear to ``num_classes`` logits.

    ``dropout`` of 0 skips the Dropout layers entirely.
    """

    def __init__(
        self,
        num_features: int,
        num_classes: int,
        hidden_layers: Sequence[int] = (100,),
        dropout: float = 0.0,
    ):
        super().__init__()

        if not hidden_layers:
            raise ValueError("MultilayerPerceptron needs at least one hidden layer.")

        layers: list[nn.Module] = []
        in_features = num_features

        for width in hidden_layers:
            layers.append(nn.Linear(in_features, width))
            layers.append(nn.LeakyReLU())
            if dropout > 0:
                layers.append(nn.Dropout(p=dropout))
            in_features = width

        self.hidden = nn.Sequential(*layers)
        self.output = nn.Linear(in_features, num_classes)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """Compute class logits of shape (batch_size, num_classes)."""
        x = self.hidden(x)
        logits = self.output(x)
        return logits
