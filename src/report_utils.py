"""report_utils.py

Classification quality reports for the validation script.

Two reports are generated from predictions and ground-truth labels:

    * a multiclass breakdown: overall scores plus per-class precision,
      recall, F1, Matthews correlation and raw TP/FP/TN/FN counts;
    * a confusion matrix keyed ``actual -> predicted -> count``.

Both are plain dicts of Python scalars so they serialize to JSON as-is.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from sklearn import metrics


def _class_domain(predictions: np.ndarray, labels: np.ndarray) -> list[str]:
    return sorted(set(labels.tolist()) | set(predictions.tolist()))


def _as_arrays(predictions: Sequence, labels: Sequence) -> tuple[np.ndarray, np.ndarray]:
    predictions = np.asarray(predictions).astype(str)
    labels = np.asarray(labels).astype(str)

    if predictions.shape[0] != labels.shape[0]:
        raise ValueError(
            f"Number of predictions ({predictions.shape[0]}) does not match "
            f"number of labels ({labels.shape[0]})."
        )
    if labels.shape[0] == 0:
        raise ValueError("Cannot build a report from zero predictions.")

    return predictions, labels


def multiclass_breakdown(predictions: Sequence, labels: Sequence) -> dict:
    """Overall and per-class classification scores."""
    predictions, labels = _as_arrays(predictions, labels)
    classes = _class_domain(predictions, labels)
    n = labels.shape[0]

    matrix = metrics.confusion_matrix(labels, predictions, labels=classes)

    precision, recall, f1, support = metrics.precision_recall_fscore_support(
        labels, predictions, labels=classes, zero_division=0
    )

    per_class = {}
    for i, label in enumerate(classes):
        tp = int(matrix[i, i])
        fn = int(matrix[i, :].sum()) - tp
        fp = int(matrix[:, i].sum()) - tp
        tn = n - tp - fn - fp

        actual_binary = labels == label
        predicted_binary = predictions == label

        per_class[label] = {
            "accuracy": (tp + tn) / n,
            "precision": float(precision[i]),
            "recall": float(recall[i]),
            "specificity": tn / (tn + fp) if tn + fp else 0.0,
            "f1_score": float(f1[i]),
            "mcc": float(metrics.matthews_corrcoef(actual_binary, predicted_binary)),
            "true_positives": tp,
            "false_positives": fp,
            "true_negatives": tn,
            "false_negatives": fn,
            "cardinality": int(support[i]),
            "proportion": int(support[i]) / n,
        }

    misclassifications = int(np.sum(predictions != labels))

    overall = {
        "accuracy": float(metrics.accuracy_score(labels, predictions)),
        "balanced_accuracy": float(metrics.balanced_accuracy_score(labels, predictions)),
        "precision": float(metrics.precision_score(
            labels, predictions, labels=classes, average="macro", zero_division=0
        )),
        "recall": float(metrics.recall_score(
            labels, predictions, labels=classes, average="macro", zero_division=0
        )),
        "f1_score": float(metrics.f1_score(
            labels, predictions, labels=classes, average="macro", zero_division=0
        )),
        "mcc": float(metrics.matthews_corrcoef(labels, predictions)),
        "misclassifications": misclassifications,
        "error_rate": misclassifications / n,
        "classes": len(classes),
        "cardinality": n,
    }

    return {"overall": overall, "classes": per_class}


def confusion_matrix(predictions: Sequence, labels: Sequence) -> dict:
    """Counts keyed by actual label, then predicted label."""
    predictions, labels = _as_arrays(predictions, labels)
    classes = _class_domain(predictions, labels)

    matrix = metrics.confusion_matrix(labels, predictions, labels=classes)

    return {
        actual: {
            predicted: int(matrix[i, j])
            for j, predicted in enumerate(classes)
        }
        for i, actual in enumerate(classes)
    }


def generate_report(predictions: Sequence, labels: Sequence) -> dict:
    """Aggregate the breakdown and confusion matrix into one report."""
    return {
        "multiclass_breakdown": multiclass_breakdown(predictions, labels),
        "confusion_matrix": confusion_matrix(predictions, labels),
    }


__all__ = ["multiclass_breakdown", "confusion_matrix", "generate_report"]
