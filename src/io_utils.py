"""io_utils.py

Writers for the files the scripts leave behind.

    progress.csv   loss[,score]    one row per training epoch
    embedding.csv  x,y[,label]     one row per embedded sample
    report.json    multiclass breakdown + confusion matrix

CSVs are written through pandas, so the header row appears exactly once,
as the first line, even when there are no data rows.
"""

from __future__ import annotations

import json
from typing import Optional, Sequence

import pandas as pd

from data_utils import LabeledDataset


def write_progress_csv(
    path: str,
    losses: Sequence[float],
    scores: Optional[Sequence[float]] = None,
) -> None:
    """Write the per-epoch loss (and optional score) history."""
    columns = {"loss": list(losses)}

    if scores is not None:
        if len(scores) != len(losses):
            raise ValueError(
                f"Got {len(scores)} scores for {len(losses)} losses; "
                "histories must have one entry per epoch."
            )
        columns["score"] = list(scores)

    pd.DataFrame(columns).to_csv(path, index=False)


def write_embedding_csv(
    path: str,
    embedding: LabeledDataset,
    include_labels: bool = True,
) -> None:
    """Write 2-D coordinates, optionally followed by each row's label."""
    if embedding.num_features != 2:
        raise ValueError(
            f"Expected 2-D coordinates, got {embedding.num_features} columns."
        )

    df = pd.DataFrame(embedding.samples, columns=["x", "y"])
    if include_labels:
        df["label"] = embedding.labels

    df.to_csv(path, index=False)


def write_report_json(path: str, report: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=4)


__all__ = ["write_progress_csv", "write_embedding_csv", "write_report_json"]
