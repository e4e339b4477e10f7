"""Completion counts report: one row per training with its graduate count."""

from __future__ import annotations

from training_reports.index.completion_index import CompletionIndex
from training_reports.models.report import TrainingCount


def counts_report(index: CompletionIndex) -> list[TrainingCount]:
    """Return ``{Name, Count}`` rows in the index's first-encounter order.

    ``Count`` is the number of distinct people who completed the training;
    repeat completions by the same person do not add to it.
    """
    return [
        TrainingCount(name=entry.name, count=entry.graduate_count)
        for entry in index.values()
    ]
