"""Tests for training_reports.reporting.counts."""

from __future__ import annotations

from training_reports.index.completion_index import build_index
from training_reports.models.report import TrainingCount, rows_to_json
from training_reports.reporting.counts import counts_report


def test_counts_in_index_order(sample_people) -> None:
    rows = counts_report(build_index(sample_people))
    assert [(r.name, r.count) for r in rows] == [
        ("X-Ray Safety", 2),
        ("Lab Basics", 3),
        ("Electrical Safety for Labs", 2),
    ]


def test_counts_empty_index() -> None:
    assert counts_report({}) == []


def test_counts_rows_are_models(sample_people) -> None:
    rows = counts_report(build_index(sample_people))
    assert all(isinstance(r, TrainingCount) for r in rows)


def test_counts_serialise_with_pascal_case(sample_people) -> None:
    rows = rows_to_json(counts_report(build_index(sample_people)))
    assert rows[0] == {"Name": "X-Ray Safety", "Count": 2}
