"""
Tests for ReportOrchestrator.

Covers:
  - End-to-end run over the sample roster: all three files written.
  - Empty roster refused before any output.
  - Default output directory from config.
  - Failure isolation: one failing stage yields status "partial".
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from training_reports.pipeline.orchestrator import EmptyRosterError, ReportOrchestrator
from training_reports.pipeline.reports import ExpiryReportStage

TRAININGS = ["X-Ray Safety", "Lab Basics", "Electrical Safety for Labs", "Radiation Safety"]


def _run(config, people, out_dir=None):
    return ReportOrchestrator(config).run(
        people=people,
        reference_date=date(2023, 10, 1),
        fiscal_year=2024,
        trainings=TRAININGS,
        output_dir=out_dir,
    )


class TestOrchestratorSuccess:
    def test_writes_all_three_files(self, test_config, sample_people, tmp_path):
        result = _run(test_config, sample_people, tmp_path)
        assert result.status == "success"
        assert result.errors == []
        assert [Path(p).name for p in result.output_files] == [
            "CompletedTrainingsWithCounts.json",
            "GraduatesFiscalYear2024.json",
            "ExpiredTrainings.json",
        ]

    def test_counts(self, test_config, sample_people, tmp_path):
        result = _run(test_config, sample_people, tmp_path)
        assert result.people_count == 5
        assert result.training_count == 3
        assert [r.pipeline_stage for r in result.stage_runs] == [
            "counts_report", "fiscal_year_report", "expiry_report",
        ]
        assert result.started_at <= result.finished_at

    def test_file_contents(self, test_config, sample_people, tmp_path):
        _run(test_config, sample_people, tmp_path)
        graduates = json.loads((tmp_path / "GraduatesFiscalYear2024.json").read_text(encoding="utf-8"))
        assert [row["Training"] for row in graduates] == [
            "X-Ray Safety", "Lab Basics", "Electrical Safety for Labs",
        ]
        expired = json.loads((tmp_path / "ExpiredTrainings.json").read_text(encoding="utf-8"))
        assert expired[0]["Name"] == "Bob Jones"

    def test_default_output_dir_from_config(self, test_config, sample_people):
        result = _run(test_config, sample_people)
        out_dir = Path(test_config.reports.output_dir)
        assert (out_dir / "ExpiredTrainings.json").exists()
        assert all(Path(p).parent == out_dir for p in result.output_files)


class TestOrchestratorErrors:
    def test_empty_roster_raises(self, test_config, tmp_path):
        with pytest.raises(EmptyRosterError, match="No people found"):
            _run(test_config, [], tmp_path)
        assert list(tmp_path.iterdir()) == []

    def test_stage_failure_is_isolated(self, test_config, sample_people, tmp_path, monkeypatch):
        def _boom(self, run, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(ExpiryReportStage, "_execute", _boom)
        result = _run(test_config, sample_people, tmp_path)

        assert result.status == "partial"
        assert result.errors == ["expiry_report: disk full"]
        assert result.stage_runs[-1].status == "failed"
        assert len(result.output_files) == 2
        assert not (tmp_path / "ExpiredTrainings.json").exists()
