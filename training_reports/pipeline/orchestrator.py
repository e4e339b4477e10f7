"""
Report orchestration for one roster.

The ``ReportOrchestrator`` runs the whole batch in a fixed sequence:

  Step 1 — Guard:        Refuse an empty roster (``EmptyRosterError``).
  Step 2 — Index:        ``build_index(people)`` once; the index is owned by
                         this run and discarded afterwards.
  Step 3 — Counts:       CountsReportStage.
  Step 4 — Fiscal year:  FiscalYearReportStage.
  Step 5 — Expiry:       ExpiryReportStage.

Failure isolation
-----------------
The three reports do not depend on each other.  A stage that raises is
recorded (``stage_runs`` entry with ``status='failed'`` plus a message in
``errors``) and the remaining stages still run.  Overall ``status`` is
``"success"`` when every stage succeeded, ``"failed"`` when none did, and
``"partial"`` otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from training_reports.config import AppConfig
from training_reports.index.completion_index import build_index
from training_reports.models.meta import RunMetadata
from training_reports.models.person import Person
from training_reports.pipeline.base import PipelineStage
from training_reports.pipeline.reports import (
    CountsReportStage,
    ExpiryReportStage,
    FiscalYearReportStage,
)
from training_reports.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class EmptyRosterError(ValueError):
    """Raised when the roster holds no people; no reports are generated."""


# ── Result types ──────────────────────────────────────────────────────────────

@dataclass
class OrchestratorResult:
    """Complete result of one report run.

    Attributes:
        started_at:     UTC datetime when the run started.
        finished_at:    UTC datetime when the run finished.
        people_count:   People in the roster.
        training_count: Distinct training names in the completion index.
        stage_runs:     One ``RunMetadata`` per stage, in execution order.
        errors:         Accumulated error messages.
        status:         "success", "partial", or "failed".
    """

    started_at:     Optional[datetime]  = None
    finished_at:    Optional[datetime]  = None
    people_count:   int                 = 0
    training_count: int                 = 0
    stage_runs:     list[RunMetadata]   = field(default_factory=list)
    errors:         list[str]           = field(default_factory=list)
    status:         str                 = "started"

    @property
    def output_files(self) -> list[str]:
        """Paths written by successful stages."""
        return [
            r.output_path for r in self.stage_runs
            if r.status == "success" and r.output_path
        ]


# ── Orchestrator ──────────────────────────────────────────────────────────────

class ReportOrchestrator:
    """Build the completion index and generate all three reports.

    Args:
        config: Application configuration.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(
        self,
        people: list[Person],
        reference_date: date,
        fiscal_year: int,
        trainings: list[str],
        output_dir: Optional[Path] = None,
    ) -> OrchestratorResult:
        """Generate the counts, fiscal-year, and expiry reports.

        Args:
            people:         Validated roster.
            reference_date: Date the expiry report is evaluated against.
            fiscal_year:    Fiscal year for the graduates report.
            trainings:      Trainings to include in the graduates report.
            output_dir:     Destination directory; defaults to
                            ``config.reports.output_dir``.

        Returns:
            ``OrchestratorResult`` describing every stage.

        Raises:
            EmptyRosterError: If ``people`` is empty.
        """
        if not people:
            raise EmptyRosterError("No people found in the provided file.")

        out_dir = Path(output_dir) if output_dir else Path(self.config.reports.output_dir)
        result = OrchestratorResult(started_at=utcnow(), people_count=len(people))

        index = build_index(people)
        result.training_count = len(index)
        logger.info(
            "Indexed %d trainings across %d people", len(index), len(people)
        )

        stage_kwargs = dict(
            index=index,
            people=people,
            output_dir=out_dir,
            reference_date=reference_date,
            fiscal_year=fiscal_year,
            trainings=list(trainings),
        )
        stages: list[PipelineStage] = [
            CountsReportStage(self.config),
            FiscalYearReportStage(self.config),
            ExpiryReportStage(self.config),
        ]
        for stage in stages:
            self._run_stage(stage, result, **stage_kwargs)

        failed = sum(1 for r in result.stage_runs if r.status == "failed")
        if failed == 0:
            result.status = "success"
        elif failed == len(stages):
            result.status = "failed"
        else:
            result.status = "partial"

        result.finished_at = utcnow()
        logger.info(
            "Report run finished | status=%s | files=%d",
            result.status, len(result.output_files),
        )
        return result

    def _run_stage(
        self,
        stage: PipelineStage,
        result: OrchestratorResult,
        **kwargs,
    ) -> None:
        """Run one stage, recording its outcome on ``result``."""
        try:
            run = stage.run(**kwargs)
        except Exception as exc:
            run = stage.last_run
            result.errors.append(f"{stage.stage_name}: {exc}")
        result.stage_runs.append(run)
