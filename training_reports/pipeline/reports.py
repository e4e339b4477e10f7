"""
Report stages — one ``PipelineStage`` per output file.

  CountsReportStage      → CompletedTrainingsWithCounts.json
  FiscalYearReportStage  → GraduatesFiscalYear<Year>.json
  ExpiryReportStage      → ExpiredTrainings.json

Each stage reads the shared completion index (or the roster) without
modifying it, writes exactly one file under ``output_dir``, records the path
on the run, and returns the number of top-level rows written.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from training_reports.index.completion_index import CompletionIndex
from training_reports.models.meta import RunMetadata
from training_reports.models.person import Person
from training_reports.pipeline.base import PipelineStage
from training_reports.reporting.counts import counts_report
from training_reports.reporting.expiry import expiry_report
from training_reports.reporting.export import export_report_rows
from training_reports.reporting.graduates import fiscal_year_report

logger = logging.getLogger(__name__)


class CountsReportStage(PipelineStage):
    """Write completion counts per training."""

    stage_name = "counts_report"

    def _execute(
        self,
        run: RunMetadata,
        index: CompletionIndex,
        output_dir: Path,
        **kwargs,
    ) -> int:
        rows = counts_report(index)
        retakes = sum(
            entry.completions_by(person) - 1
            for entry in index.values()
            for person in entry
        )
        if retakes:
            logger.info("%d repeat completion(s) not counted towards graduates", retakes)

        path = output_dir / self.config.reports.counts_filename
        export_report_rows(rows, path, indent=self.config.reports.json_indent)
        run.output_path = str(path)
        logger.info("Output written to: %s", path)
        return len(rows)


class FiscalYearReportStage(PipelineStage):
    """Write graduates per requested training for one fiscal year."""

    stage_name = "fiscal_year_report"

    def _execute(
        self,
        run: RunMetadata,
        index: CompletionIndex,
        output_dir: Path,
        fiscal_year: int,
        trainings: list[str],
        people: Optional[list[Person]] = None,
        **kwargs,
    ) -> int:
        cal = self.config.calendar
        rows = fiscal_year_report(
            index,
            fiscal_year,
            trainings,
            start_month=cal.fiscal_year_start_month,
            start_day=cal.fiscal_year_start_day,
        )
        skipped = [t for t in dict.fromkeys(trainings) if t not in index]
        if skipped:
            logger.info("Requested trainings with no completions: %s", ", ".join(skipped))
        if people:
            for training in dict.fromkeys(trainings):
                outstanding = sum(1 for p in people if not p.has_completed_training(training))
                logger.info(
                    "'%s': %d of %d people have never completed it",
                    training, outstanding, len(people),
                )

        path = output_dir / self.config.reports.graduates_filename(fiscal_year)
        export_report_rows(rows, path, indent=self.config.reports.json_indent)
        run.output_path = str(path)
        logger.info("Graduate list for fiscal year %d written to: %s", fiscal_year, path)
        return len(rows)


class ExpiryReportStage(PipelineStage):
    """Write people with expired or soon-to-expire trainings."""

    stage_name = "expiry_report"

    def _execute(
        self,
        run: RunMetadata,
        people: list[Person],
        output_dir: Path,
        reference_date: date,
        **kwargs,
    ) -> int:
        rows = expiry_report(
            people,
            reference_date,
            window_months=self.config.calendar.expiry_window_months,
        )
        path = output_dir / self.config.reports.expired_filename
        export_report_rows(rows, path, indent=self.config.reports.json_indent)
        run.output_path = str(path)
        logger.info("Expired trainings written to: %s", path)
        return len(rows)
