"""
Graduates-by-fiscal-year report.

For each requested training, lists the people whose *most recent* completion
of that training falls inside the fiscal year.  A person who completed the
training inside the window but retook it afterwards is not listed: only the
latest completion counts.

Requested trainings that nobody completed are skipped without error.
Graduate names are de-duplicated by value (the roster carries no stable
person id), so two people sharing a name appear once.
"""

from __future__ import annotations

import logging
from typing import Iterable

from training_reports.index.completion_index import CompletionIndex, lookup
from training_reports.models.report import FiscalYearGraduates
from training_reports.utils.time_utils import (
    FISCAL_YEAR_START_DAY,
    FISCAL_YEAR_START_MONTH,
    fiscal_year_range,
    in_fiscal_year,
)

logger = logging.getLogger(__name__)


def fiscal_year_report(
    index: CompletionIndex,
    fiscal_year: int,
    requested_trainings: Iterable[str],
    start_month: int = FISCAL_YEAR_START_MONTH,
    start_day: int = FISCAL_YEAR_START_DAY,
) -> list[FiscalYearGraduates]:
    """Build the ``{Training, Graduates}`` rows for a fiscal year.

    Args:
        index: Completion index for the roster.
        fiscal_year: Fiscal year to report on.
        requested_trainings: Training names, in output order.  Matched
            exactly against the index; a repeated name yields one row.
        start_month: Fiscal year start month.
        start_day: Fiscal year start day.

    Returns:
        One row per requested training present in the index.  A training
        with no graduates in the window still gets a row with an empty list.
    """
    start, end = fiscal_year_range(fiscal_year, start_month, start_day)
    rows: list[FiscalYearGraduates] = []
    seen_trainings: set[str] = set()

    for training_name in requested_trainings:
        if training_name in seen_trainings:
            continue
        seen_trainings.add(training_name)

        entry = lookup(index, training_name)
        if entry is None:
            logger.debug("No completions of '%s' in roster; skipping.", training_name)
            continue

        # dict as an ordered set
        graduates: dict[str, None] = {}
        for person in entry:
            latest = person.latest_completion(entry.name)
            if latest is not None and in_fiscal_year(
                latest.completed_on, fiscal_year, start_month, start_day
            ):
                graduates.setdefault(person.name, None)

        rows.append(FiscalYearGraduates(training=entry.name, graduates=list(graduates)))

    logger.debug(
        "Fiscal year %d (%s .. %s): %d training row(s)", fiscal_year, start, end, len(rows)
    )
    return rows
