"""
Expired / expiring-soon report.

For every person, each effective completion (the latest per training) is
classified against the reference date:

  "Expired"       — expiry date is before the reference date
  "Expires soon"  — expiry date is on or after the reference date and no later
                    than the reference date plus the warning window
  (omitted)       — never expires, or expires after the window

People with nothing to report are left out entirely.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from training_reports.models.person import Person
from training_reports.models.report import ExpiredTraining, PersonExpiry
from training_reports.utils.time_utils import classify_expiry

logger = logging.getLogger(__name__)


def expired_trainings_for(
    person: Person,
    reference_date: date,
    window_months: int = 1,
) -> list[ExpiredTraining]:
    """Return the person's expired and soon-to-expire trainings, in
    first-completion order."""
    result: list[ExpiredTraining] = []
    for completion in person.latest_completions():
        status = classify_expiry(completion.expires_on, reference_date, window_months)
        if status.is_reportable:
            result.append(ExpiredTraining(training=completion.name, expires=status))
    return result


def expiry_report(
    people: Iterable[Person],
    reference_date: date,
    window_months: int = 1,
) -> list[PersonExpiry]:
    """Build the ``{Name, Trainings}`` rows for the expiry report.

    Args:
        people: The roster, in output order.
        reference_date: Date the expiry status is evaluated against.
        window_months: Calendar months in the "expires soon" window.

    Returns:
        One row per person with at least one expired or soon-to-expire
        training.
    """
    rows: list[PersonExpiry] = []
    for person in people:
        trainings = expired_trainings_for(person, reference_date, window_months)
        if trainings:
            rows.append(PersonExpiry(name=person.name, trainings=trainings))

    logger.debug(
        "Expiry report as of %s: %d person row(s)", reference_date.isoformat(), len(rows)
    )
    return rows
