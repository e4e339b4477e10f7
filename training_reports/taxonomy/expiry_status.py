"""
Expiry status taxonomy for completed trainings.

Every completion is classified relative to a reference date into exactly one
``ExpiryStatus``.  The enum values double as the labels written to the
``Expires`` field of ``ExpiredTrainings.json``.

Usage example::

    from training_reports.taxonomy.expiry_status import ExpiryStatus

    if status is ExpiryStatus.EXPIRING_SOON:
        ...

This module has NO imports from any other ``training_reports`` package.
"""

from enum import StrEnum


class ExpiryStatus(StrEnum):
    """Where a completion stands relative to its expiry date."""

    EXPIRED = "Expired"
    """Expiry date is strictly before the reference date."""

    EXPIRING_SOON = "Expires soon"
    """Expires on or after the reference date, within the warning window."""

    NOT_EXPIRED = "Not expired"
    """Never expires, or expires after the warning window."""

    @property
    def is_reportable(self) -> bool:
        """True for statuses that belong in the expiry report."""
        return self is not ExpiryStatus.NOT_EXPIRED
