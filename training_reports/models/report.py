"""
Report row models — the shapes written to the three output JSON files.

Field names are snake_case in Python and PascalCase on disk.  Always dump with
``model_dump(by_alias=True)`` (see ``rows_to_json``) so the files read::

    CompletedTrainingsWithCounts.json  [{"Name": ..., "Count": ...}]
    GraduatesFiscalYear<Year>.json     [{"Training": ..., "Graduates": [...]}]
    ExpiredTrainings.json              [{"Name": ..., "Trainings": [{"Training": ..., "Expires": ...}]}]
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

from training_reports.taxonomy.expiry_status import ExpiryStatus


class TrainingCount(BaseModel):
    """A training and the number of distinct people who completed it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Name")
    count: int = Field(alias="Count", ge=0)


class FiscalYearGraduates(BaseModel):
    """A requested training and who completed it within the fiscal year."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    training: str = Field(alias="Training")
    graduates: list[str] = Field(alias="Graduates", default_factory=list)


class ExpiredTraining(BaseModel):
    """A training that is expired or expires soon, with its status label."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    training: str = Field(alias="Training")
    expires: ExpiryStatus = Field(alias="Expires")


class PersonExpiry(BaseModel):
    """A person with at least one expired or soon-to-expire training."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Name")
    trainings: list[ExpiredTraining] = Field(alias="Trainings", default_factory=list)


def rows_to_json(rows: Iterable[BaseModel]) -> list[dict[str, Any]]:
    """Dump report rows to JSON-ready dicts using their on-disk field names."""
    return [row.model_dump(mode="json", by_alias=True) for row in rows]
