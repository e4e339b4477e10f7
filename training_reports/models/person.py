"""
Roster models — people and the trainings they have completed.

``Person`` is the unit of the input roster.  Each person owns an ordered list
of ``Completion`` records; the same training may appear more than once when it
was retaken.  Only the most recent completion of a training is *effective*:
``Person.latest_completions()`` collapses repeats to the completion with the
latest ``completed_on`` and is what the fiscal-year and expiry reports use.

JSON shape (property names are matched case-insensitively)::

    {
      "name": "Alice Smith",
      "completions": [
        {"name": "X-Ray Safety", "timestamp": "03/01/2024", "expires": "10/01/2024"},
        {"name": "Lab Basics",   "timestamp": "01/15/2023", "expires": null}
      ]
    }

Training names compare case-sensitively everywhere in the system.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from training_reports.utils.time_utils import parse_date


def _lowercase_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
    return data


class Completion(BaseModel):
    """One completed training.

    Attributes:
        name: Name of the completed training (JSON ``name``).
        completed_on: Date of completion (JSON ``timestamp``).
        expires_on: Date after which the completion is no longer valid
            (JSON ``expires``); ``None`` means it never expires.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    completed_on: date = Field(alias="timestamp")
    expires_on: Optional[date] = Field(default=None, alias="expires")

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        return _lowercase_keys(data)

    @field_validator("completed_on", mode="before")
    @classmethod
    def parse_completed_on(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_date(v)
        return v

    @field_validator("expires_on", mode="before")
    @classmethod
    def parse_expires_on(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_date(v) if v.strip() else None
        return v


class Person(BaseModel):
    """A person and their completed trainings, in input order.

    Names are not unique; aggregation code that must tell two people apart
    uses object identity.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    completions: list[Completion] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        data = _lowercase_keys(data)
        if isinstance(data, dict) and data.get("completions") is None:
            data["completions"] = []
        return data

    def has_completed_training(self, training_name: str) -> bool:
        """Return ``True`` if the person has any completion of ``training_name``,
        regardless of expiry."""
        return any(c.name == training_name for c in self.completions)

    def latest_completion(self, training_name: str) -> Optional[Completion]:
        """Return the most recent completion of ``training_name``, or ``None``.

        When two completions share the latest date, the later one in input
        order wins.
        """
        latest: Optional[Completion] = None
        for c in self.completions:
            if c.name != training_name:
                continue
            if latest is None or c.completed_on >= latest.completed_on:
                latest = c
        return latest

    def latest_completions(self) -> list[Completion]:
        """Return one effective completion per training name.

        Order follows the first appearance of each training name; the
        completion kept for each is the one ``latest_completion`` would pick.
        """
        latest: dict[str, Completion] = {}
        for c in self.completions:
            current = latest.get(c.name)
            if current is None or c.completed_on >= current.completed_on:
                latest[c.name] = c
        return list(latest.values())
