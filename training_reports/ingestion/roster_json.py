"""
JSON roster loader.

Format — a JSON array of person objects::

    [
      {
        "name": "Alice Smith",
        "completions": [
          {"name": "X-Ray Safety", "timestamp": "03/01/2024", "expires": "10/01/2024"}
        ]
      }
    ]

Property names are case-insensitive (``Name``, ``NAME`` and ``name`` are all
accepted).  ``timestamp`` is required; ``expires`` may be omitted, ``null``,
or an empty string, all meaning "never expires".

Date formats:
  timestamp / expires → MM/DD/YYYY (or ISO YYYY-MM-DD)

A top-level ``null`` yields an empty roster; deciding whether an empty roster
is an error is left to the caller.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from training_reports.models.person import Person

logger = logging.getLogger(__name__)


def parse_roster(raw: Any, source: str = "<roster>") -> list[Person]:
    """Convert decoded roster JSON into validated :class:`Person` objects.

    All entries are validated before any are returned.  If **any** entry
    fails, a single :class:`ValueError` is raised listing the first 10
    failures.

    Args:
        raw: Decoded JSON value (expected: list of dicts, or ``None``).
        source: Label used in error messages (usually the file name).

    Returns:
        List of validated :class:`Person` instances, in input order.

    Raises:
        ValueError: If ``raw`` is not an array or any entry fails validation.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(
            f"Roster in {source} must be a JSON array, got {type(raw).__name__}."
        )

    people: list[Person] = []
    errors: list[tuple[int, str]] = []

    for i, entry in enumerate(raw):
        try:
            people.append(Person.model_validate(entry))
        except ValidationError as exc:
            errors.append((i, str(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Person #{idx}: {msg}" for idx, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ValueError(
            f"{len(errors)} person record(s) failed validation in {source}:\n{detail}{suffix}"
        )

    return people


def load_roster(path: Path) -> list[Person]:
    """Read and validate a roster JSON file.

    Args:
        path: Path to the roster file (must exist).

    Returns:
        List of validated :class:`Person` instances, in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not valid JSON or fails validation.
    """
    if not path.exists():
        raise FileNotFoundError(f"The file '{path}' does not exist.")

    logger.info("Loading roster from %s", path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc

    people = parse_roster(raw, source=path.name)
    completions = sum(len(p.completions) for p in people)
    logger.info(
        "Parsed %d people with %d completions from %s",
        len(people), completions, path.name,
    )
    return people
