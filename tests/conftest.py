"""
Shared pytest fixtures for the training reports test suite.

Provides:
  - ``sample_roster_json``: Raw roster records with a retaken training,
    never-expiring trainings, a person with no completions, and two people
    who share a name.
  - ``sample_people``: The same roster as validated ``Person`` objects.
  - ``roster_file``: The roster written to a temp file.
  - ``test_config`` / ``config_file``: Config with file logging disabled.

Expected values against ``sample_roster_json``
----------------------------------------------
Index order:  X-Ray Safety (2), Lab Basics (3), Electrical Safety for Labs (2)
FY2024:       X-Ray Safety → [Alice Smith]
              Lab Basics → [Alice Smith, Dan Brown]
              Electrical Safety for Labs → [Bob Jones, Dan Brown]
Expiry as of 10/01/2023:
              Bob Jones   → X-Ray Safety (soon), Electrical Safety for Labs (soon)
              Alice Smith → Lab Basics (expired)   [the second Alice]
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from training_reports.config import AppConfig, LoggingConfig, ReportsConfig
from training_reports.ingestion.roster_json import parse_roster
from training_reports.models.person import Person


# ── Roster fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def sample_roster_json() -> list[dict]:
    """Raw roster records in the on-disk shape."""
    return [
        {
            "name": "Alice Smith",
            "completions": [
                {"name": "X-Ray Safety", "timestamp": "03/01/2024", "expires": "10/01/2024"},
                {"name": "Lab Basics", "timestamp": "08/15/2023", "expires": None},
            ],
        },
        {
            "name": "Bob Jones",
            "completions": [
                # Retaken; only the 07/01/2024 completion is effective.
                {"name": "X-Ray Safety", "timestamp": "06/30/2023", "expires": "09/30/2023"},
                {"name": "X-Ray Safety", "timestamp": "07/01/2024", "expires": "10/15/2023"},
                {"name": "Electrical Safety for Labs", "timestamp": "07/01/2023", "expires": "11/01/2023"},
            ],
        },
        {
            "name": "Carol White",
            "completions": [],
        },
        {
            "name": "Dan Brown",
            "completions": [
                {"name": "Lab Basics", "timestamp": "06/30/2024"},
                {"name": "Electrical Safety for Labs", "timestamp": "01/10/2024", "expires": "11/02/2023"},
            ],
        },
        {
            "name": "Alice Smith",
            "completions": [
                {"name": "Lab Basics", "timestamp": "12/01/2023", "expires": "09/01/2023"},
            ],
        },
    ]


@pytest.fixture
def sample_people(sample_roster_json: list[dict]) -> list[Person]:
    """Validated ``Person`` objects for ``sample_roster_json``."""
    return parse_roster(sample_roster_json)


@pytest.fixture
def roster_file(tmp_path: Path, sample_roster_json: list[dict]) -> Path:
    """``sample_roster_json`` written to a temp JSON file."""
    path = tmp_path / "trainings.json"
    path.write_text(json.dumps(sample_roster_json), encoding="utf-8")
    return path


# ── Config fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def test_config(tmp_path: Path) -> AppConfig:
    """Default ``AppConfig`` writing under ``tmp_path`` with no log file."""
    return AppConfig(
        reports=ReportsConfig(output_dir=str(tmp_path / "outputs")),
        logging=LoggingConfig(log_file=""),
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A minimal TOML config file with file logging disabled."""
    path = tmp_path / "config" / "test.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "[reports]\n"
        f'output_dir = "{(tmp_path / "default_outputs").as_posix()}"\n'
        "\n"
        "[logging]\n"
        'level = "WARNING"\n'
        'log_file = ""\n',
        encoding="utf-8",
    )
    return path
