"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults (the model
                                     defaults stand in when it is absent)
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``TRAINING_REPORTS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The CLI and the report pipeline receive an ``AppConfig`` instance —
never raw dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

# ── Sub-config models ─────────────────────────────────────────────────────────


class ReportsConfig(BaseModel):
    """Output directory and file names for the generated reports."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"
    counts_filename: str = "CompletedTrainingsWithCounts.json"
    graduates_filename_template: str = "GraduatesFiscalYear{year}.json"
    expired_filename: str = "ExpiredTrainings.json"
    json_indent: int = 2

    @field_validator("graduates_filename_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        if "{year}" not in v:
            raise ValueError(
                f"graduates_filename_template must contain '{{year}}', got '{v}'."
            )
        return v

    @field_validator("json_indent")
    @classmethod
    def validate_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"json_indent must be >= 0, got {v}.")
        return v

    def graduates_filename(self, fiscal_year: int) -> str:
        return self.graduates_filename_template.format(year=fiscal_year)


class CalendarConfig(BaseModel):
    """Fiscal-year boundaries and the "expires soon" window."""

    model_config = ConfigDict(frozen=True)

    fiscal_year_start_month: int = 7
    fiscal_year_start_day: int = 1
    expiry_window_months: int = 1

    @field_validator("fiscal_year_start_month")
    @classmethod
    def validate_month(cls, v: int) -> int:
        if not 1 <= v <= 12:
            raise ValueError(f"fiscal_year_start_month must be in [1, 12], got {v}.")
        return v

    @field_validator("fiscal_year_start_day")
    @classmethod
    def validate_day(cls, v: int) -> int:
        # Capped at 28 so the start date exists in every month.
        if not 1 <= v <= 28:
            raise ValueError(f"fiscal_year_start_day must be in [1, 28], got {v}.")
        return v

    @field_validator("expiry_window_months")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"expiry_window_months must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/training_reports.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    ``AppConfig()`` with no arguments yields the built-in defaults.
    """

    model_config = ConfigDict(frozen=True)

    reports: ReportsConfig = ReportsConfig()
    calendar: CalendarConfig = CalendarConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that file is absent
            (e.g. a non-editable install) the built-in model defaults are
            used and the remaining layers still apply.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        config_path = root / "config" / "default.toml"
        if config_path.exists():
            raw = _read_toml(config_path)
        else:
            logger.debug("No %s; using built-in defaults.", config_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Create config/default.toml or pass --config."
            )
        raw = _read_toml(config_path)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply TRAINING_REPORTS_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply TRAINING_REPORTS_* env vars to the raw config dict.

    Supported overrides:
      TRAINING_REPORTS_OUTPUT_DIR  → raw["reports"]["output_dir"]
      TRAINING_REPORTS_LOG_LEVEL   → raw["logging"]["level"]
      TRAINING_REPORTS_DEBUG       → raw["debug"]
    """
    if output_dir := os.environ.get("TRAINING_REPORTS_OUTPUT_DIR"):
        raw.setdefault("reports", {})["output_dir"] = output_dir

    if log_level := os.environ.get("TRAINING_REPORTS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("TRAINING_REPORTS_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        reports=ReportsConfig(**raw.get("reports", {})),
        calendar=CalendarConfig(**raw.get("calendar", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
