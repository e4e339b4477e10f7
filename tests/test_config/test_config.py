"""Tests for training_reports.config — defaults, validation, and layered loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from training_reports.config import (
    AppConfig,
    CalendarConfig,
    LoggingConfig,
    ReportsConfig,
    load_config,
)


class TestDefaults:
    def test_app_config_defaults(self):
        cfg = AppConfig()
        assert cfg.reports.counts_filename == "CompletedTrainingsWithCounts.json"
        assert cfg.reports.expired_filename == "ExpiredTrainings.json"
        assert cfg.reports.graduates_filename(2024) == "GraduatesFiscalYear2024.json"
        assert cfg.calendar.fiscal_year_start_month == 7
        assert cfg.calendar.fiscal_year_start_day == 1
        assert cfg.calendar.expiry_window_months == 1
        assert cfg.debug is False

    def test_frozen(self):
        with pytest.raises(Exception):
            AppConfig().debug = True


class TestValidation:
    def test_bad_month(self):
        with pytest.raises(ValidationError, match="fiscal_year_start_month"):
            CalendarConfig(fiscal_year_start_month=0)

    def test_bad_day(self):
        with pytest.raises(ValidationError, match="fiscal_year_start_day"):
            CalendarConfig(fiscal_year_start_day=31)

    def test_negative_window(self):
        with pytest.raises(ValidationError):
            CalendarConfig(expiry_window_months=-1)

    def test_template_needs_year(self):
        with pytest.raises(ValidationError, match="year"):
            ReportsConfig(graduates_filename_template="graduates.json")

    def test_negative_indent(self):
        with pytest.raises(ValidationError):
            ReportsConfig(json_indent=-2)

    def test_log_level_upper_cased(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")


class TestLoadConfig:
    def _write(self, tmp_path: Path, text: str) -> Path:
        path = tmp_path / "cfg" / "default.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_loads_sections(self, tmp_path):
        path = self._write(
            tmp_path,
            '[reports]\noutput_dir = "reports"\n\n[calendar]\nexpiry_window_months = 2\n',
        )
        cfg = load_config(path)
        assert cfg.reports.output_dir == "reports"
        assert cfg.calendar.expiry_window_months == 2

    def test_project_debug(self, tmp_path):
        cfg = load_config(self._write(tmp_path, "[project]\ndebug = true\n"))
        assert cfg.debug is True

    def test_local_toml_overrides(self, tmp_path):
        path = self._write(tmp_path, '[reports]\noutput_dir = "a"\njson_indent = 4\n')
        (path.parent / "local.toml").write_text('[reports]\noutput_dir = "b"\n', encoding="utf-8")
        cfg = load_config(path)
        assert cfg.reports.output_dir == "b"
        assert cfg.reports.json_indent == 4

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TRAINING_REPORTS_OUTPUT_DIR", "env_out")
        monkeypatch.setenv("TRAINING_REPORTS_LOG_LEVEL", "warning")
        monkeypatch.setenv("TRAINING_REPORTS_DEBUG", "yes")
        cfg = load_config(self._write(tmp_path, ""))
        assert cfg.reports.output_dir == "env_out"
        assert cfg.logging.level == "WARNING"
        assert cfg.debug is True


class TestLoadConfigWithoutDefaultFile:
    """An installed package ships no config/ directory next to it."""

    @pytest.fixture(autouse=True)
    def _empty_project_root(self, tmp_path, monkeypatch):
        monkeypatch.setattr("training_reports.config._find_project_root", lambda: tmp_path)
        for var in ("TRAINING_REPORTS_OUTPUT_DIR", "TRAINING_REPORTS_LOG_LEVEL", "TRAINING_REPORTS_DEBUG"):
            monkeypatch.delenv(var, raising=False)

    def test_falls_back_to_builtin_defaults(self):
        assert load_config() == AppConfig()

    def test_local_and_env_layers_still_apply(self, tmp_path, monkeypatch):
        local = tmp_path / "config" / "local.toml"
        local.parent.mkdir()
        local.write_text("[reports]\njson_indent = 4\n", encoding="utf-8")
        monkeypatch.setenv("TRAINING_REPORTS_OUTPUT_DIR", "env_out")

        cfg = load_config()
        assert cfg.reports.json_indent == 4
        assert cfg.reports.output_dir == "env_out"
        assert cfg.calendar == CalendarConfig()

    def test_explicit_missing_path_still_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "config" / "default.toml")
