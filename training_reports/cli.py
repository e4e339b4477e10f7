"""
Training Reports — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action.
  5. Report result to stdout; errors go to stderr in red.

Install and run::

    pip install -e .
    training-reports --help
    training-reports validate-config
    training-reports generate \\
        --training-data data/trainings.txt \\
        --output-directory data/outputs \\
        --expiry-threshold-date 10/01/2023 \\
        --fiscal-year 2024 \\
        --training "Electrical Safety for Labs" --training "X-Ray Safety"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="training-reports",
    help="Generate training completion, fiscal-year graduate, and expiry reports.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _write_error(message: str) -> None:
    """Write an error line to stderr in red."""
    typer.secho(message, fg=typer.colors.RED, err=True)


def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from training_reports.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        _write_error(f"[ERROR] {exc}")
        raise typer.Exit(code=1)
    except Exception as exc:
        _write_error(f"[ERROR] Config validation failed: {exc}")
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from training_reports.utils.logging import configure_logging
    configure_logging(config.logging)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("generate")
def generate(
    training_data: str = typer.Option(
        ...,
        "--training-data",
        help="Path to the training JSON data file.",
    ),
    expiry_threshold_date: str = typer.Option(
        ...,
        "--expiry-threshold-date",
        help="Expiration threshold date in MM/DD/YYYY format.",
    ),
    fiscal_year: int = typer.Option(
        ...,
        "--fiscal-year",
        help="Fiscal year that trainings have been completed in (July 1 of the "
             "previous year through June 30).",
    ),
    trainings: Optional[List[str]] = typer.Option(
        None,
        "--training",
        "--training-list",
        help='Required training name. Repeat the flag, or list several names '
             'after it (e.g. --training-list "Electrical Safety for Labs" '
             '"X-Ray Safety"). A name given twice yields one report row.',
    ),
    more_trainings: Optional[List[str]] = typer.Argument(
        None,
        metavar="[TRAINING]...",
        help="Further training names following --training / --training-list.",
        show_default=False,
    ),
    output_directory: Optional[str] = typer.Option(
        None,
        "--output-directory",
        help="Directory where the output files are written. Defaults to "
             "reports.output_dir from config.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Generate all three reports from a training roster.

    \b
    Outputs (pretty-printed JSON):
      CompletedTrainingsWithCounts.json — completion count per training
      GraduatesFiscalYear<Year>.json    — graduates per requested training
      ExpiredTrainings.json             — expired / expiring-soon trainings

    Only the most recent completion of a retaken training is considered.
    """
    from training_reports.ingestion.roster_json import load_roster
    from training_reports.pipeline.orchestrator import EmptyRosterError, ReportOrchestrator
    from training_reports.reporting.formatters import format_run_summary, format_training_list
    from training_reports.utils.time_utils import format_date, parse_date

    # Click options take one value per flag; names after the first land here.
    trainings = [*(trainings or []), *(more_trainings or [])]
    if not trainings:
        raise typer.BadParameter(
            "At least one training name is required.", param_hint="'--training'"
        )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    data_path = Path(training_data)
    if not data_path.is_file():
        _write_error(f"Error: The file '{training_data}' does not exist.")
        raise typer.Exit(code=1)

    try:
        threshold = parse_date(expiry_threshold_date)
    except ValueError:
        _write_error("Error: The date provided is not in a valid format (MM/DD/YYYY).")
        raise typer.Exit(code=1)

    out_dir = Path(output_directory or config.reports.output_dir)

    typer.echo(f"Processing file: {data_path}")
    typer.echo(f"Output directory: {out_dir}")
    typer.echo(f"Threshold date: {format_date(threshold)}")
    typer.echo(f"Fiscal year: {fiscal_year}")
    typer.echo(f"Trainings: {format_training_list(trainings)}")

    try:
        people = load_roster(data_path)
    except ValueError as exc:
        _write_error("Error parsing JSON file:")
        _write_error(str(exc))
        raise typer.Exit(code=1)

    try:
        result = ReportOrchestrator(config).run(
            people=people,
            reference_date=threshold,
            fiscal_year=fiscal_year,
            trainings=trainings,
            output_dir=out_dir,
        )
    except EmptyRosterError as exc:
        _write_error(f"Error: {exc}")
        raise typer.Exit(code=1)

    for path in result.output_files:
        typer.echo(f"Output written to: {path}")
    typer.echo(format_run_summary(result))

    if result.status != "success":
        for err in result.errors:
            _write_error(f"[ERROR] {err}")
        raise typer.Exit(code=1)

    typer.echo("[OK] Reports generated.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    cal = config.calendar

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Output directory:   {config.reports.output_dir}")
    typer.echo(f"  Fiscal year starts: {cal.fiscal_year_start_month:02d}/{cal.fiscal_year_start_day:02d}")
    typer.echo(f"  Expiry window:      {cal.expiry_window_months} month(s)")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
