"""
ASCII terminal formatters for the CLI.

All formatters return plain multi-line strings suitable for ``typer.echo()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from training_reports.pipeline.orchestrator import OrchestratorResult


def format_training_list(trainings: list[str]) -> str:
    """Join training names for display, e.g. ``"Lab Basics, X-Ray Safety"``."""
    return ", ".join(trainings)


def format_run_summary(result: "OrchestratorResult") -> str:
    """Summarise an orchestrator run: one line per stage plus overall status."""
    lines: list[str] = ["", "=== Report Run Summary ==="]
    lines.append(f"  People:    {result.people_count}")
    lines.append(f"  Trainings: {result.training_count}")
    lines.append("")
    for run in result.stage_runs:
        target = run.output_path or "-"
        lines.append(
            f"  {run.pipeline_stage:<20} {run.status:<8} rows={run.rows_processed:<5} {target}"
        )
    for err in result.errors:
        lines.append(f"  ! {err}")
    lines.append("")
    lines.append(f"  Status: {result.status.upper()}")
    return "\n".join(lines)
