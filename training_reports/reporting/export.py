"""
JSON export helpers for the generated reports.

All functions write to disk and return the written ``Path``.
``export_to_json`` accepts plain ``dict`` / ``list`` data to stay decoupled
from specific report shapes; ``export_report_rows`` dumps report row models
by alias first so the files carry their PascalCase field names.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel

from training_reports.models.report import rows_to_json


def export_to_json(
    data: dict | list,
    path: Path,
    indent: int = 2,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data:   Dict or list to serialise.
        path:   Destination file path (parent dirs created if missing).
        indent: Indentation width.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=indent, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    return path


def export_report_rows(
    rows: Iterable[BaseModel],
    path: Path,
    indent: int = 2,
) -> Path:
    """Write report row models to ``path`` as a JSON array."""
    return export_to_json(rows_to_json(rows), path, indent=indent)
