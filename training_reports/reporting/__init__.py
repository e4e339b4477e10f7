"""
training_reports.reporting — Report generation, export, and formatting.

Modules:
  counts     — Completion counts per training.
  graduates  — Graduates per requested training within a fiscal year.
  expiry     — People with expired or soon-to-expire trainings.
  export     — Pretty-printed JSON file writers.
  formatters — ASCII terminal formatters for Typer CLI commands.
"""
