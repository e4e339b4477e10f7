"""
training_reports.ingestion — Roster input parsing.

Modules:
  roster_json — Load and validate the JSON roster of people and completions.
"""
