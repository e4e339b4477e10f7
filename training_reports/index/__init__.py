"""
training_reports.index — In-memory lookups built from a roster.

Modules:
  completion_index — Training name → graduates mapping.
"""
