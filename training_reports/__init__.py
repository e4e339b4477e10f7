"""Training completion, fiscal-year graduate, and expiry reports."""

__version__ = "0.1.0"
