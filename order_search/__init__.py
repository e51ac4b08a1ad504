"""Fuzzy search, ranking and filtering for transportation orders."""

__version__ = "1.0.0"
