"""Utility functions."""

from emploirapide.utils.formatting import format_date_fr, format_salary

__all__ = ["format_date_fr", "format_salary"]
