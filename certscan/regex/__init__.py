"""Regex helpers (date recognition, YAML rule runner, scheme hints)."""

from .dates import RecognizedDate, parse_date, recognize_dates

__all__ = ["RecognizedDate", "parse_date", "recognize_dates"]
