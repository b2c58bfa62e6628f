"""Utility exports."""

from .date_parser import (
    DateKind,
    DateSource,
    classify_date_value,
    day_bounds,
    format_display_date,
    parse_date_value,
)
from .helpers import as_text, join_csv, or_default, parse_leading_int, split_csv, unique_sorted
from .logger import get_logger

__all__ = [
    "get_logger",
    "DateKind",
    "DateSource",
    "classify_date_value",
    "parse_date_value",
    "day_bounds",
    "format_display_date",
    "split_csv",
    "join_csv",
    "as_text",
    "or_default",
    "parse_leading_int",
    "unique_sorted",
]
