"""Shared utility functions for ple_export package."""

from ple_export.utils.cells import (
    CellRead,
    date_text,
    decimal_text,
    digits_only,
    integer_of,
    number_of,
    read_date,
    read_number,
    round_half_up,
    sanitized,
    text,
    truncated_text,
)

__all__ = [
    "CellRead",
    "date_text",
    "decimal_text",
    "digits_only",
    "integer_of",
    "number_of",
    "read_date",
    "read_number",
    "round_half_up",
    "sanitized",
    "text",
    "truncated_text",
]
