"""Row predicates deciding which data rows reach a converter."""

from __future__ import annotations

from collections.abc import Callable

from ple_export.reader.document import Row

RowFilter = Callable[[Row], bool]

ENTRY_ID_COLUMN = 2


def non_blank(row: Row) -> bool:
    """Accept rows whose first cell has visible text."""
    return not row.is_blank


def flag_equals(column: int, expected: str | None) -> RowFilter:
    """Accept non-blank rows whose ``column`` text equals ``expected``.

    A negative ``column`` disables the flag check, leaving only the
    non-blank test.
    """

    def accept(row: Row) -> bool:
        if row.is_blank:
            return False
        if column < 0:
            return True
        return (row.cell(column).formatted or "").strip() == expected

    return accept


def has_entry_id(row: Row) -> bool:
    """Accept financial-statement rows carrying an entry code in column 2."""
    return not row.cell(ENTRY_ID_COLUMN).is_blank


def excluding_account(code: str) -> RowFilter:
    """Accept non-blank rows except those whose first cell equals ``code``."""

    def accept(row: Row) -> bool:
        return not row.is_blank and (row.cell(0).formatted or "").strip() != code

    return accept
