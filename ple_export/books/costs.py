"""Converters for the costs book (LE100000 family).

The costs book is annual: every record is stamped with a ``yyyy0000``
period, except LE100200 whose period carries the month found in column 0.
All sections share a three-row header and plain non-blank filtering.
"""

from __future__ import annotations

from ple_export.books.filters import non_blank
from ple_export.books.keys import PrimaryKeyGenerator
from ple_export.books.layout import BookSpec, Converter, OutputLine
from ple_export.books.params import BookParameters
from ple_export.reader.document import Row
from ple_export.utils.cells import decimal_text, integer_of, text, truncated_text

STATUS = "1"
HEADER_SKIP = 3


def _decimals(row: Row, first: int, last: int) -> list[str]:
    return [decimal_text(row.cell(c)) for c in range(first, last + 1)]


def le100100(params: BookParameters) -> Converter:
    """Inventory summary: four amounts."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(params.period_id, _decimals(row, 0, 3), STATUS)

    return convert


def le100200(params: BookParameters) -> Converter:
    """Monthly production costs; period is ``yyyy<month:02d>00``."""

    def convert(row: Row) -> OutputLine:
        month = integer_of(row.cell(0))
        return OutputLine.of(
            f"{params.year}{month:02d}00",
            decimal_text(row.cell(2)),
            _decimals(row, 3, 7),
            STATUS,
        )

    return convert


def le100300(params: BookParameters) -> Converter:
    """Cost per product line."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            text(row.cell(0)),
            truncated_text(row.cell(1), 100),
            _decimals(row, 2, 9),
            text(row.cell(10)),
            STATUS,
        )

    return convert


def le100400(params: BookParameters) -> Converter:
    """Production order detail with a 24-digit correlative."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            f"{keys.next_correlative():024d}",
            [text(row.cell(c)) for c in range(4)],
            STATUS,
        )

    return convert


COSTS_BOOKS: dict[str, BookSpec] = {
    "100100": BookSpec("100100", HEADER_SKIP, non_blank, le100100),
    "100200": BookSpec("100200", HEADER_SKIP, non_blank, le100200),
    "100300": BookSpec("100300", HEADER_SKIP, non_blank, le100300),
    "100400": BookSpec("100400", HEADER_SKIP, non_blank, le100400),
}
