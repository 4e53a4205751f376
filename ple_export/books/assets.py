"""Converters for the fixed assets book (LE070000 family).

All three sections are annual (``yyyy0000`` period) and keyed by a CUO plus
an ``M`` correlative. 070300 and 070400 records start with the ``9``
catalog marker.
"""

from __future__ import annotations

from ple_export.books.filters import non_blank
from ple_export.books.keys import PrimaryKeyGenerator
from ple_export.books.layout import BookSpec, Converter, OutputLine
from ple_export.books.params import BookParameters
from ple_export.reader.document import Cell, Row
from ple_export.utils.cells import date_text, decimal_text, integer_of, text, truncated_text

STATUS = "1"
CATALOG_MARKER = "9"
MISSING_TEXT = "-"


def _decimals(row: Row, first: int, last: int) -> list[str]:
    return [decimal_text(row.cell(c)) for c in range(first, last + 1)]


def _text_or_dash(cell: Cell, max_len: int) -> str:
    if cell.formatted is None:
        return MISSING_TEXT
    return truncated_text(cell, max_len)


def le070100(params: BookParameters) -> Converter:
    """Fixed assets detail."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            [text(row.cell(c)) for c in (0, 2, 4, 6, 8, 10, 11)],
            truncated_text(row.cell(3), 40),
            _text_or_dash(row.cell(13), 20),
            _text_or_dash(row.cell(14), 20),
            _text_or_dash(row.cell(15), 30),
            _decimals(row, 16, 24),
            date_text(row.cell(25)),
            date_text(row.cell(26)),
            text(row.cell(27)),
            text(row.cell(29)),
            _decimals(row, 30, 38),
            STATUS,
        )

    return convert


def le070300(params: BookParameters) -> Converter:
    """Exchange rate differences on fixed assets."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            CATALOG_MARKER,
            text(row.cell(0)),
            date_text(row.cell(1)),
            decimal_text(row.cell(2)),
            decimal_text(row.cell(3), 3),
            decimal_text(row.cell(4)),
            decimal_text(row.cell(5), 3),
            _decimals(row, 6, 9),
            STATUS,
        )

    return convert


def le070400(params: BookParameters) -> Converter:
    """Leased assets."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            CATALOG_MARKER,
            text(row.cell(0)),
            date_text(row.cell(1)),
            text(row.cell(2)),
            date_text(row.cell(4)),
            str(integer_of(row.cell(5))),
            decimal_text(row.cell(6)),
            STATUS,
        )

    return convert


ASSETS_BOOKS: dict[str, BookSpec] = {
    "070100": BookSpec("070100", 4, non_blank, le070100),
    "070300": BookSpec("070300", 3, non_blank, le070300),
    "070400": BookSpec("070400", 3, non_blank, le070400),
}
