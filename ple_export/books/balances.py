"""Converters for the inventories and balances book (LE030000 family).

Every sheet of the balances workbook holds one section of the book. The
header sheet ``030000`` carries the parameters; :data:`BALANCE_BOOKS` maps
each section sheet to its layout.

Layout groups
-------------
* Financial statements (030100, 031800, 032000, 032400, 032500, 031900):
  entry code and amount per row, filtered on the entry code column.
* Detail books (030300-031300, 031602): one record per account item,
  most of them keyed by a CUO and an ``M`` correlative.
* Whole-sheet books: 031601 reads a single row; 031400 is always empty;
  032300 is a PDF attachment.
"""

from __future__ import annotations

from ple_export.books.filters import has_entry_id, non_blank
from ple_export.books.keys import PrimaryKeyGenerator
from ple_export.books.layout import BookSpec, Converter, OutputLine
from ple_export.books.params import BookParameters
from ple_export.reader.document import Row, Sheet
from ple_export.utils.cells import (
    date_text,
    decimal_text,
    digits_only,
    integer_of,
    sanitized,
    text,
    truncated_text,
)

STATUS = "1"
FINANCIAL_CATALOG = "01"
CASH_FLOW_CATALOG = "09"

ATTACHMENT_TOKEN_CELL = (2, 2)
SINGLE_LINE_ROW = 3


def _cells(row: Row, *columns: int) -> list[str]:
    return [text(row.cell(c)) for c in columns]


def _decimals(row: Row, first: int, last: int, scale: int = 2) -> list[str]:
    return [decimal_text(row.cell(c), scale) for c in range(first, last + 1)]


# =============================================================================
# Financial statements
# =============================================================================


def financial_statement(params: BookParameters) -> Converter:
    """``period|01|entry code|amount|`` (no status field)."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            FINANCIAL_CATALOG,
            text(row.cell(2)),
            decimal_text(row.cell(3)),
        )

    return convert


def le031900(params: BookParameters) -> Converter:
    """Cash-flow style statement: catalog ``09`` and twelve amount columns."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            CASH_FLOW_CATALOG,
            text(row.cell(2)),
            _decimals(row, 3, 14),
            STATUS,
        )

    return convert


# =============================================================================
# Detail books
# =============================================================================


def le030200(params: BookParameters) -> Converter:
    """Cash and banks."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            digits_only(row.cell(0)),
            _cells(row, 1, 3, 4),
            decimal_text(row.cell(5)),
            text(row.cell(6)),
            STATUS,
            sanitized(row, 7),
        )

    return convert


def receivable(params: BookParameters) -> Converter:
    """Receivables (030300 customers, 030400 staff, 030500 others)."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            _cells(row, 0, 2),
            truncated_text(row.cell(3), 100),
            date_text(row.cell(4)),
            decimal_text(row.cell(5)),
            STATUS,
            sanitized(row, 6),
        )

    return convert


def le030600(params: BookParameters) -> Converter:
    """Doubtful receivables provision."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            _cells(row, 0, 2),
            truncated_text(row.cell(3), 100, upper=True),
            _cells(row, 4, 6, 7),
            date_text(row.cell(8)),
            decimal_text(row.cell(9)),
            STATUS,
        )

    return convert


def le030700(params: BookParameters) -> Converter:
    """Investments in securities."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            _cells(row, 0, 4, 2),
            STATUS,
            text(row.cell(3)),
            truncated_text(row.cell(6), 80),
            _cells(row, 7, 9),
            decimal_text(row.cell(11), 8),
            decimal_text(row.cell(12), 8),
            decimal_text(row.cell(13)),
            STATUS,
        )

    return convert


def le030800(params: BookParameters) -> Converter:
    """Shares and equity securities."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            _cells(row, 0, 2),
            truncated_text(row.cell(3), 100),
            text(row.cell(4)),
            decimal_text(row.cell(6)),
            str(integer_of(row.cell(7))),
            decimal_text(row.cell(8)),
            decimal_text(row.cell(9)),
            STATUS,
            sanitized(row, 10),
        )

    return convert


def le030900(params: BookParameters) -> Converter:
    """Intangibles."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            date_text(row.cell(0)),
            digits_only(row.cell(1)),
            truncated_text(row.cell(2), 40),
            decimal_text(row.cell(3)),
            decimal_text(row.cell(4)),
            STATUS,
        )

    return convert


def le031100(params: BookParameters) -> Converter:
    """Salaries and benefits payable."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            digits_only(row.cell(0)),
            _cells(row, 1, 3, 4),
            truncated_text(row.cell(5), 100),
            decimal_text(row.cell(6)),
            STATUS,
            sanitized(row, 7),
        )

    return convert


def le031200(params: BookParameters) -> Converter:
    """Trade payables."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            _cells(row, 0, 2),
            date_text(row.cell(3)),
            truncated_text(row.cell(4), 100),
            decimal_text(row.cell(5)),
            STATUS,
            sanitized(row, 6),
        )

    return convert


def le031300(params: BookParameters) -> Converter:
    """Other payables."""
    keys = PrimaryKeyGenerator(params.period_id)

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            keys.next_key().fields(),
            _cells(row, 0, 2),
            date_text(row.cell(3)),
            truncated_text(row.cell(4), 100, upper=True),
            digits_only(row.cell(5)),
            decimal_text(row.cell(6)),
            STATUS,
        )

    return convert


def le031602(params: BookParameters) -> Converter:
    """Shareholders detail."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            _cells(row, 0, 2, 3),
            truncated_text(row.cell(5), 100),
            str(integer_of(row.cell(6))),
            decimal_text(row.cell(7), 8),
            STATUS,
        )

    return convert


def le031700(params: BookParameters) -> Converter:
    """Trial balance: account code and sixteen amount columns."""

    def convert(row: Row) -> OutputLine:
        return OutputLine.of(
            params.period_id,
            text(row.cell(0)),
            _decimals(row, 2, 17),
            STATUS,
        )

    return convert


# =============================================================================
# Whole-sheet books
# =============================================================================


def le031601_lines(sheet: Sheet, params: BookParameters) -> list[OutputLine]:
    """Capital stock: one record from row 3, columns 0-3."""
    row = sheet.row(SINGLE_LINE_ROW)
    return [OutputLine.of(params.period_id, _decimals(row, 0, 3), STATUS)]


def attachment_token(sheet: Sheet) -> str:
    """Return the attachment reference stored on an attachment sheet."""
    return text(sheet.cell(*ATTACHMENT_TOKEN_CELL)).strip()


# =============================================================================
# Dispatch table
# =============================================================================

RECEIVABLE_SKIP = 5
FINANCIAL_SKIP = 2

BALANCE_BOOKS: dict[str, BookSpec] = {
    "030100": BookSpec("030100", FINANCIAL_SKIP, has_entry_id, financial_statement),
    "030200": BookSpec("030200", 4, non_blank, le030200),
    "030300": BookSpec("030300", RECEIVABLE_SKIP, non_blank, receivable),
    "030400": BookSpec("030400", RECEIVABLE_SKIP, non_blank, receivable),
    "030500": BookSpec("030500", RECEIVABLE_SKIP, non_blank, receivable),
    "030600": BookSpec("030600", RECEIVABLE_SKIP, non_blank, le030600),
    "030700": BookSpec("030700", RECEIVABLE_SKIP, non_blank, le030700),
    "030800": BookSpec("030800", RECEIVABLE_SKIP, non_blank, le030800),
    "030900": BookSpec("030900", 2, non_blank, le030900),
    "031100": BookSpec("031100", RECEIVABLE_SKIP, non_blank, le031100),
    "031200": BookSpec("031200", RECEIVABLE_SKIP, non_blank, le031200),
    "031300": BookSpec("031300", RECEIVABLE_SKIP, non_blank, le031300),
    "031400": BookSpec("031400"),
    "031601": BookSpec("031601", sheet_lines=le031601_lines),
    "031602": BookSpec("031602", RECEIVABLE_SKIP, non_blank, le031602),
    "031700": BookSpec("031700", 3, non_blank, le031700),
    "031800": BookSpec("031800", FINANCIAL_SKIP, has_entry_id, financial_statement),
    "031900": BookSpec("031900", FINANCIAL_SKIP, has_entry_id, le031900),
    "032000": BookSpec("032000", FINANCIAL_SKIP, has_entry_id, financial_statement),
    "032300": BookSpec("032300", extension="pdf", attachment=True),
    "032400": BookSpec("032400", FINANCIAL_SKIP, has_entry_id, financial_statement),
    "032500": BookSpec("032500", FINANCIAL_SKIP, has_entry_id, financial_statement),
}
