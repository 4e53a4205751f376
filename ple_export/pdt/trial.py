"""PDT 710 trial balance extract, built from the balances sheet 031700."""

from __future__ import annotations

from ple_export.books.layout import OutputLine
from ple_export.reader.document import Row
from ple_export.utils.cells import integer_of, text

AMOUNT_COLUMNS = (2, 3, 4, 5, 10, 11)
TRAILING_ZEROS = ("0", "0")


def trial_line(row: Row) -> OutputLine:
    """``account|debit|credit|...|0|0|`` with amounts truncated to integers."""
    return OutputLine.of(
        text(row.cell(0)),
        [str(integer_of(row.cell(c))) for c in AMOUNT_COLUMNS],
        TRAILING_ZEROS,
    )
