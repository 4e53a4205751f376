"""Cell-to-text formatting rules shared by every book layout.

The PLE layouts accept a small set of field shapes: plain text, fixed-scale
decimals, ``dd/MM/yyyy`` dates, truncated descriptions and digit-only
codes. Spreadsheets are messy, so every helper here is total: a missing or
malformed cell yields a documented default instead of an exception.

Examples
--------
- ``decimal_text(Cell.of(2.675))`` -> ``"2.68"``
- ``decimal_text(EMPTY_CELL, 8)`` -> ``"0.00000000"``
- ``date_text(Cell("15-03-2023"))`` -> ``"15/03/2023"``
- ``date_text(EMPTY_CELL)`` -> ``"00/00/0000"``
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Generic, TypeVar

from ple_export.reader.document import Cell, Row

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMPTY_DATE = "00/00/0000"
MISSING_TEXT = "-"


@dataclass(frozen=True)
class CellRead(Generic[T]):
    """Outcome of reading a typed value from a cell.

    Reading never fails; ``defaulted`` records whether ``value`` is the
    substituted default rather than something found in the cell.
    """

    value: T
    defaulted: bool = False


# =============================================================================
# Typed reads
# =============================================================================


def read_number(cell: Cell) -> CellRead[float]:
    """Read the effective numeric value of a cell.

    Booleans, text-only cells and non-finite numbers read as ``0.0`` with
    ``defaulted=True``.
    """
    value = cell.value
    if value is None or isinstance(value, bool) or not math.isfinite(value):
        return CellRead(0.0, defaulted=True)
    return CellRead(float(value))


def read_date(cell: Cell) -> CellRead[str]:
    """Read a ``dd-MM-yyyy`` cell as ``dd/MM/yyyy``.

    The conversion is purely textual: characters 0-1, 3-4 and 6-9 are
    re-joined with ``/``. Blank cells read as ``00/00/0000``.
    """
    raw = cell.formatted
    if raw is None or not raw.strip():
        return CellRead(EMPTY_DATE, defaulted=True)
    return CellRead(f"{raw[0:2]}/{raw[3:5]}/{raw[6:10]}")


# =============================================================================
# Field formatters
# =============================================================================


def text(cell: Cell) -> str:
    """Return the formatted text of a cell, or ``""`` when empty."""
    return cell.formatted or ""


def number_of(cell: Cell) -> float:
    """Return the effective numeric value, ``0.0`` when absent."""
    return read_number(cell).value


def integer_of(cell: Cell) -> int:
    """Return the numeric value truncated toward zero, ``0`` when absent."""
    return int(read_number(cell).value)


def round_half_up(amount: Decimal, scale: int = 0) -> Decimal:
    """Round ``amount`` half-up to ``scale`` fraction digits.

    The working precision grows with the magnitude of ``amount`` so that
    values beyond the default 28-digit context round instead of raising.
    Negative zero comes back unsigned.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + scale + 2)
        rounded = amount.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return rounded


def decimal_text(cell: Cell, scale: int = 2) -> str:
    """Render a cell as a fixed-scale decimal.

    Parameters
    ----------
    cell
        Source cell.
    scale
        Number of fraction digits (2 for amounts, 3 or 8 for rates).

    Returns
    -------
    str
        Decimal text with exactly ``scale`` fraction digits and ``.`` as the
        separator, rounded half-up on the decimal representation of the
        value (``2.675`` -> ``"2.68"``). Absent values render zero-filled.
    """
    read = read_number(cell)
    if read.defaulted:
        return "0." + "0" * scale if scale > 0 else "0"
    return f"{round_half_up(Decimal(str(read.value)), scale):f}"


def date_text(cell: Cell) -> str:
    """Return the ``dd/MM/yyyy`` form of a ``dd-MM-yyyy`` cell."""
    return read_date(cell).value


def truncated_text(cell: Cell, max_len: int, upper: bool = False) -> str:
    """Return at most ``max_len`` characters of the cell text, never padded."""
    value = text(cell)
    if upper:
        value = value.upper()
    return value[:max_len]


def digits_only(cell: Cell) -> str:
    """Strip every non-digit character from the cell text."""
    return re.sub(r"\D", "", text(cell))


def sanitized(row: Row, column: int) -> str:
    """Return the text at ``column`` with ``/`` replaced by ``-``.

    Missing columns and empty cells yield ``"-"``.
    """
    if not row.has_column(column):
        return MISSING_TEXT
    raw = row.cell(column).formatted
    if raw is None:
        return MISSING_TEXT
    return raw.replace("/", "-")
