"""Book-level parameters and output file naming.

PLE file names encode the taxpayer, the period, the book and a handful of
flags::

    LE <ruc:11> <yyyy> <mm> <dd> <book:6> <oportunity:2> <ops:1> <info:1> 1 1 .<ext>

The trailing ``11`` fixes currency (soles) and the generating program. With
an eleven-digit RUC the information digit lands at :data:`INFO_FLAG_OFFSET`.

PDT 710 importation files use their own names:

* ``0710<yyyy><ruc><field:03d>.txt`` for each form field extract
* ``0710<ruc><yyyy>.txt`` for the trial balance
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from ple_export.reader.document import Sheet
from ple_export.utils.cells import read_number, text

logger = logging.getLogger(__name__)

INFO_FLAG_OFFSET = 30
DEFAULT_EXTENSION = "txt"
PDT_FORM = "0710"


# =============================================================================
# File names
# =============================================================================


def compile_book_name(
    ruc: str,
    year: str,
    month: str,
    day: str,
    book_id: str,
    oportunity: str,
    ops_flag: str,
    info: bool,
    extension: str = DEFAULT_EXTENSION,
) -> str:
    """Compile a PLE book file name.

    Parameters
    ----------
    ruc
        Taxpayer id (11 digits).
    year
        Four-digit year.
    month, day
        Period month and day; zero-padded to two digits.
    book_id
        Six-digit book code, e.g. ``"030100"``.
    oportunity
        Presentation oportunity code; zero-padded to two digits.
    ops_flag
        ``"1"`` when the company had operations in the period.
    info
        Whether the book carries records.
    extension
        File extension without the dot.

    Returns
    -------
    str
        File name such as ``LE2012345678920231231030100011111.txt``.
    """
    info_digit = "1" if info else "0"
    return (
        f"LE{ruc}{year}{month.zfill(2)}{day.zfill(2)}{book_id}"
        f"{oportunity.zfill(2)}{ops_flag}{info_digit}11.{extension}"
    )


def compile_pdt_name(year: str, ruc: str, field_code: int) -> str:
    """Compile the name of a PDT 710 field extract."""
    return f"{PDT_FORM}{year}{ruc}{field_code:03d}.txt"


def compile_trial_name(ruc: str, year: str) -> str:
    """Compile the name of the PDT 710 trial balance extract."""
    return f"{PDT_FORM}{ruc}{year}.txt"


# =============================================================================
# Book parameters
# =============================================================================


@dataclass(frozen=True)
class BookParameters:
    """Values read once from a family's header sheet and shared by its books.

    Attributes
    ----------
    ruc, year, month, day, oportunity, ops_flag
        Name and period components. Annual families leave month and day at
        ``"00"``, which yields a ``yyyy0000`` period.
    uit
        UIT reference rate, only present on the balances header sheet.
    """

    ruc: str
    year: str
    month: str = "00"
    day: str = "00"
    oportunity: str = "00"
    ops_flag: str = "1"
    uit: Decimal | None = None

    @property
    def period_id(self) -> str:
        """Period field of every record: ``yyyyMMdd``."""
        return f"{self.year}{self.month.zfill(2)}{self.day.zfill(2)}"

    def compile_file(self, book_id: str, info: bool, extension: str = DEFAULT_EXTENSION) -> str:
        """Compile the PLE file name of ``book_id`` for these parameters."""
        return compile_book_name(
            self.ruc,
            self.year,
            self.month,
            self.day,
            book_id,
            self.oportunity,
            self.ops_flag,
            info,
            extension,
        )

    @classmethod
    def from_sheet(cls, sheet: Sheet, cells: Mapping[str, tuple[int, int]]) -> BookParameters:
        """Read parameters from a header sheet.

        Parameters
        ----------
        sheet
            Header sheet (``030000``, ``LE100000`` or ``070000``).
        cells
            Parameter name to ``(row, column)``, as configured in
            ``config.json``. Names absent from the mapping keep their
            defaults.

        Returns
        -------
        BookParameters
            Immutable parameters.
        """
        values: dict[str, str] = {}
        for name in ("ruc", "year", "month", "day", "oportunity", "ops_flag"):
            if name in cells:
                row, column = cells[name]
                values[name] = text(sheet.cell(row, column)).strip()

        uit: Decimal | None = None
        if "uit" in cells:
            read = read_number(sheet.cell(*cells["uit"]))
            if read.defaulted:
                logger.warning("UIT cell on sheet %s is empty; using 0", sheet.name)
            uit = Decimal(str(read.value))

        for name in ("month", "day", "oportunity"):
            if name in values:
                values[name] = values[name].zfill(2)

        params = cls(uit=uit, **values)
        logger.debug("Parameters from %s: ruc=%s period=%s", sheet.name, params.ruc, params.period_id)
        return params
