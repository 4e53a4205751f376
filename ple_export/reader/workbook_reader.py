"""Load ``.xlsx`` workbooks into :class:`~ple_export.reader.document.Document`.

The book templates are ordinary spreadsheets with one worksheet per book
section. Every worksheet is read without a header row so that row and
column indices match the template layout exactly (row 0 holds the
information flag in A1).

Cell rendering
--------------
* numbers keep their numeric value; integral values render without ``.0``
* booleans render as ``TRUE``/``FALSE``
* dates render as ``dd-mm-yyyy``, the shape expected by
  :func:`ple_export.utils.cells.date_text`
* empty cells (``NaN`` or empty strings) become empty cells
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd
from pandas.api.types import is_bool, is_number

from ple_export.reader.document import EMPTY_CELL, Cell, Document, Row, Sheet

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d-%m-%Y"


def to_cell(raw: Any) -> Cell:
    """Convert a raw pandas/openpyxl value into a :class:`Cell`.

    Parameters
    ----------
    raw
        Value as returned by ``pandas.read_excel`` with ``dtype=object``.

    Returns
    -------
    Cell
        Cell with formatted text and, for numbers and booleans, an
        effective value.
    """
    if raw is None:
        return EMPTY_CELL
    if isinstance(raw, str):
        return Cell(raw, None) if raw != "" else EMPTY_CELL
    if isinstance(raw, datetime | date):
        if pd.isna(raw):
            return EMPTY_CELL
        return Cell(raw.strftime(DATE_FORMAT), None)
    if is_bool(raw):
        return Cell.of(bool(raw))
    if is_number(raw):
        if pd.isna(raw):
            return EMPTY_CELL
        return Cell.of(float(raw))
    return Cell(str(raw), None)


def frame_to_sheet(name: str, frame: pd.DataFrame) -> Sheet:
    """Convert a header-less DataFrame into a :class:`Sheet`."""
    rows = tuple(Row(tuple(to_cell(v) for v in record)) for record in frame.itertuples(index=False, name=None))
    return Sheet(name, rows)


def load_workbook(path: Path | str) -> Document:
    """Read every worksheet of an ``.xlsx`` workbook.

    Parameters
    ----------
    path
        Workbook location.

    Returns
    -------
    Document
        Sheets in workbook order, titled after the file stem.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    workbook_path = Path(path)
    if not workbook_path.exists():
        msg = f"Workbook not found: {workbook_path}"
        raise FileNotFoundError(msg)

    frames: dict[str, pd.DataFrame] = pd.read_excel(
        workbook_path,
        sheet_name=None,
        header=None,
        dtype=object,
        keep_default_na=False,
        engine="openpyxl",
    )

    sheets = [frame_to_sheet(str(name), frame) for name, frame in frames.items()]
    logger.info("Loaded %d sheets from %s", len(sheets), workbook_path.name)
    return Document(sheets, title=workbook_path.stem)
