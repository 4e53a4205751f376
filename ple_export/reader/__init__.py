"""Spreadsheet model and loaders.

Submodules
----------
document
    Immutable ``Cell``/``Row``/``Sheet`` types and the ``Document`` lookup.
workbook_reader
    pandas/openpyxl loader turning an ``.xlsx`` file into a ``Document``.
"""

from ple_export.reader.document import (
    EMPTY_CELL,
    Cell,
    Document,
    MissingSheetError,
    Row,
    Sheet,
)
from ple_export.reader.workbook_reader import load_workbook, to_cell

__all__ = [
    "EMPTY_CELL",
    "Cell",
    "Document",
    "MissingSheetError",
    "Row",
    "Sheet",
    "load_workbook",
    "to_cell",
]
