"""In-memory spreadsheet model consumed by the book processors.

This module contains pure data structures with no business logic
dependencies. A :class:`Document` is supplied by whatever acquired the
spreadsheet (an ``.xlsx`` loader, a remote API client, a test fixture) and
is only ever read by the export engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "EMPTY_CELL",
    "Cell",
    "Document",
    "MissingSheetError",
    "Row",
    "Sheet",
]


class MissingSheetError(LookupError):
    """Raised when a sheet required by an export is not in the document."""

    def __init__(self, sheet_name: str) -> None:
        self.sheet_name = sheet_name
        super().__init__(f"Cannot find sheet with name: {sheet_name}")


@dataclass(frozen=True, slots=True)
class Cell:
    """A single spreadsheet cell.

    Attributes
    ----------
    formatted
        Text as displayed by the spreadsheet, or ``None`` for an empty cell.
    value
        Effective typed value: a number, a boolean, or ``None``.
    """

    formatted: str | None = None
    value: float | bool | None = None

    @classmethod
    def of(cls, raw: Any) -> Cell:
        """Build a cell from a plain Python value.

        Numbers keep their value and render without a trailing ``.0`` when
        integral; booleans render as ``TRUE``/``FALSE``; anything else is
        treated as text.
        """
        if raw is None:
            return EMPTY_CELL
        if isinstance(raw, Cell):
            return raw
        if isinstance(raw, bool):
            return cls("TRUE" if raw else "FALSE", raw)
        if isinstance(raw, int | float):
            number = float(raw)
            text = str(int(number)) if number.is_integer() else repr(number)
            return cls(text, number)
        return cls(str(raw), None)

    @property
    def is_blank(self) -> bool:
        """Whether the formatted text is missing or whitespace only."""
        return self.formatted is None or not self.formatted.strip()


EMPTY_CELL = Cell()


@dataclass(frozen=True, slots=True)
class Row:
    """An ordered sequence of cells; insertion order is column order."""

    cells: tuple[Cell, ...] = ()

    @classmethod
    def of(cls, values: Iterable[Any]) -> Row:
        """Build a row from plain values (see :meth:`Cell.of`)."""
        return cls(tuple(Cell.of(v) for v in values))

    def cell(self, column: int) -> Cell:
        """Return the cell at ``column``, or an empty cell past the row's end."""
        if 0 <= column < len(self.cells):
            return self.cells[column]
        return EMPTY_CELL

    def has_column(self, column: int) -> bool:
        return 0 <= column < len(self.cells)

    @property
    def is_blank(self) -> bool:
        """A row is blank when its first cell carries no visible text."""
        return self.cell(0).is_blank

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)


@dataclass(frozen=True)
class Sheet:
    """A named grid of rows."""

    name: str
    rows: tuple[Row, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, name: str, rows: Iterable[Iterable[Any]]) -> Sheet:
        """Build a sheet from nested plain values."""
        return cls(name, tuple(r if isinstance(r, Row) else Row.of(r) for r in rows))

    def row(self, index: int) -> Row:
        """Return the row at ``index``, or an empty row past the grid's end."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return Row()

    def cell(self, row: int, column: int) -> Cell:
        return self.row(row).cell(column)

    @property
    def info_flag(self) -> bool:
        """Information flag stored as a boolean in cell A1.

        ``True`` means the sheet carries data; ``False`` (including a missing
        or non-boolean A1) means the book must be produced empty.
        """
        return self.cell(0, 0).value is True

    def data_rows(self, header_skip: int) -> Iterator[Row]:
        """Iterate rows after skipping ``header_skip`` decoration rows."""
        yield from self.rows[header_skip:]


@dataclass
class Document:
    """An ordered collection of sheets with lookup by name."""

    sheets: list[Sheet] = field(default_factory=list)
    title: str = ""

    @classmethod
    def from_rows(cls, data: Mapping[str, Sequence[Sequence[Any]]], title: str = "") -> Document:
        """Build a document from ``{sheet name: rows of plain values}``."""
        return cls([Sheet.of(name, rows) for name, rows in data.items()], title)

    def find(self, name: str) -> Sheet | None:
        """Return the first sheet called ``name``, or ``None``."""
        return next((s for s in self.sheets if s.name == name), None)

    def sheet(self, name: str) -> Sheet:
        """Return the first sheet called ``name``.

        Raises
        ------
        MissingSheetError
            If no sheet has that name.
        """
        found = self.find(name)
        if found is None:
            raise MissingSheetError(name)
        return found

    @property
    def sheet_names(self) -> list[str]:
        return [s.name for s in self.sheets]

    def __iter__(self) -> Iterator[Sheet]:
        return iter(self.sheets)
