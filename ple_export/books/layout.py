"""Record and book layout types shared by every book family.

A book family module (``balances``, ``costs``, ``assets``) exposes a table
mapping sheet names to :class:`BookSpec` entries. The processors walk that
table; anything a family needs at conversion time comes in through
:class:`~ple_export.books.params.BookParameters`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ple_export.books.filters import RowFilter, non_blank
from ple_export.books.params import BookParameters
from ple_export.reader.document import Row, Sheet

SEPARATOR = "|"
LINE_END = "\r\n"


@dataclass(frozen=True)
class OutputLine:
    """An immutable record of field strings.

    Attributes
    ----------
    fields
        Field values in layout order.
    trailing_separator
        PLE book records close with ``|`` before the line end; PDT 710
        field records do not.
    """

    fields: tuple[str, ...]
    trailing_separator: bool = True

    @classmethod
    def of(cls, *fields: str | Iterable[str], trailing_separator: bool = True) -> OutputLine:
        """Build a line from strings and iterables of strings, flattened in order."""
        flat: list[str] = []
        for item in fields:
            if isinstance(item, str):
                flat.append(item)
            else:
                flat.extend(item)
        return cls(tuple(flat), trailing_separator)

    def render(self) -> str:
        """Join the fields with ``|`` and terminate with CRLF."""
        body = SEPARATOR.join(self.fields)
        if self.trailing_separator:
            body += SEPARATOR
        return body + LINE_END

    def __len__(self) -> int:
        return len(self.fields)


Converter = Callable[[Row], OutputLine]
ConverterFactory = Callable[[BookParameters], Converter]
SheetConverter = Callable[[Sheet, BookParameters], list[OutputLine]]


@dataclass(frozen=True)
class BookSpec:
    """How one sheet becomes one book file.

    Exactly one of ``converter`` (row by row) or ``sheet_lines`` (whole
    sheet) is normally set. A spec with neither always produces an empty
    file. ``attachment`` marks books whose content is an external document
    rather than text records.

    Attributes
    ----------
    book_id
        Six-digit book code used in the file name.
    header_skip
        Decoration rows before the first data row.
    row_filter
        Predicate applied to every data row.
    converter
        Factory building a fresh row converter for each export.
    sheet_lines
        Builds the records from the sheet grid directly.
    extension
        File extension.
    attachment
        Content is fetched through an attachment source.
    """

    book_id: str
    header_skip: int = 0
    row_filter: RowFilter = non_blank
    converter: ConverterFactory | None = None
    sheet_lines: SheetConverter | None = None
    extension: str = "txt"
    attachment: bool = False
