"""PDT 710 field records: third-party detail lines of the annual return.

A field record identifies a counterparty by document type and number,
carries its name (split into surnames and given names for individuals, or
a single legal name for companies) and a signed amount.

Rendered shape (no trailing separator)::

    type|number|input flag|LAST1|LAST2|NAMES|LEGAL NAME|amount

Names are upper-cased and truncated to 20 characters (40 for the legal
name); the amount is rounded half-up to an integer.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ple_export.books.layout import OutputLine
from ple_export.reader.document import Row
from ple_export.utils.cells import read_number, round_half_up, text

DOC_TYPES: dict[str, str] = {
    "1": "01",
    "4": "04",
    "6": "06",
    "7": "07",
    "A": "A",
}
UNKNOWN_DOC_TYPE = "00"
CONSOLIDATED_DOC_TYPE = "99"

COMPANY_DOC_TYPE = "06"
COMPANY_RUC_PREFIX = "20"

INDIVIDUAL_FLAG = "1"
LEGAL_ENTITY_FLAG = "0"

NAME_WIDTH = 20
LEGAL_NAME_WIDTH = 40

DOC_TYPE_COLUMN = 0
DOC_NUMBER_COLUMN = 2


def parse_doc_type(code: str) -> str:
    """Map a PLE document type code to its PDT 710 code (``"00"`` if unknown)."""
    return DOC_TYPES.get(code.strip(), UNKNOWN_DOC_TYPE)


def is_legal_entity(doc_type: str, doc_number: str) -> bool:
    """Companies carry a RUC starting with ``20``; unknown documents count as companies."""
    return (doc_type == COMPANY_DOC_TYPE and doc_number.startswith(COMPANY_RUC_PREFIX)) or (
        doc_type == UNKNOWN_DOC_TYPE
    )


def split_person_name(full_name: str) -> tuple[str, str, str]:
    """Split an individual's name into ``(last name 1, last name 2, given names)``.

    Accepted shapes are ``"LAST1 LAST2, NAMES"``, ``"LAST1 LAST2 NAMES"`` and
    ``"LAST1 NAMES"``. Text after a second comma is dropped, and a single
    word leaves every part empty.

    Examples
    --------
    - ``"Perez Gomez, Juan Carlos"`` -> ``("Perez", "Gomez", "Juan Carlos")``
    - ``"Perez Gomez Juan Carlos"`` -> ``("Perez", "Gomez", "Juan Carlos")``
    - ``"Perez Juan"`` -> ``("Perez", "", "Juan")``
    """
    if "," in full_name:
        surnames, given = full_name.split(",")[:2]
        surname_parts = surnames.strip().split(" ", 1)
        last1 = surname_parts[0].strip()
        last2 = surname_parts[1].strip() if len(surname_parts) == 2 else ""
        return last1, last2, given.strip()

    parts = full_name.strip().split(" ", 2)
    if len(parts) == 3:
        return parts[0].strip(), parts[1].strip(), parts[2].strip()
    if len(parts) == 2:
        return parts[0].strip(), "", parts[1].strip()
    return "", "", ""


def _integer_amount(amount: Decimal) -> str:
    return f"{round_half_up(amount):f}"


@dataclass(frozen=True)
class FieldRecord:
    """One counterparty line of a PDT 710 field extract."""

    doc_type: str
    doc_number: str = ""
    input_flag: str = ""
    last_name1: str = ""
    last_name2: str = ""
    first_names: str = ""
    legal_name: str = ""
    amount: Decimal = Decimal(0)

    @property
    def key(self) -> tuple[str, str]:
        """Aggregation key: ``(doc_type, doc_number)``."""
        return (self.doc_type, self.doc_number)

    @classmethod
    def consolidated(cls, amount: Decimal) -> FieldRecord:
        """Synthetic record standing for every counterparty below the threshold."""
        return cls(CONSOLIDATED_DOC_TYPE, amount=amount)

    def to_line(self) -> OutputLine:
        return OutputLine(
            (
                self.doc_type,
                self.doc_number,
                self.input_flag,
                self.last_name1.upper()[:NAME_WIDTH],
                self.last_name2.upper()[:NAME_WIDTH],
                self.first_names.upper()[:NAME_WIDTH],
                self.legal_name.upper()[:LEGAL_NAME_WIDTH],
                _integer_amount(self.amount),
            ),
            trailing_separator=False,
        )

    def render(self) -> str:
        return self.to_line().render()


class FieldRecordBuilder:
    """Build :class:`FieldRecord` objects from book rows.

    Document type sits in column 0 and document number in column 2 on every
    source sheet; the name and amount columns vary per book.

    Parameters
    ----------
    name_column
        Column holding the counterparty name.
    amount_column
        Column holding the signed amount.
    """

    def __init__(self, name_column: int, amount_column: int) -> None:
        self.name_column = name_column
        self.amount_column = amount_column

    @classmethod
    def from_config(cls, entry: dict[str, Any]) -> FieldRecordBuilder:
        """Create a builder from a ``pdt710.fields`` configuration entry."""
        return cls(int(entry["name_column"]), int(entry["amount_column"]))

    def __call__(self, row: Row) -> FieldRecord:
        doc_type = parse_doc_type(text(row.cell(DOC_TYPE_COLUMN)))
        doc_number = text(row.cell(DOC_NUMBER_COLUMN)).strip()
        full_name = text(row.cell(self.name_column))
        amount = Decimal(str(read_number(row.cell(self.amount_column)).value))

        if is_legal_entity(doc_type, doc_number):
            return FieldRecord(
                doc_type,
                doc_number,
                LEGAL_ENTITY_FLAG,
                legal_name=full_name.strip(),
                amount=amount,
            )

        last1, last2, given = split_person_name(full_name)
        return FieldRecord(doc_type, doc_number, INDIVIDUAL_FLAG, last1, last2, given, "", amount)
