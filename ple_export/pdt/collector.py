"""Threshold-based consolidation of PDT 710 field records.

The annual return only lists counterparties whose balance reaches a
multiple of the UIT (tax unit). Smaller balances are folded into a single
record with document type ``99``.

Algorithm
---------
1. Group records by ``(doc_type, doc_number)`` in first-seen order, adding
   amounts into the first record of each group.
2. Compare each group against the limit (``abs(amount)`` when
   ``check_absolute`` is set, the signed amount otherwise). A group is
   below the limit when strictly less than it.
3. When more than one group is below, remove them and append one ``99``
   record with their summed amount. A single small group is left alone.
4. Every amount in the result becomes its absolute value.

Examples
--------
With a limit of 10,300.00 (UIT 5,150 x 2):

- ``A=4000, B=2000, A=1000, C=15000`` -> ``[C 15000, 99 7000]``
- ``A=4000, C=15000`` -> ``[A 4000, C 15000]``
- ``A=-20000, B=500`` without absolute check -> ``[99 19500]``
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from decimal import Decimal

from ple_export.pdt.fields import FieldRecord
from ple_export.utils.cells import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_UIT_MULTIPLIER = 2


def uit_limit(uit: Decimal, multiplier: int = DEFAULT_UIT_MULTIPLIER) -> Decimal:
    """Return ``uit * multiplier`` rounded half-up to cents."""
    return round_half_up(uit * multiplier, 2)


class FieldCollector:
    """Consolidate field records below a monetary limit.

    Parameters
    ----------
    limit
        Threshold amount; see :func:`uit_limit`.
    check_absolute
        Compare ``abs(amount)`` instead of the signed amount.
    """

    def __init__(self, limit: Decimal, check_absolute: bool = False) -> None:
        self.limit = limit
        self.check_absolute = check_absolute

    @classmethod
    def from_uit(
        cls,
        uit: Decimal,
        multiplier: int = DEFAULT_UIT_MULTIPLIER,
        check_absolute: bool = False,
    ) -> FieldCollector:
        return cls(uit_limit(uit, multiplier), check_absolute)

    def is_below(self, record: FieldRecord) -> bool:
        amount = abs(record.amount) if self.check_absolute else record.amount
        return amount < self.limit

    @staticmethod
    def group(records: Iterable[FieldRecord]) -> list[FieldRecord]:
        """Merge records sharing a key; the first record's identity fields win."""
        groups: dict[tuple[str, str], FieldRecord] = {}
        for record in records:
            found = groups.get(record.key)
            if found is None:
                groups[record.key] = dataclasses.replace(record)
            else:
                groups[record.key] = dataclasses.replace(found, amount=found.amount + record.amount)
        return list(groups.values())

    def collect(self, records: Iterable[FieldRecord]) -> list[FieldRecord]:
        """Group, consolidate and normalise ``records``.

        Parameters
        ----------
        records
            Field records in source order. They are not modified.

        Returns
        -------
        list[FieldRecord]
            Records in first-seen order with absolute amounts, followed by
            the consolidated ``99`` record when one was built.
        """
        grouped = self.group(records)
        below = [r for r in grouped if self.is_below(r)]

        result = grouped
        if len(below) > 1:
            result = [r for r in grouped if not self.is_below(r)]
            total = sum((r.amount for r in below), Decimal(0))
            result.append(FieldRecord.consolidated(total))
            logger.debug("Consolidated %d records below %s into one", len(below), self.limit)

        return [dataclasses.replace(r, amount=abs(r.amount)) for r in result]
