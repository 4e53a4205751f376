"""Primary keys and correlatives for book records.

Most PLE layouts open every record with a period, a unique operation code
(CUO) and a correlative of the form ``M000000001``. A generator is owned by
a single converter, so numbering restarts at 1 for each exported book.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass

CORRELATIVE_FORMAT = "M{:09d}"


@dataclass(frozen=True)
class PrimaryKey:
    """Leading key fields of a record."""

    period: str
    token: str
    correlative: str

    def fields(self) -> tuple[str, str, str]:
        return (self.period, self.token, self.correlative)


class PrimaryKeyGenerator:
    """Issue strictly increasing correlatives for one period.

    Parameters
    ----------
    period_id
        Period field shared by every key (``yyyyMMdd`` or ``yyyy0000``).
    """

    def __init__(self, period_id: str) -> None:
        self.period_id = period_id
        self._counter = 0
        self._lock = threading.Lock()

    def next_correlative(self) -> int:
        """Advance the counter and return its new value (first call returns 1)."""
        with self._lock:
            self._counter += 1
            return self._counter

    def next_key(self) -> PrimaryKey:
        """Return the next ``(period, uuid4, M-correlative)`` key."""
        number = self.next_correlative()
        return PrimaryKey(self.period_id, str(uuid.uuid4()), CORRELATIVE_FORMAT.format(number))
