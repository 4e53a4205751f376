"""Row builders shared by the test modules."""

from __future__ import annotations

from pathlib import Path
from typing import Any

RUC = "20123456789"

Rows = list[list[Any]]


def header_rows(values: dict[int, Any], size: int = 20) -> Rows:
    """Header sheet rows with ``values`` in column B at the given row indices."""
    rows: Rows = [["", ""] for _ in range(size)]
    for index, value in values.items():
        rows[index][1] = value
    return rows


def book_rows(info: bool, header_skip: int, data: Rows) -> Rows:
    """Book sheet rows: A1 info flag, decoration rows, then ``data``."""
    rows: Rows = [[info]]
    rows.extend([["header"] for _ in range(header_skip - 1)])
    rows.extend(data)
    return rows


def balances_header(uit: float = 5150) -> Rows:
    """Header sheet 030000 for December 31, 2023, oportunity 01."""
    return header_rows({4: RUC, 5: 2023, 6: 12, 7: 31, 8: 1, 15: "1", 19: uit})


def annual_header() -> Rows:
    """Header sheet for annual books (LE100000, 070000)."""
    return header_rows({4: RUC, 5: 2023, 6: "1"}, size=8)


def lines_of(path: Path) -> list[str]:
    """Read a written book file as CRLF-separated records."""
    content = path.read_bytes().decode("utf-8")
    assert content.endswith("\r\n")
    return content.split("\r\n")[:-1]
