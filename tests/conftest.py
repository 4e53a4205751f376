"""Pytest configuration for ple_export tests.

This module provides:
- The loaded project configuration
- Book parameters for a monthly and an annual book
- A sample balances workbook with filled, empty and unknown sheets
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from ple_export.books.params import BookParameters
from ple_export.config import get_config
from ple_export.reader.document import Document
from tests.helpers import RUC, Rows, balances_header, book_rows

# Load environment variables from project .env so path overrides apply in tests
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


@pytest.fixture
def config() -> dict[str, Any]:
    """Project configuration from ``config/config.json``."""
    return get_config()


@pytest.fixture
def balance_params() -> BookParameters:
    """Parameters of a December 2023 balances book."""
    return BookParameters(RUC, "2023", "12", "31", "01", "1")


@pytest.fixture
def annual_params() -> BookParameters:
    """Parameters of an annual (costs or assets) book."""
    return BookParameters(RUC, "2023", ops_flag="1")


@pytest.fixture
def receivable_rows() -> Rows:
    """Customer receivables in the 030300 layout (flag in column 7)."""
    return [
        ["6", "", "20100047218", "Cliente Grande SAC", "15-03-2023", 15000, "F001/1", "12"],
        ["1", "", "45678912", "Perez Gomez, Juan", "20-04-2023", 4000, "F001/2", "12"],
        ["", "", "", "", "", "", "", ""],
        ["1", "", "45678913", "Rojas Ana", "21-04-2023", 2000, None, "12"],
        ["6", "", "20555555551", "Relacionada SAC", "22-04-2023", 900, "F001/9", "13"],
    ]


@pytest.fixture
def balances_document(receivable_rows: Rows) -> Document:
    """Balances workbook with a mix of filled, empty and unknown sheets."""
    return Document.from_rows(
        {
            "030000": balances_header(),
            "030300": book_rows(True, 5, receivable_rows),
            "030400": book_rows(False, 5, []),
            "031400": book_rows(True, 5, []),
            "notes": [["free text"]],
        },
        title="balances",
    )
