"""PLE book layouts.

Each family module maps sheet names to :class:`BookSpec` entries:

* ``balances``: inventories and balances book (LE030000)
* ``costs``: costs book (LE100000)
* ``assets``: fixed assets book (LE070000)
"""

from ple_export.books.assets import ASSETS_BOOKS
from ple_export.books.balances import BALANCE_BOOKS
from ple_export.books.costs import COSTS_BOOKS
from ple_export.books.filters import excluding_account, flag_equals, has_entry_id, non_blank
from ple_export.books.keys import PrimaryKey, PrimaryKeyGenerator
from ple_export.books.layout import BookSpec, Converter, OutputLine
from ple_export.books.params import (
    INFO_FLAG_OFFSET,
    BookParameters,
    compile_book_name,
    compile_pdt_name,
    compile_trial_name,
)

__all__ = [
    "ASSETS_BOOKS",
    "BALANCE_BOOKS",
    "COSTS_BOOKS",
    "INFO_FLAG_OFFSET",
    "BookParameters",
    "BookSpec",
    "Converter",
    "OutputLine",
    "PrimaryKey",
    "PrimaryKeyGenerator",
    "compile_book_name",
    "compile_pdt_name",
    "compile_trial_name",
    "excluding_account",
    "flag_equals",
    "has_entry_id",
    "non_blank",
]
