"""ple-export: SUNAT PLE book files and PDT 710 extracts from spreadsheets.

The package reads accounting workbooks (one worksheet per book section),
converts their rows into the pipe-delimited records expected by the PLE
importer, and writes one file per book with the regulatory file name.

Architecture
------------
* ``reader``: In-memory ``Document`` model and the pandas/openpyxl ``.xlsx`` loader.
* ``utils``: Cell formatting rules (decimals, dates, truncated text) with documented defaults.
* ``books``: Book parameters, file naming, primary keys, row filters and per-family layouts.
* ``pdt``: PDT 710 field records, UIT threshold consolidation and the trial balance extract.
* ``writer``: CRLF book files and CSV export manifests.
* ``processors``: Per-family orchestration and the processor registry.

Configuration
-------------
Header-sheet cell coordinates and the PDT 710 field table live in
``config/config.json``. Output and log paths respect ``PLE_OUTPUT_DIR`` and
``LOGS_DIR`` overrides.

Examples
--------
Export the balances book of a workbook:

    >>> python -m ple_export.main_export --input balances.xlsx --processor balances

Build the PDT 710 extracts from the same workbook:

    >>> python -m ple_export.main_export -i balances.xlsx -p pdt710 -o out/pdt
"""

__version__ = "0.1.0"
__all__ = ["__version__"]


def get_version() -> str:
    """Return the current package version string.

    Returns
    -------
    str
        Semantic version identifier (e.g., ``"0.1.0"``).
    """
    return __version__


__all__.append("get_version")
