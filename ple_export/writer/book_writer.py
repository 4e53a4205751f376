"""Book file output.

PLE and PDT importers only accept CRLF line endings, so files are opened
with ``newline=""`` and every line already carries its own ``\\r\\n``.
Existing files are truncated; nothing is ever appended.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from pathlib import Path

import pandas as pd

from ple_export.books.layout import OutputLine
from ple_export.config import setup_logging

logger = setup_logging(__name__)

ENCODING = "utf-8"


@dataclass(frozen=True)
class ExportResult:
    """One file produced by an export.

    Attributes
    ----------
    book_id
        Book code or PDT field code (``"361"``, ``"trial"``).
    path
        Written file.
    line_count
        Number of records written (``0`` for empty books).
    info
        Information flag of the source sheet.
    """

    book_id: str
    path: Path
    line_count: int
    info: bool


def write_lines(path: Path, lines: Iterable[OutputLine]) -> int:
    """Write rendered lines to ``path``, replacing any previous content.

    Parameters
    ----------
    path
        Target file; parent directories are created when missing.
    lines
        Records to render in order. An empty iterable yields a zero-byte file.

    Returns
    -------
    int
        Number of lines written.

    Raises
    ------
    OSError
        If the directory cannot be created or the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding=ENCODING, newline="") as fh:
        for line in lines:
            fh.write(line.render())
            count += 1

    logger.debug("Wrote %d lines to %s", count, path.name)
    return count


def write_empty(path: Path) -> None:
    """Create (or truncate) ``path`` as a zero-byte file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")


def results_frame(results: Sequence[ExportResult]) -> pd.DataFrame:
    """Tabulate export results with one row per file."""
    rows = [{**asdict(r), "path": r.path.name} for r in results]
    return pd.DataFrame(rows, columns=["book_id", "path", "line_count", "info"])


def write_manifest(results: Sequence[ExportResult], path: Path) -> Path:
    """Write a CSV manifest of the files produced by an export.

    Parameters
    ----------
    results
        Export results in production order.
    path
        CSV destination.

    Returns
    -------
    Path
        Location of the written CSV file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    results_frame(results).to_csv(path, index=False, encoding=ENCODING)
    logger.info("Saved export manifest: %s", path)
    return path
