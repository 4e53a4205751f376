"""Writer module for book files and export manifests.

Book files: LE<ruc><period><book>...11.txt, CRLF terminated, UTF-8
Manifest: one CSV row per written file
"""

from ple_export.writer.book_writer import (
    ExportResult,
    results_frame,
    write_empty,
    write_lines,
    write_manifest,
)

__all__ = [
    "ExportResult",
    "results_frame",
    "write_empty",
    "write_lines",
    "write_manifest",
]
