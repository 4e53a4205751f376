#!/usr/bin/env python3
"""Book export orchestrator - load a workbook, then write its PLE files.

This module runs one export end to end:
1. Load the ``.xlsx`` workbook into an in-memory document
2. Resolve the requested processor (balances, costs, assets, pdt710)
3. Write every book file beneath the output directory
4. Optionally save a CSV manifest of the written files
5. Print a summary table

Usage (from project root):
    python -m ple_export.main_export --input book.xlsx --processor balances
    python -m ple_export.main_export -i costs.xlsx -p costs --output out/
    python -m ple_export.main_export -i book.xlsx -p pdt710 --quiet

CLI Flags:
    --input, -i      Workbook to export (required)
    --processor, -p  Processor key (required)
    --output, -o     Output directory (default: PLE_OUTPUT_DIR or data/output)
    --manifest       Also write a CSV manifest of the produced files
    --quiet          Suppress the summary table
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ple_export.config import OUTPUT_DIR, setup_logging
from ple_export.processors import PROCESSORS, get_processor
from ple_export.reader.document import MissingSheetError
from ple_export.reader.workbook_reader import load_workbook
from ple_export.writer.book_writer import ExportResult, results_frame, write_manifest

logger = setup_logging(__name__)

MANIFEST_NAME = "manifest.csv"


def run_export(
    input_path: Path,
    processor_key: str,
    output_dir: Path,
    manifest: bool = False,
    verbose: bool = True,
) -> list[ExportResult]:
    """Export one workbook with the given processor.

    Parameters
    ----------
    input_path : Path
        Workbook to read.
    processor_key : str
        Key in :data:`~ple_export.processors.PROCESSORS`.
    output_dir : Path
        Directory receiving the book files.
    manifest : bool, optional
        Save ``manifest.csv`` next to the book files when ``True``.
    verbose : bool, optional
        Print the summary table when ``True``.

    Returns
    -------
    list[ExportResult]
        Files produced, in export order.
    """
    processor = get_processor(processor_key)
    logger.info("Exporting %s with %s", input_path.name, processor.title)

    # Step 1: Load workbook
    document = load_workbook(input_path)

    # Step 2: Export books
    results = processor.process(document, output_dir)

    # Step 3: Save manifest
    if manifest:
        write_manifest(results, output_dir / MANIFEST_NAME)

    # Step 4: Print summary
    if verbose:
        print_summary(processor.title, results)

    return results


def print_summary(title: str, results: list[ExportResult]) -> None:
    """Print the files produced by an export as a table."""
    print(title)
    if not results:
        print("(no files written)")
        return
    print(results_frame(results).to_string(index=False))


# =============================================================================
# CLI
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Parse CLI flags and run the export.

    Returns
    -------
    int
        ``0`` on success; ``1`` when the export failed.
    """
    parser = argparse.ArgumentParser(
        description="Export SUNAT PLE books and PDT 710 extracts from a workbook.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ple_export.main_export -i balances.xlsx -p balances
  python -m ple_export.main_export -i balances.xlsx -p pdt710 -o out/pdt
  python -m ple_export.main_export -i assets.xlsx -p assets --manifest
        """,
    )
    parser.add_argument("--input", "-i", type=Path, required=True, help="Workbook (.xlsx) to export")
    parser.add_argument(
        "--processor",
        "-p",
        required=True,
        choices=sorted(PROCESSORS),
        help="Book family to export",
    )
    parser.add_argument("--output", "-o", type=Path, default=OUTPUT_DIR, help="Output directory")
    parser.add_argument("--manifest", action="store_true", help="Write a CSV manifest of produced files")
    parser.add_argument("--quiet", action="store_true", help="Don't print summary")

    args = parser.parse_args(argv)

    try:
        run_export(
            input_path=args.input,
            processor_key=args.processor,
            output_dir=args.output,
            manifest=args.manifest,
            verbose=not args.quiet,
        )
    except MissingSheetError as e:
        logger.error("Export aborted: %s", e)
        return 1
    except (ValueError, OSError) as e:
        logger.error("Export failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
