"""Export orchestration: turn a spreadsheet document into book files.

Each processor resolves the book parameters from its header sheet, then
walks the document's sheets in order and exports every sheet it has a
layout for::

    resolve parameters -> for each known sheet:
        read info flag -> skip header -> filter rows -> convert -> write file

Sheets without a layout (including the header sheet itself) are skipped.
A sheet whose information flag is false still produces a zero-byte file so
that every declared book exists for the importer.

The PDT 710 processor follows a different contract: field extracts are
consolidated through :class:`~ple_export.pdt.collector.FieldCollector` and
no file is written when nothing is left to declare.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from pathlib import Path
from typing import Any, ClassVar

from ple_export.books.assets import ASSETS_BOOKS
from ple_export.books.balances import BALANCE_BOOKS, attachment_token
from ple_export.books.costs import COSTS_BOOKS
from ple_export.books.filters import excluding_account, flag_equals
from ple_export.books.layout import BookSpec, OutputLine
from ple_export.books.params import BookParameters, compile_pdt_name, compile_trial_name
from ple_export.config import (
    get_config,
    get_header_cells,
    get_header_config,
    get_pdt710_config,
    get_pdt_fields,
    get_pdt_header_skip,
    get_uit_multiplier,
    setup_logging,
)
from ple_export.pdt.collector import FieldCollector
from ple_export.pdt.fields import FieldRecordBuilder
from ple_export.pdt.trial import trial_line
from ple_export.reader.document import Document, Sheet
from ple_export.writer.book_writer import ExportResult, write_empty, write_lines

logger = setup_logging(__name__)

AttachmentSource = Callable[[str, Path], None]

TRIAL_BOOK_ID = "trial"


# =============================================================================
# Book processors
# =============================================================================


class BookProcessor:
    """Export every sheet of a document that matches a book layout.

    Subclasses set the registry key, a human title, the header family used
    to look up parameter cells in ``config.json``, and the layout table.

    Parameters
    ----------
    config : dict[str, Any], optional
        Preloaded configuration; loaded from disk when ``None``.
    attachment_source : AttachmentSource, optional
        Callable ``(token, path)`` that stores the document referenced by
        an attachment sheet into ``path``.
    """

    key: ClassVar[str] = ""
    title: ClassVar[str] = ""
    header_family: ClassVar[str] = ""
    books: ClassVar[dict[str, BookSpec]] = {}

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        attachment_source: AttachmentSource | None = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.attachment_source = attachment_source

    @property
    def header_sheet_name(self) -> str:
        return str(get_header_config(self.header_family, self.config)["sheet"])

    def parameters(self, document: Document) -> BookParameters:
        """Read the book parameters from the header sheet.

        Raises
        ------
        MissingSheetError
            If the header sheet is not in ``document``.
        """
        sheet = document.sheet(self.header_sheet_name)
        return BookParameters.from_sheet(sheet, get_header_cells(self.header_family, self.config))

    def process(self, document: Document, target: Path) -> list[ExportResult]:
        """Export every known sheet of ``document`` beneath ``target``.

        Parameters
        ----------
        document
            Source spreadsheet.
        target
            Output directory, created when missing.

        Returns
        -------
        list[ExportResult]
            One result per written file, in sheet order.

        Raises
        ------
        MissingSheetError
            If the header sheet is missing; nothing is written in that case.
        OSError
            If a file cannot be written.
        """
        params = self.parameters(document)
        logger.info("%s: ruc=%s period=%s", self.title, params.ruc, params.period_id)

        results: list[ExportResult] = []
        for sheet in document:
            spec = self.books.get(sheet.name)
            if spec is None:
                logger.debug("Skipping sheet without layout: %s", sheet.name)
                continue
            results.append(self.export_book(sheet, spec, params, target))

        logger.info("%s: %d files written to %s", self.title, len(results), target)
        return results

    def export_book(self, sheet: Sheet, spec: BookSpec, params: BookParameters, target: Path) -> ExportResult:
        """Write the file of a single book."""
        info = sheet.info_flag
        path = target / params.compile_file(spec.book_id, info, spec.extension)

        if spec.attachment:
            write_empty(path)
            if info:
                self.fetch_attachment(sheet, path)
            return ExportResult(spec.book_id, path, 0, info)

        if not info:
            write_empty(path)
            logger.debug("Book %s has no information; wrote empty file", spec.book_id)
            return ExportResult(spec.book_id, path, 0, info)

        count = write_lines(path, self.convert(sheet, spec, params))
        logger.info("Book %s: %d lines -> %s", spec.book_id, count, path.name)
        return ExportResult(spec.book_id, path, count, info)

    @staticmethod
    def convert(sheet: Sheet, spec: BookSpec, params: BookParameters) -> list[OutputLine]:
        """Convert a sheet into records according to ``spec``."""
        if spec.sheet_lines is not None:
            return spec.sheet_lines(sheet, params)
        if spec.converter is None:
            return []
        converter = spec.converter(params)
        return [converter(row) for row in sheet.data_rows(spec.header_skip) if spec.row_filter(row)]

    def fetch_attachment(self, sheet: Sheet, path: Path) -> None:
        token = attachment_token(sheet)
        if self.attachment_source is None:
            logger.warning("No attachment source configured; %s left empty", path.name)
            return
        if not token:
            logger.warning("Sheet %s has no attachment reference; %s left empty", sheet.name, path.name)
            return
        self.attachment_source(token, path)
        logger.info("Attachment %s stored in %s", token, path.name)


class BalanceProcessor(BookProcessor):
    """Inventories and balances book, parameters on sheet ``030000``."""

    key = "balances"
    title = "LE030000 - Libro de Inventarios y Balances"
    header_family = "balances"
    books = BALANCE_BOOKS


class CostsProcessor(BookProcessor):
    """Costs book, parameters on sheet ``LE100000``."""

    key = "costs"
    title = "LE100000 - Registro de Costos"
    header_family = "costs"
    books = COSTS_BOOKS


class AssetsProcessor(BookProcessor):
    """Fixed assets book, parameters on sheet ``070000``."""

    key = "assets"
    title = "LE070000 - Registro de Activos Fijos"
    header_family = "assets"
    books = ASSETS_BOOKS


# =============================================================================
# PDT 710
# =============================================================================


class PDT710Processor(BookProcessor):
    """PDT 710 importation files built from the balances workbook.

    One extract per configured form field, consolidated below
    ``UIT x multiplier``, plus the trial balance extract.
    """

    key = "pdt710"
    title = "PDT 710 - Renta Anual"
    header_family = "balances"

    def required_sheets(self) -> list[str]:
        """Source sheets, in configuration order without duplicates."""
        names = [str(entry["sheet"]) for entry in get_pdt_fields(self.config)]
        names.append(self.trial_config["sheet"])
        return list(dict.fromkeys(names))

    @property
    def trial_config(self) -> dict[str, Any]:
        trial = get_pdt710_config(self.config).get("trial_balance", {})
        return {
            "sheet": str(trial.get("sheet", "031700")),
            "header_skip": int(trial.get("header_skip", 3)),
            "excluded_account": str(trial.get("excluded_account", "89")),
        }

    def process(self, document: Document, target: Path) -> list[ExportResult]:
        """Write the PDT 710 extracts for ``document``.

        Raises
        ------
        MissingSheetError
            If the header sheet or any source sheet is missing; checked
            before anything is written.
        """
        params = self.parameters(document)
        sheets = {name: document.sheet(name) for name in self.required_sheets()}
        uit = params.uit if params.uit is not None else Decimal(0)
        multiplier = get_uit_multiplier(self.config)
        header_skip = get_pdt_header_skip(self.config)
        logger.info("%s: ruc=%s year=%s uit=%s", self.title, params.ruc, params.year, uit)

        results: list[ExportResult] = []
        for entry in get_pdt_fields(self.config):
            field_code = int(entry["field"])
            sheet = sheets[str(entry["sheet"])]
            if entry.get("require_info", True) and not sheet.info_flag:
                logger.debug("Field %03d: sheet %s has no information", field_code, sheet.name)
                continue

            row_filter = flag_equals(int(entry.get("flag_column", -1)), entry.get("flag"))
            builder = FieldRecordBuilder.from_config(entry)
            records = [builder(row) for row in sheet.data_rows(header_skip) if row_filter(row)]

            collector = FieldCollector.from_uit(uit, multiplier, bool(entry.get("check_absolute", False)))
            collected = collector.collect(records)
            if not collected:
                logger.debug("Field %03d: nothing to declare", field_code)
                continue

            path = target / compile_pdt_name(params.year, params.ruc, field_code)
            count = write_lines(path, [record.to_line() for record in collected])
            logger.info("Field %03d: %d records -> %s", field_code, count, path.name)
            results.append(ExportResult(f"{field_code:03d}", path, count, True))

        trial = self.export_trial(sheets[self.trial_config["sheet"]], params, target)
        if trial is not None:
            results.append(trial)

        logger.info("%s: %d files written to %s", self.title, len(results), target)
        return results

    def export_trial(self, sheet: Sheet, params: BookParameters, target: Path) -> ExportResult | None:
        """Write the trial balance extract, possibly empty, when the sheet has information."""
        if not sheet.info_flag:
            logger.debug("Trial balance sheet %s has no information", sheet.name)
            return None

        settings = self.trial_config
        row_filter = excluding_account(settings["excluded_account"])
        lines = [trial_line(row) for row in sheet.data_rows(settings["header_skip"]) if row_filter(row)]

        path = target / compile_trial_name(params.ruc, params.year)
        count = write_lines(path, lines)
        logger.info("Trial balance: %d lines -> %s", count, path.name)
        return ExportResult(TRIAL_BOOK_ID, path, count, True)


# =============================================================================
# Registry
# =============================================================================

PROCESSORS: dict[str, type[BookProcessor]] = {
    cls.key: cls for cls in (BalanceProcessor, CostsProcessor, AssetsProcessor, PDT710Processor)
}


def get_processor(
    key: str,
    config: dict[str, Any] | None = None,
    attachment_source: AttachmentSource | None = None,
) -> BookProcessor:
    """Instantiate the processor registered under ``key``.

    Raises
    ------
    ValueError
        If ``key`` is not registered.
    """
    processor_cls = PROCESSORS.get(key)
    if processor_cls is None:
        msg = f"Unknown processor '{key}'. Valid processors: {', '.join(sorted(PROCESSORS))}"
        raise ValueError(msg)
    return processor_cls(config=config, attachment_source=attachment_source)
