"""End-to-end tests for the export processors."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from ple_export.processors import (
    PROCESSORS,
    AssetsProcessor,
    BalanceProcessor,
    CostsProcessor,
    PDT710Processor,
    get_processor,
)
from ple_export.reader.document import Document, MissingSheetError
from tests.helpers import Rows, annual_header, balances_header, book_rows, lines_of

RECEIVABLES_FILE = "LE2012345678920231231030300011111.txt"


def written_files(target: Path) -> list[str]:
    return sorted(p.name for p in target.iterdir()) if target.exists() else []


# =============================================================================
# Book processors
# =============================================================================


class TestBalanceProcessor:
    """Tests for the balances book export."""

    def test_exports_known_sheets_only(self, balances_document: Document, tmp_path: Path) -> None:
        results = BalanceProcessor().process(balances_document, tmp_path)

        assert [r.book_id for r in results] == ["030300", "030400", "031400"]
        assert written_files(tmp_path) == sorted(r.path.name for r in results)

    def test_line_count_matches_surviving_rows(self, balances_document: Document, tmp_path: Path) -> None:
        results = BalanceProcessor().process(balances_document, tmp_path)

        receivables = results[0]
        assert receivables.path.name == RECEIVABLES_FILE
        assert receivables.line_count == 4
        lines = lines_of(receivables.path)
        assert len(lines) == 4
        assert [line.split("|")[2] for line in lines] == [f"M00000000{n}" for n in range(1, 5)]
        assert all(line.endswith("|") for line in lines)

    def test_info_flag_false_writes_empty_file(self, balances_document: Document, tmp_path: Path) -> None:
        results = BalanceProcessor().process(balances_document, tmp_path)

        empty = results[1]
        assert empty.info is False
        assert empty.path.name == "LE2012345678920231231030400011011.txt"
        assert empty.path.stat().st_size == 0

    def test_book_without_layout_is_always_empty(self, balances_document: Document, tmp_path: Path) -> None:
        results = BalanceProcessor().process(balances_document, tmp_path)

        book = results[2]
        assert book.path.name == "LE2012345678920231231031400011111.txt"
        assert book.path.stat().st_size == 0

    def test_overwrites_previous_export(self, balances_document: Document, tmp_path: Path) -> None:
        (tmp_path / RECEIVABLES_FILE).write_text("stale content\r\n" * 10, encoding="utf-8")

        BalanceProcessor().process(balances_document, tmp_path)

        assert len(lines_of(tmp_path / RECEIVABLES_FILE)) == 4

    def test_creates_target_directory(self, balances_document: Document, tmp_path: Path) -> None:
        target = tmp_path / "out" / "2023"

        BalanceProcessor().process(balances_document, target)

        assert (target / RECEIVABLES_FILE).exists()

    def test_missing_header_sheet(self, tmp_path: Path) -> None:
        document = Document.from_rows({"030300": book_rows(True, 5, [["6", "", "1", "x", "", 1]])})

        with pytest.raises(MissingSheetError, match="030000"):
            BalanceProcessor().process(document, tmp_path)

        assert written_files(tmp_path) == []

    def test_single_line_book(self, tmp_path: Path) -> None:
        document = Document.from_rows(
            {
                "030000": balances_header(),
                "031601": [[True], [], [], [5000, 500, 10, 0]],
            },
        )

        results = BalanceProcessor().process(document, tmp_path)

        assert lines_of(results[0].path) == ["20231231|5000.00|500.00|10.00|0.00|1|"]

    def test_single_line_book_without_information(self, tmp_path: Path) -> None:
        document = Document.from_rows({"030000": balances_header(), "031601": [[False], [], [], [5000]]})

        results = BalanceProcessor().process(document, tmp_path)

        assert results[0].path.stat().st_size == 0


class TestAttachments:
    """Tests for the LE032300 attachment book."""

    @staticmethod
    def document(info: bool) -> Document:
        return Document.from_rows({"030000": balances_header(), "032300": [[info], [], ["", "", "file-42"]]})

    def test_source_is_called_with_token(self, tmp_path: Path) -> None:
        calls: list[tuple[str, Path]] = []

        def source(token: str, path: Path) -> None:
            calls.append((token, path))
            path.write_bytes(b"%PDF-1.4")

        results = BalanceProcessor(attachment_source=source).process(self.document(True), tmp_path)

        assert results[0].path.name == "LE2012345678920231231032300011111.pdf"
        assert calls == [("file-42", results[0].path)]
        assert results[0].path.read_bytes() == b"%PDF-1.4"

    def test_without_source_file_stays_empty(self, tmp_path: Path) -> None:
        results = BalanceProcessor().process(self.document(True), tmp_path)

        assert results[0].path.stat().st_size == 0

    def test_no_information_skips_source(self, tmp_path: Path) -> None:
        calls: list[str] = []

        results = BalanceProcessor(attachment_source=lambda t, p: calls.append(t)).process(
            self.document(False),
            tmp_path,
        )

        assert calls == []
        assert results[0].path.name.endswith("032300011011.pdf")


class TestAnnualProcessors:
    """Tests for the costs and fixed assets exports."""

    def test_costs(self, tmp_path: Path) -> None:
        document = Document.from_rows(
            {
                "LE100000": annual_header(),
                "100100": book_rows(True, 3, [[100, 200, 300, 400], ["", 1, 1, 1]]),
                "100200": book_rows(False, 3, []),
            },
        )

        results = CostsProcessor().process(document, tmp_path)

        assert [r.path.name for r in results] == [
            "LE2012345678920230000100100001111.txt",
            "LE2012345678920230000100200001011.txt",
        ]
        assert lines_of(results[0].path) == ["20230000|100.00|200.00|300.00|400.00|1|"]

    def test_assets(self, tmp_path: Path) -> None:
        document = Document.from_rows(
            {
                "070000": annual_header(),
                "070400": book_rows(True, 3, [["A-1", "01-01-2023", "CT", "", "01-01-2026", 36, 900]]),
            },
        )

        results = AssetsProcessor().process(document, tmp_path)

        line = lines_of(results[0].path)[0]
        assert results[0].path.name == "LE2012345678920230000070400001111.txt"
        assert line.startswith("20230000|")
        assert line.endswith("|9|A-1|01/01/2023|CT|01/01/2026|36|900.00|1|")

    def test_costs_missing_header(self, tmp_path: Path) -> None:
        with pytest.raises(MissingSheetError):
            CostsProcessor().process(Document.from_rows({"100100": [[True]]}), tmp_path)


# =============================================================================
# PDT 710
# =============================================================================


def pdt_document(receivable_rows: Rows, trial_rows: Rows, **info: bool) -> Document:
    sheets = {"030000": balances_header(uit=5150)}
    for name in ("030300", "030500", "030600", "031200", "031300"):
        data = receivable_rows if name == "030300" else []
        sheets[name] = book_rows(info.get(f"s{name}", name == "030300"), 5, data)
    sheets["031700"] = book_rows(info.get("s031700", True), 3, trial_rows)
    return Document.from_rows(sheets)


@pytest.fixture
def trial_rows() -> Rows:
    return [
        ["10", "Caja", 100.9, 0, 5, 0, 0, 0, 0, 0, 7, 8],
        ["89", "Resultado", 1, 1, 1, 1, 0, 0, 0, 0, 1, 1],
        ["", "", "", ""],
        ["40", "Tributos", 0, 250.5, 0, 0, 0, 0, 0, 0, 0, 0],
    ]


class TestPDT710Processor:
    """Tests for the PDT 710 extracts."""

    def test_receivables_are_consolidated(
        self,
        receivable_rows: Rows,
        trial_rows: Rows,
        tmp_path: Path,
    ) -> None:
        results = PDT710Processor().process(pdt_document(receivable_rows, trial_rows), tmp_path)

        by_id = {r.book_id: r for r in results}
        assert by_id["361"].path.name == "0710202320123456789361.txt"
        assert lines_of(by_id["361"].path) == [
            "06|20100047218|0||||CLIENTE GRANDE SAC|15000",
            "99|||||||6000",
        ]
        assert by_id["361"].line_count == 2

    def test_single_small_record_is_kept(self, receivable_rows: Rows, trial_rows: Rows, tmp_path: Path) -> None:
        results = PDT710Processor().process(pdt_document(receivable_rows, trial_rows), tmp_path)

        by_id = {r.book_id: r for r in results}
        assert lines_of(by_id["362"].path) == ["06|20555555551|0||||RELACIONADA SAC|900"]

    def test_empty_fields_write_no_file(self, receivable_rows: Rows, trial_rows: Rows, tmp_path: Path) -> None:
        results = PDT710Processor().process(pdt_document(receivable_rows, trial_rows), tmp_path)

        assert [r.book_id for r in results] == ["361", "362", "trial"]
        assert written_files(tmp_path) == sorted(r.path.name for r in results)

    def test_trial_balance(self, receivable_rows: Rows, trial_rows: Rows, tmp_path: Path) -> None:
        results = PDT710Processor().process(pdt_document(receivable_rows, trial_rows), tmp_path)

        trial = results[-1]
        assert trial.path.name == "0710201234567892023.txt"
        assert lines_of(trial.path) == ["10|100|0|5|0|7|8|0|0|", "40|0|250|0|0|0|0|0|0|"]

    def test_sheets_without_information_write_nothing(
        self,
        receivable_rows: Rows,
        trial_rows: Rows,
        tmp_path: Path,
    ) -> None:
        document = pdt_document(receivable_rows, trial_rows, s030300=False, s031700=False)

        results = PDT710Processor().process(document, tmp_path)

        assert results == []
        assert written_files(tmp_path) == []

    def test_trial_balance_without_rows_writes_empty_file(self, receivable_rows: Rows, tmp_path: Path) -> None:
        only_excluded = [["89", "Resultado", 1, 1, 1, 1, 0, 0, 0, 0, 1, 1]]

        results = PDT710Processor().process(pdt_document(receivable_rows, only_excluded), tmp_path)

        trial = results[-1]
        assert trial.book_id == "trial"
        assert trial.line_count == 0
        assert trial.path.name == "0710201234567892023.txt"
        assert trial.path.read_bytes() == b""

    def test_payables_ignore_information_flag(self, receivable_rows: Rows, trial_rows: Rows, tmp_path: Path) -> None:
        document = pdt_document(receivable_rows, trial_rows, s031300=False)
        payables = book_rows(False, 5, [["6", "", "20100047218", "10-05-2023", "Proveedor SAC", "001", 50000, "", "46"]])
        document.sheets = [s for s in document.sheets if s.name != "031300"]
        document.sheets.append(Document.from_rows({"031300": payables}).sheet("031300"))

        results = PDT710Processor().process(document, tmp_path)

        by_id = {r.book_id: r for r in results}
        assert by_id["407"].path.name == "0710202320123456789407.txt"
        assert lines_of(by_id["407"].path) == ["06|20100047218|0||||PROVEEDOR SAC|50000"]
        assert "408" not in by_id

    def test_missing_source_sheet(self, receivable_rows: Rows, trial_rows: Rows, tmp_path: Path) -> None:
        document = pdt_document(receivable_rows, trial_rows)
        document.sheets = [s for s in document.sheets if s.name != "031300"]

        with pytest.raises(MissingSheetError, match="031300"):
            PDT710Processor().process(document, tmp_path)

        assert written_files(tmp_path) == []

    def test_required_sheets(self) -> None:
        assert PDT710Processor().required_sheets() == ["030300", "030500", "030600", "031200", "031300", "031700"]


# =============================================================================
# Registry
# =============================================================================


class TestRegistry:
    """Tests for get_processor."""

    @pytest.mark.parametrize(
        ("key", "cls"),
        [("balances", BalanceProcessor), ("costs", CostsProcessor), ("assets", AssetsProcessor), ("pdt710", PDT710Processor)],
    )
    def test_resolves_processors(self, key: str, cls: type) -> None:
        assert isinstance(get_processor(key), cls)

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Valid processors: assets, balances, costs, pdt710"):
            get_processor("sales")

    def test_titles(self) -> None:
        assert all(cls.title for cls in PROCESSORS.values())

    def test_config_is_passed_through(self, config: dict[str, Any]) -> None:
        assert get_processor("costs", config=config).config is config
