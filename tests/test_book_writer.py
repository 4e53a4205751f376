"""Tests for book file output."""

from __future__ import annotations

from pathlib import Path

from ple_export.books.layout import OutputLine
from ple_export.writer.book_writer import ExportResult, results_frame, write_empty, write_lines


class TestOutputLine:
    """Tests for record rendering."""

    def test_trailing_separator(self) -> None:
        assert OutputLine(("a", "b")).render() == "a|b|\r\n"

    def test_without_trailing_separator(self) -> None:
        assert OutputLine(("a", "b"), trailing_separator=False).render() == "a|b\r\n"

    def test_of_flattens_iterables(self) -> None:
        line = OutputLine.of("p", ["x", "y"], ("z",), "1")

        assert line.fields == ("p", "x", "y", "z", "1")
        assert len(line) == 5


class TestWriteLines:
    """Tests for write_lines and write_empty."""

    def test_crlf_and_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "book.txt"

        count = write_lines(path, [OutputLine(("Año", "ñandú")), OutputLine(("b",))])

        assert count == 2
        assert path.read_bytes() == "Año|ñandú|\r\nb|\r\n".encode()

    def test_empty_iterable_gives_zero_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "book.txt"

        assert write_lines(path, []) == 0
        assert path.stat().st_size == 0

    def test_truncates_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "book.txt"
        path.write_text("old\r\nold\r\n", encoding="utf-8")

        write_lines(path, [OutputLine(("new",))])

        assert path.read_bytes() == b"new|\r\n"

    def test_write_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b.pdf"
        path.parent.mkdir()
        path.write_bytes(b"data")

        write_empty(path)

        assert path.read_bytes() == b""


def test_results_frame(tmp_path: Path) -> None:
    results = [
        ExportResult("030100", tmp_path / "LE1.txt", 3, True),
        ExportResult("030400", tmp_path / "LE2.txt", 0, False),
    ]

    frame = results_frame(results)

    assert list(frame.columns) == ["book_id", "path", "line_count", "info"]
    assert frame["path"].tolist() == ["LE1.txt", "LE2.txt"]
    assert frame["line_count"].tolist() == [3, 0]
