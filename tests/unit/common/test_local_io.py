"""Tests for common.local_io module."""

import json
from pathlib import Path

import pytest

from common.local_io import read_table, table_format, write_table


class TestReadTable:
    def test_reads_csv(self, tmp_path: Path) -> None:
        path = tmp_path / "in.csv"
        path.write_text('name,location\nAnna,"Munich, Berlin"\nBen,\n', encoding="utf-8")
        rows = read_table(path)
        assert rows == [
            {"name": "Anna", "location": "Munich, Berlin"},
            {"name": "Ben", "location": ""},
        ]

    def test_reads_jsonl_skipping_blank_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "in.jsonl"
        path.write_text('{"location": "Augsburg"}\n\n{"location": null}\n', encoding="utf-8")
        assert read_table(path) == [{"location": "Augsburg"}, {"location": None}]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Input file not found"):
            read_table(tmp_path / "missing.csv")

    def test_unsupported_format_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "in.xlsx"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported table format"):
            read_table(path)


class TestWriteTable:
    def test_writes_csv_with_header(self, tmp_path: Path) -> None:
        path = write_table(
            [{"term": "Augsburg", "wikidata_qid": "Q2749"}],
            tmp_path / "out" / "links.csv",
        )
        assert path.read_text(encoding="utf-8").splitlines() == [
            "term,wikidata_qid",
            "Augsburg,Q2749",
        ]

    def test_writes_jsonl(self, tmp_path: Path) -> None:
        path = write_table(
            [{"term": "München", "wikidata_qid": "Q1726"}],
            tmp_path / "links.jsonl",
        )
        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line) for line in lines] == [
            {"term": "München", "wikidata_qid": "Q1726"}
        ]
        assert "München" in lines[0]

    def test_empty_csv_is_created(self, tmp_path: Path) -> None:
        path = write_table([], tmp_path / "empty.csv")
        assert path.exists()
        assert path.read_text() == ""

    def test_empty_csv_keeps_header(self, tmp_path: Path) -> None:
        path = write_table([], tmp_path / "empty.csv", fieldnames=["term", "wikidata_qid"])
        assert path.read_text(encoding="utf-8").splitlines() == ["term,wikidata_qid"]


class TestTableFormat:
    def test_returns_lowercase_suffix(self) -> None:
        assert table_format("links.JSONL") == ".jsonl"

    def test_rejects_unknown_suffix(self) -> None:
        with pytest.raises(ValueError, match="Unsupported table format"):
            table_format("links.parquet")
