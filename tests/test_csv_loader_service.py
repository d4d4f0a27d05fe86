"""
tests/test_csv_loader_service.py

Loading is all-or-nothing: every failure below yields a single Err and no rows.
"""

from __future__ import annotations

import pytest

from ef_mapping.domain.mapping import ActivityInput, InputRecord
from ef_mapping.services.csv_loader_service import CSVLoaderService, parse_csv_checked
from ef_mapping.validators.column_validator import ColumnConfig


@pytest.fixture()
def loader() -> CSVLoaderService:
    return CSVLoaderService()


class TestCSVLoaderService:
    def test_loads_trimmed_records_and_keeps_source_rows(self, loader, write_csv_file) -> None:
        path = write_csv_file("name,region,comment\n  Steel ,,keep me\nCement, France ,x\n")

        result = loader.load(path, ColumnConfig())

        assert result.is_ok()
        rows = result.value
        assert [row.record for row in rows] == [
            InputRecord(name="Steel", region=None),
            InputRecord(name="Cement", region="France"),
        ]
        assert rows[0].source_row == {"name": "  Steel ", "region": "", "comment": "keep me"}

    def test_whitespace_region_is_absent(self, loader, write_csv_file) -> None:
        path = write_csv_file("name,region\nSteel,   \n")

        result = loader.load(path, ColumnConfig())

        assert result.value[0].record.region is None

    def test_blank_name_aborts_with_row_index(self, loader, write_csv_file) -> None:
        path = write_csv_file("name,region\nSteel,\n,France\n")

        result = loader.load(path, ColumnConfig())

        assert result.is_err()
        assert result.error == "row 2: name must not be blank"

    def test_whitespace_name_is_blank(self, loader, write_csv_file) -> None:
        path = write_csv_file("name,region\n   ,France\n")

        result = loader.load(path, ColumnConfig())

        assert result.error == "row 1: name must not be blank"

    def test_missing_configured_column_aborts(self, loader, write_csv_file) -> None:
        path = write_csv_file("name\nSteel\n")

        result = loader.load(path, ColumnConfig())

        assert result.is_err()
        assert result.error == "row 1: Property region is not a string: undefined"

    def test_region_column_not_required_when_unconfigured(self, loader, write_csv_file) -> None:
        path = write_csv_file("name\nSteel\n")

        result = loader.load(path, ColumnConfig(region=None))

        assert result.value[0].record == InputRecord(name="Steel")

    def test_activity_requires_both_value_and_unit(self, loader, write_csv_file) -> None:
        path = write_csv_file("name,region,spend,currency\nSteel,,100, USD \nCement,,,EUR\n")
        columns = ColumnConfig(activity_value="spend", activity_unit="currency")

        result = loader.load(path, columns)

        assert result.value[0].record.activity == ActivityInput(value="100", unit="USD")
        assert result.value[1].record.activity is None

    def test_missing_file_is_reported(self, loader, tmp_path) -> None:
        result = loader.load(tmp_path / "absent.csv", ColumnConfig())

        assert result.is_err()
        assert result.error.startswith("Failed to load ")

    def test_header_only_file_has_no_rows(self, loader, write_csv_file) -> None:
        result = loader.load(write_csv_file("name,region\n"), ColumnConfig())

        assert result.error == "The CSV file contains no data rows"

    def test_load_with_headers_returns_header_order(self, loader, write_csv_file) -> None:
        path = write_csv_file("\ufeffcomment,name,region\nx,Steel,\n")

        result = loader.load_with_headers(path, ColumnConfig())

        headers, rows = result.value
        assert headers == ["comment", "name", "region"]
        assert len(rows) == 1


class TestParseCSVChecked:
    def test_rejects_inconsistent_record_length(self) -> None:
        result = parse_csv_checked(b"name,region\nSteel,France,extra\n")

        assert result.is_err()
        assert "expected 2 fields, got 3" in result.error

    def test_rejects_empty_content(self) -> None:
        result = parse_csv_checked(b"")

        assert result.error == "Failed to parse CSV content: the header row is missing"

    def test_rejects_non_utf8_content(self) -> None:
        result = parse_csv_checked(b"name\n\xff\xfe\n")

        assert result.is_err()
        assert result.error.startswith("Failed to parse CSV content")

    def test_skips_blank_lines_and_handles_quotes(self) -> None:
        result = parse_csv_checked(b'name,region\n\n"Steel, hot rolled",France\n')

        assert result.value.rows == [{"name": "Steel, hot rolled", "region": "France"}]

    def test_reports_unterminated_quote(self) -> None:
        result = parse_csv_checked(b'name\n"Steel\n')

        assert result.is_err()
