"""
ef_mapping/services/csv_loader_service.py

Loads and validates the client CSV file into typed input records.

Loading is all-or-nothing: the first unreadable file, malformed CSV or invalid
row aborts the whole load with one message, since a missing column is a
configuration problem that would affect every row.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from ef_mapping.domain.mapping import ActivityInput, InputRecord, LoadedRow
from ef_mapping.domain.result import Err, Ok, Result
from ef_mapping.validators.column_validator import ColumnConfig
from ef_mapping.validators.csv_validator import CSVRowValidator

logger = logging.getLogger(__name__)


class ParsedCSV:
    """
    Header and raw data rows of a parsed CSV document.
    """

    __slots__ = ("headers", "rows")

    def __init__(self, headers: list[str], rows: list[dict[str, str]]) -> None:
        self.headers = headers
        self.rows = rows


def read_file_checked(path: str | Path) -> Result[bytes]:
    """
    Read ``path`` and convert any OS error into ``Err``.
    """

    try:
        return Ok(Path(path).read_bytes())
    except OSError as exc:
        return Err(f"Failed to load {path}: {exc}")


def parse_csv_checked(content: bytes) -> Result[ParsedCSV]:
    """
    Parse CSV bytes whose first row holds the column names.

    Every data row must have exactly as many cells as the header; fully empty
    lines are skipped.
    """

    try:
        text = content.decode("utf-8-sig")
        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        headers = next(reader, None)
        if not headers:
            return Err("Failed to parse CSV content: the header row is missing")

        rows: list[dict[str, str]] = []
        for cells in reader:
            if not cells:
                continue
            if len(cells) != len(headers):
                return Err(
                    "Failed to parse CSV content: invalid record length on line "
                    f"{reader.line_num}: expected {len(headers)} fields, got {len(cells)}"
                )
            rows.append(dict(zip(headers, cells)))
    except UnicodeDecodeError as exc:
        return Err(f"Failed to parse CSV content: file must be UTF-8 encoded ({exc})")
    except csv.Error as exc:
        return Err(f"Failed to parse CSV content: {exc}")

    return Ok(ParsedCSV(headers=headers, rows=rows))


class CSVLoaderService:
    """
    Reads a CSV file and produces one LoadedRow per data row.
    """

    def __init__(self, *, validator: CSVRowValidator | None = None) -> None:
        self._validator = validator or CSVRowValidator()

    def load(self, path: str | Path, columns: ColumnConfig) -> Result[list[LoadedRow]]:
        loaded = self.load_with_headers(path, columns)
        if loaded.is_err():
            return loaded
        return Ok(loaded.value[1])

    def load_with_headers(
        self,
        path: str | Path,
        columns: ColumnConfig,
    ) -> Result[tuple[list[str], list[LoadedRow]]]:
        """
        Like ``load`` but also returns the header row for output ordering.
        """

        content = read_file_checked(path)
        if content.is_err():
            return content

        parsed = parse_csv_checked(content.value)
        if parsed.is_err():
            return parsed

        if not parsed.value.rows:
            return Err("The CSV file contains no data rows")

        required_fields = columns.required_fields()
        loaded_rows: list[LoadedRow] = []
        for index, raw_row in enumerate(parsed.value.rows, start=1):
            validated = self._validator.validate_string_record(raw_row, required_fields)
            if validated.is_err():
                return Err(f"row {index}: {validated.error}")

            record = self._build_record(validated.value, columns)
            if record.is_err():
                return Err(f"row {index}: {record.error}")

            loaded_rows.append(LoadedRow(source_row=raw_row, record=record.value))

        logger.info("Loaded CSV rows path=%s rows=%s", path, len(loaded_rows))
        return Ok((parsed.value.headers, loaded_rows))

    def _build_record(self, row: dict[str, str], columns: ColumnConfig) -> Result[InputRecord]:
        name = row[columns.name].strip()
        if not name:
            return Err("name must not be blank")

        region = None
        if columns.region is not None:
            region = self._validator.optional_value(row[columns.region])

        activity = None
        if columns.has_activity:
            value = self._validator.optional_value(row[columns.activity_value])
            unit = self._validator.optional_value(row[columns.activity_unit])
            if value is not None and unit is not None:
                activity = ActivityInput(value=value, unit=unit)

        return Ok(InputRecord(name=name, region=region, activity=activity))
