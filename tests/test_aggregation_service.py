from __future__ import annotations

import csv
import io

from ef_mapping.domain.mapping import ActivityInput, Candidate, InputRecord, LoadedRow, RowOutcome
from ef_mapping.services.aggregation_service import (
    aggregate_row,
    echo_source_row,
    output_fields,
    write_csv,
)
from ef_mapping.validators.column_validator import ColumnConfig

SOURCE = {"name": "Steel", "region": "", "comment": "keep"}


def test_success_joins_candidate_names() -> None:
    outcome = RowOutcome(candidates=(Candidate("a", "Steel"), Candidate("b", "Iron")), emissions="1.5")

    record = aggregate_row(SOURCE, outcome)

    assert record == {**SOURCE, "emission_factors": "Steel; Iron", "emissions": "1.5", "error": ""}


def test_not_found_is_not_an_error() -> None:
    record = aggregate_row(SOURCE, RowOutcome(), include_emissions=False)

    assert record == {**SOURCE, "emission_factors": "", "error": ""}


def test_failure_clears_results() -> None:
    record = aggregate_row(SOURCE, RowOutcome(error="boom"))

    assert record["emission_factors"] == ""
    assert record["emissions"] == ""
    assert record["error"] == "boom"


def test_source_row_is_not_mutated() -> None:
    source = dict(SOURCE)

    aggregate_row(source, RowOutcome(error="boom"))

    assert source == SOURCE


def test_output_fields_order() -> None:
    assert output_fields(["comment", "name"], include_emissions=True) == [
        "comment",
        "name",
        "emission_factors",
        "emissions",
        "error",
    ]
    assert output_fields(["name", "error"], include_emissions=False) == [
        "name",
        "emission_factors",
        "error",
    ]
    assert output_fields(["error", "name", "emissions"], include_emissions=True) == [
        "name",
        "emission_factors",
        "emissions",
        "error",
    ]
    assert output_fields(["name", "emissions"], include_emissions=False) == [
        "name",
        "emissions",
        "emission_factors",
        "error",
    ]


def test_result_columns_replace_same_named_source_columns() -> None:
    source = {"name": "Steel", "emission_factors": "old", "emissions": "9", "error": "client note"}

    record = aggregate_row(source, RowOutcome(candidates=(Candidate("a", "Steel"),)))

    assert record == {"name": "Steel", "emission_factors": "Steel", "emissions": "", "error": ""}


def test_echo_source_row_uses_normalized_values() -> None:
    columns = ColumnConfig(activity_value="spend", activity_unit="unit")
    row = LoadedRow(
        source_row={"name": " Steel ", "region": "  ", "spend": " 100", "unit": "USD ", "x": " y "},
        record=InputRecord(name="Steel", activity=ActivityInput("100", "USD")),
    )

    echoed = echo_source_row(row, columns)

    assert echoed == {"name": "Steel", "region": "", "spend": "100", "unit": "USD", "x": " y "}


def test_write_csv_quotes_everything() -> None:
    buffer = io.StringIO()
    fields = output_fields(["name"], include_emissions=False)

    write_csv([{"name": "Steel", "emission_factors": "A; B", "error": ""}], fields, buffer)

    lines = buffer.getvalue().splitlines()
    assert lines[0] == '"name","emission_factors","error"'
    assert lines[1] == '"Steel","A; B",""'
    assert list(csv.DictReader(io.StringIO(buffer.getvalue())))[0]["emission_factors"] == "A; B"
