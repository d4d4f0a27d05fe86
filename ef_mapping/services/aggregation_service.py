"""
ef_mapping/services/aggregation_service.py

Builds output rows from source rows and per-row outcomes, and serializes them.

Output columns are every source column in header order followed by:

    emission_factors — candidate names joined with "; " (empty when none)
    emissions        — estimated amount; only present when activity columns
                       are configured, empty when no estimate was made
    error            — failure reason, empty on success
"""

from __future__ import annotations

import csv
from typing import Mapping, Sequence, TextIO

from ef_mapping.domain.mapping import InputRecord, LoadedRow, OutputRecord, RowOutcome
from ef_mapping.validators.column_validator import ColumnConfig

EMISSION_FACTORS_FIELD = "emission_factors"
EMISSIONS_FIELD = "emissions"
ERROR_FIELD = "error"
NAMES_SEPARATOR = "; "


def output_fields(headers: Sequence[str], *, include_emissions: bool) -> list[str]:
    """
    Ordered output columns; result columns replace same-named source columns.
    """

    result_fields = [EMISSION_FACTORS_FIELD]
    if include_emissions:
        result_fields.append(EMISSIONS_FIELD)
    result_fields.append(ERROR_FIELD)

    seen: dict[str, None] = {}
    for name in headers:
        if name not in result_fields:
            seen.setdefault(name, None)
    for name in result_fields:
        seen.setdefault(name, None)
    return list(seen)


def echo_source_row(row: LoadedRow, columns: ColumnConfig) -> dict[str, str]:
    """
    Copy the source row, replacing configured columns with normalized values.
    """

    echoed = dict(row.source_row)
    record: InputRecord = row.record
    echoed[columns.name] = record.name
    if columns.region is not None:
        echoed[columns.region] = record.region or ""
    if columns.has_activity:
        activity = record.activity
        echoed[columns.activity_value] = activity.value if activity else echoed[columns.activity_value].strip()
        echoed[columns.activity_unit] = activity.unit if activity else echoed[columns.activity_unit].strip()
    return echoed


def aggregate_row(
    source_row: Mapping[str, str],
    outcome: RowOutcome,
    *,
    include_emissions: bool = True,
) -> OutputRecord:
    """
    Merge one source row with its outcome. Never raises.
    """

    record: OutputRecord = dict(source_row)
    if outcome.failed:
        record[EMISSION_FACTORS_FIELD] = ""
        if include_emissions:
            record[EMISSIONS_FIELD] = ""
        record[ERROR_FIELD] = outcome.error or ""
        return record

    record[EMISSION_FACTORS_FIELD] = NAMES_SEPARATOR.join(
        candidate.name for candidate in outcome.candidates
    )
    if include_emissions:
        record[EMISSIONS_FIELD] = outcome.emissions or ""
    record[ERROR_FIELD] = ""
    return record


def write_csv(records: Sequence[OutputRecord], fields: Sequence[str], stream: TextIO) -> None:
    """
    Write ``records`` with a header row, every field quoted.
    """

    writer = csv.DictWriter(
        stream,
        fieldnames=list(fields),
        extrasaction="ignore",
        restval="",
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    writer.writeheader()
    for record in records:
        writer.writerow(record)
