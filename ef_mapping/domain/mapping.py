"""
ef_mapping/domain/mapping.py

Domain models used by the emission-factor mapping flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class ActivityInput:
    """
    Client-supplied activity quantity, e.g. ``100`` ``USD``.

    Kept as strings; the estimate API parses the amount.
    """

    value: str
    unit: str


@dataclass(frozen=True)
class InputRecord:
    """
    Typed, normalized view of one CSV data row.
    """

    name: str
    region: str | None = None
    activity: ActivityInput | None = None


@dataclass(frozen=True)
class LoadedRow:
    """
    One loaded CSV row: the verbatim source mapping plus its typed record.
    """

    source_row: Mapping[str, str]
    record: InputRecord


@dataclass(frozen=True)
class Candidate:
    """
    Reduced (id, name) projection of an emission factor match.
    """

    id: str
    name: str


@dataclass(frozen=True)
class LookupQuery:
    """
    Parameters sent to the emission factor lookup endpoint.
    """

    name: str
    limit: int
    sources: tuple[str, ...]
    publication_years: tuple[int, ...]
    region: str | None = None


@dataclass(frozen=True)
class RowOutcome:
    """
    Per-row processing result consumed by the output aggregator.

    Exactly one of ``error`` or ``candidates`` is meaningful: when ``error`` is
    set the row failed either during lookup or during the estimate call.
    """

    candidates: tuple[Candidate, ...] = ()
    emissions: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class MappingRunSummary:
    """
    End-of-run mapping summary.
    """

    records: list[dict[str, str]] = field(default_factory=list)
    rows_resolved: int = 0
    rows_not_found: int = 0
    rows_failed: int = 0

    @property
    def rows_processed(self) -> int:
        return len(self.records)


# Source columns plus emission_factors / emissions / error, in output order.
OutputRecord = dict[str, str]
