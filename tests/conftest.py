from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from ef_mapping.config import LookupSettings
from ef_mapping.domain.mapping import ActivityInput, Candidate, LookupQuery
from ef_mapping.domain.result import Err, Ok, Result


@dataclass
class FakeCatalog:
    """
    In-memory stand-in for the Lune connector.

    ``lookups`` maps a label to either a list of candidates or an error string.
    ``estimates`` maps a candidate id to an amount or an error string.
    """

    lookups: dict[str, list[Candidate] | str] = field(default_factory=dict)
    estimates: dict[str, str] = field(default_factory=dict)
    estimate_errors: dict[str, str] = field(default_factory=dict)
    queries: list[LookupQuery] = field(default_factory=list)
    estimate_calls: list[tuple[str, ActivityInput]] = field(default_factory=list)

    def lookup(self, query: LookupQuery) -> Result[list[Candidate]]:
        self.queries.append(query)
        found = self.lookups.get(query.name, [])
        if isinstance(found, str):
            return Err(found)
        return Ok(list(found))

    def estimate(self, candidate_id: str, activity: ActivityInput) -> Result[str]:
        self.estimate_calls.append((candidate_id, activity))
        if candidate_id in self.estimate_errors:
            return Err(self.estimate_errors[candidate_id])
        return Ok(self.estimates.get(candidate_id, "0"))


@pytest.fixture()
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture()
def lookup_settings() -> LookupSettings:
    return LookupSettings(
        limit=10,
        base_source="exiobase",
        publication_years=(2021,),
        region_extra_sources={"united states of america": ("epa",)},
    )


@pytest.fixture()
def write_csv_file(tmp_path):
    def _write(content: str, name: str = "input.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
