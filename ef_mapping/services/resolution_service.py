"""
ef_mapping/services/resolution_service.py

Resolves one input record to emission factor candidates and, when an activity
is supplied, estimates emissions from the best candidate.

"Best" is the first candidate in the order returned by the lookup API; no
local re-ranking is applied.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from ef_mapping.config import LookupSettings
from ef_mapping.domain.mapping import ActivityInput, Candidate, InputRecord, LookupQuery, RowOutcome
from ef_mapping.domain.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class EmissionFactorCatalog(Protocol):
    """
    Remote capability used by the resolver; see ``LuneConnector``.
    """

    def lookup(self, query: LookupQuery) -> Result[list[Candidate]]:
        ...

    def estimate(self, candidate_id: str, activity: ActivityInput) -> Result[str]:
        ...


def dedupe_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """
    Collapse candidates to unique (id, name) pairs, keeping first-seen order.
    """

    seen: set[tuple[str, str]] = set()
    unique: list[Candidate] = []
    for candidate in candidates:
        key = (candidate.id, candidate.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


class ResolutionService:
    """
    Per-row lookup and estimate orchestration on top of a catalog.
    """

    def __init__(
        self,
        *,
        catalog: EmissionFactorCatalog,
        settings: LookupSettings | None = None,
    ) -> None:
        self._catalog = catalog
        self._settings = settings or LookupSettings()

    def build_query(self, record: InputRecord) -> LookupQuery:
        return LookupQuery(
            name=record.name,
            limit=self._settings.limit,
            sources=self._settings.sources_for_region(record.region),
            publication_years=self._settings.publication_years,
            region=record.region,
        )

    def resolve(self, record: InputRecord) -> Result[list[Candidate]]:
        """
        Look up candidates for ``record``; upstream failures are returned as-is.
        """

        query = self.build_query(record)
        logger.debug(
            "Emission factor lookup name=%r region=%r sources=%s",
            query.name,
            query.region,
            ",".join(query.sources),
        )
        return self._catalog.lookup(query)

    def estimate(self, candidate: Candidate, activity: ActivityInput) -> Result[str]:
        return self._catalog.estimate(candidate.id, activity)

    def process(self, record: InputRecord) -> RowOutcome:
        """
        Run lookup, dedup and the optional estimate for one record.

        Any failure after a successful lookup turns the whole row into an
        error row; partial results are not kept.
        """

        resolved = self.resolve(record)
        if resolved.is_err():
            return RowOutcome(error=resolved.error)

        candidates = dedupe_candidates(resolved.value)
        if record.activity is None or not candidates:
            return RowOutcome(candidates=tuple(candidates))

        estimated = self.estimate(candidates[0], record.activity)
        if estimated.is_err():
            return RowOutcome(error=estimated.error)

        return RowOutcome(candidates=tuple(candidates), emissions=estimated.value)
