"""
ef_mapping/connectors/lune_connector.py

Lune API connector for emission factor lookup and emission estimates.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ef_mapping.config import ExternalHTTPSettings, LuneAPISettings
from ef_mapping.connectors.base import BaseConnector, ConnectorRequestError
from ef_mapping.domain.mapping import ActivityInput, Candidate, LookupQuery
from ef_mapping.domain.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class EmissionFactorRecord(BaseModel):
    """One emission factor as returned by the list endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str = Field(min_length=1)
    name: str


class EmissionFactorPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[EmissionFactorRecord]


class Mass(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    amount: str
    unit: str = "t"


class EmissionEstimate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mass: Mass


def _validation_summary(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}"
        for error in exc.errors()
    )


class LuneConnector(BaseConnector):
    """
    Connector for the Lune emission factor and estimate endpoints.

    Public methods never raise for request or payload problems; failures are
    returned as ``Err`` with the upstream description.
    """

    def __init__(
        self,
        *,
        settings: LuneAPISettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="lune", http_settings=http_settings, session=session)
        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Accept": "application/json",
        }

    def lookup(self, query: LookupQuery) -> Result[list[Candidate]]:
        params: list[tuple[str, Any]] = [
            ("name", query.name),
            ("limit", str(query.limit)),
        ]
        params.extend(("source", source) for source in query.sources)
        params.extend(("publication_year", str(year)) for year in query.publication_years)
        if query.region is not None:
            params.append(("region", query.region))

        try:
            payload = self._request_json(
                method="GET",
                url=f"{self._base_url}/emission-factors",
                params=params,
                headers=self._headers,
            )
        except ConnectorRequestError as exc:
            logger.warning(
                "Emission factor lookup failed name=%r status=%s error=%s",
                query.name,
                exc.status_code,
                exc.description,
            )
            return Err(exc.description)

        try:
            page = EmissionFactorPage.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected emission factor payload shape name=%r", query.name)
            return Err(f"Unexpected emission factor response: {_validation_summary(exc)}")

        return Ok([Candidate(id=record.id, name=record.name) for record in page.data])

    def estimate(self, candidate_id: str, activity: ActivityInput) -> Result[str]:
        body = {
            "emission_factor_id": candidate_id,
            "value": {"value": activity.value, "unit": activity.unit},
        }
        try:
            payload = self._request_json(
                method="POST",
                url=f"{self._base_url}/estimates/emission-factor",
                headers=self._headers,
                json_body=body,
            )
        except ConnectorRequestError as exc:
            logger.warning(
                "Emission estimate failed emission_factor_id=%s status=%s error=%s",
                candidate_id,
                exc.status_code,
                exc.description,
            )
            return Err(exc.description)

        try:
            estimate = EmissionEstimate.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected estimate payload shape emission_factor_id=%s", candidate_id)
            return Err(f"Unexpected estimate response: {_validation_summary(exc)}")

        logger.debug(
            "Estimate computed emission_factor_id=%s amount=%s unit=%s",
            candidate_id,
            estimate.mass.amount,
            estimate.mass.unit,
        )
        return Ok(estimate.mass.amount)
