"""
ef_mapping/services/mapping_pipeline.py

Sequential row pipeline: resolve every loaded row and aggregate the results.

Rows are processed one at a time in source order. A failing row is recorded
in its ``error`` column and never stops the batch, so the output always has
exactly one row per input row.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ef_mapping.domain.mapping import LoadedRow, MappingRunSummary, OutputRecord
from ef_mapping.logging_utils import log_event
from ef_mapping.services.aggregation_service import aggregate_row, echo_source_row
from ef_mapping.services.resolution_service import ResolutionService
from ef_mapping.validators.column_validator import ColumnConfig

_module_logger = logging.getLogger(__name__)


class MappingPipeline:
    """
    Drives ResolutionService over loaded rows.

    ``verbose`` is passed in explicitly and only controls per-row progress
    lines; it has no effect on outcomes.
    """

    def __init__(
        self,
        *,
        resolver: ResolutionService,
        columns: ColumnConfig,
        verbose: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self._resolver = resolver
        self._columns = columns
        self._verbose = verbose
        self._logger = logger or _module_logger

    def run(self, rows: Sequence[LoadedRow]) -> MappingRunSummary:
        records: list[OutputRecord] = []
        rows_resolved = 0
        rows_not_found = 0
        rows_failed = 0
        include_emissions = self._columns.has_activity

        for index, row in enumerate(rows, start=1):
            outcome = self._resolver.process(row.record)
            records.append(
                aggregate_row(
                    echo_source_row(row, self._columns),
                    outcome,
                    include_emissions=include_emissions,
                )
            )

            if outcome.failed:
                rows_failed += 1
                status = "failed"
            elif outcome.candidates:
                rows_resolved += 1
                status = "resolved"
            else:
                rows_not_found += 1
                status = "not_found"

            if self._verbose:
                log_event(
                    self._logger,
                    logging.INFO,
                    "row_processed",
                    row=index,
                    total=len(rows),
                    name=row.record.name,
                    region=row.record.region,
                    status=status,
                    candidates=len(outcome.candidates),
                    emissions=outcome.emissions,
                    error=outcome.error,
                )

        return MappingRunSummary(
            records=records,
            rows_resolved=rows_resolved,
            rows_not_found=rows_not_found,
            rows_failed=rows_failed,
        )
