"""
ef_mapping/services package marker.
"""

from ef_mapping.services.aggregation_service import aggregate_row, output_fields, write_csv
from ef_mapping.services.csv_loader_service import CSVLoaderService
from ef_mapping.services.mapping_pipeline import MappingPipeline
from ef_mapping.services.resolution_service import ResolutionService, dedupe_candidates

__all__ = [
    "CSVLoaderService",
    "MappingPipeline",
    "ResolutionService",
    "aggregate_row",
    "dedupe_candidates",
    "output_fields",
    "write_csv",
]
