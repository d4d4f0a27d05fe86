"""
ef_mapping/domain package marker.
"""

from ef_mapping.domain.mapping import (
    ActivityInput,
    Candidate,
    InputRecord,
    LoadedRow,
    LookupQuery,
    MappingRunSummary,
    OutputRecord,
    RowOutcome,
)
from ef_mapping.domain.result import Err, Ok, Result

__all__ = [
    "ActivityInput",
    "Candidate",
    "Err",
    "InputRecord",
    "LoadedRow",
    "LookupQuery",
    "MappingRunSummary",
    "Ok",
    "OutputRecord",
    "Result",
    "RowOutcome",
]
