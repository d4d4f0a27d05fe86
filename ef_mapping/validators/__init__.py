"""
ef_mapping/validators package marker.
"""

from ef_mapping.validators.column_validator import (
    ColumnConfig,
    ColumnConfigError,
    ColumnConfigValidator,
    ColumnErrorDetail,
)
from ef_mapping.validators.csv_validator import CSVRowValidator

__all__ = [
    "CSVRowValidator",
    "ColumnConfig",
    "ColumnConfigError",
    "ColumnConfigValidator",
    "ColumnErrorDetail",
]
