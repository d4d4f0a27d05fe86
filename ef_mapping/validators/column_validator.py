"""
ef_mapping/validators/column_validator.py

Validation for the CSV column configuration chosen on the command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class ColumnConfig:
    """
    Source column names for each input role.

    ``region`` is optional; ``activity_value`` and ``activity_unit`` are either
    both set or both ``None``.
    """

    name: str = "name"
    region: str | None = "region"
    activity_value: str | None = None
    activity_unit: str | None = None

    @property
    def has_activity(self) -> bool:
        return self.activity_value is not None and self.activity_unit is not None

    def required_fields(self) -> tuple[str, ...]:
        """
        Columns every data row must carry, in role order.
        """

        fields = [self.name]
        if self.region is not None:
            fields.append(self.region)
        if self.has_activity:
            fields.extend([self.activity_value, self.activity_unit])
        return tuple(fields)


@dataclass(frozen=True)
class ColumnErrorDetail:
    """
    Structured column configuration error detail.
    """

    code: str
    message: str
    role: str | None = None
    column: str | None = None
    context: dict[str, Any] | None = None


class ColumnConfigError(ValueError):
    """
    Raised when the column configuration cannot be used safely.
    """

    def __init__(self, *, message: str, errors: Sequence[ColumnErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "role": error.role,
                    "column": error.column,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class ColumnConfigValidator:
    """
    Validates a ColumnConfig before any row is loaded.
    """

    def validate(self, config: ColumnConfig) -> None:
        """
        Validate ``config`` and raise structured errors if invalid.
        """

        errors: list[ColumnErrorDetail] = []
        roles = {
            "name": config.name,
            "region": config.region,
            "activity_value": config.activity_value,
            "activity_unit": config.activity_unit,
        }

        for role, column in roles.items():
            if column is not None and column.strip() == "":
                errors.append(
                    ColumnErrorDetail(
                        code="blank_column_name",
                        message="Column names must not be blank.",
                        role=role,
                        column=column,
                    )
                )

        if (config.activity_value is None) != (config.activity_unit is None):
            missing = "activity_unit" if config.activity_unit is None else "activity_value"
            errors.append(
                ColumnErrorDetail(
                    code="incomplete_activity_pair",
                    message="Activity value and unit columns must be configured together.",
                    role=missing,
                )
            )

        seen: dict[str, str] = {}
        for role, column in roles.items():
            if column is None:
                continue
            if column in seen:
                errors.append(
                    ColumnErrorDetail(
                        code="duplicate_column",
                        message="The same column cannot be used for two roles.",
                        role=role,
                        column=column,
                        context={"also_used_for": seen[column]},
                    )
                )
                continue
            seen[column] = role

        if errors:
            details = "; ".join(
                f"{error.role}: {error.message}" if error.role else error.message for error in errors
            )
            raise ColumnConfigError(
                message=f"Invalid column configuration. {details}",
                errors=errors,
            )
