"""
ef_mapping/validators/csv_validator.py

Row-level structural validation for parsed CSV records.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from ef_mapping.domain.result import Err, Ok, Result


class CSVRowValidator:
    """
    Validates untyped parsed rows against a list of required string fields.
    """

    def validate_string_record(
        self,
        value: Any,
        required_fields: Sequence[str],
    ) -> Result[dict[str, str]]:
        """
        Return ``Ok`` with ``value`` restricted to ``required_fields``.

        Fails when ``value`` is not a mapping, or when any required field is
        missing or not a string. Fields outside ``required_fields`` are dropped
        silently; the returned dict follows ``required_fields`` order.
        """

        if not isinstance(value, Mapping):
            return Err(f"{value!r} is not an object")

        record: dict[str, str] = {}
        for name in required_fields:
            field_value = value.get(name)
            if not isinstance(field_value, str):
                return Err(
                    f"Property {name} is not a string: {self._describe_type(field_value)}"
                )
            record[name] = field_value
        return Ok(record)

    @staticmethod
    def optional_value(value: str | None) -> str | None:
        """
        Trim ``value`` and map blank strings to ``None``.
        """

        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @staticmethod
    def _describe_type(value: Any) -> str:
        if value is None:
            return "undefined"
        return type(value).__name__
