"""
ef_mapping/domain/result.py

Explicit success/failure values returned by fallible pipeline steps.

Expected failures (unreadable files, invalid rows, upstream API errors) are
carried as ``Err`` values instead of raised exceptions so the load phase can
stop at the first failure while the row phase records it and moves on.
The error payload is a human-readable message; it is not meant to be parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """
    Successful outcome wrapping ``value``.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """
    Failed outcome carrying a message for humans.
    """

    error: str

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Called unwrap() on an Err value: {self.error}")


Result = Union[Ok[T], Err]
