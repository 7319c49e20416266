"""
Result value returned by every component boundary.

A result holds either ``data`` or ``error``, never both.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    data: Optional[T] = None
    error: Optional[AppError] = None

    def __post_init__(self) -> None:
        if self.data is not None and self.error is not None:
            raise ValueError("Result cannot carry both data and error")

    @classmethod
    def success(cls, data: Optional[T] = None) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: AppError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> Optional[str]:
        """Human-readable error text, or None on success."""
        return self.error.message if self.error is not None else None
