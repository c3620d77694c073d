"""Result type for tracker operations a user can be refused."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Result(Generic[T, E]):
    value: T | None = None
    error: E | None = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, value: T) -> Result[T, E]:
        return cls(value=value, error=None)

    @classmethod
    def failure(cls, error: E) -> Result[T, E]:
        return cls(value=None, error=error)

    def unwrap(self) -> T:
        if self.is_error:
            raise ValueError(f"Cannot unwrap error result: {self.error}")
        return self.value  # type: ignore[return-value]


__all__ = ["Result"]
