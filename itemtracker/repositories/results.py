"""Operation results that keep "nothing matched" apart from "it failed"."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StoreUnavailable(Exception):
    """Raised as a failure cause when no engine could be built for the store."""


class Outcome(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    outcome: Outcome
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(Outcome.SUCCESS, value=value)

    @classmethod
    def not_found(cls) -> "Result[T]":
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def failure(cls, error: BaseException) -> "Result[T]":
        return cls(Outcome.FAILURE, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILURE

    def unwrap_or(self, default: Optional[T] = None) -> Optional[T]:
        return self.value if self.ok else default
