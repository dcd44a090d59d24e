"""Fact result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import TracebackType
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class ResultStatus(Enum):
    """Outcome of a single evaluated fact."""

    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"

    @property
    def is_failure(self) -> bool:
        """Check if this status should be reported as a problem."""
        return self in {ResultStatus.FAILURE, ResultStatus.ERROR}


class FactRepr(BaseModel):
    """Literal source form of an assertion, kept for display only.

    Attributes
    ----------
    lhs
        Source text of the expression under test.
    rhs
        Source text of the expectation it was checked against.
    """

    model_config = ConfigDict(frozen=True)

    lhs: str
    rhs: str

    def __str__(self) -> str:
        return f"{self.lhs} => {self.rhs}"


@dataclass(frozen=True)
class Result:
    """Base for the three fact outcomes.

    ``meta`` is an ordered mapping; ``desc`` and ``line`` are the keys the
    reporter understands, anything else is carried along untouched.
    """

    status: ClassVar[ResultStatus]

    expr: FactRepr
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def desc(self) -> str | None:
        return self.meta.get("desc")

    @property
    def line(self) -> Any:
        return self.meta.get("line")


@dataclass(frozen=True)
class Success(Result):
    status: ClassVar[ResultStatus] = ResultStatus.SUCCESS


@dataclass(frozen=True)
class Failure(Result):
    status: ClassVar[ResultStatus] = ResultStatus.FAILURE


@dataclass(frozen=True)
class Error(Result):
    """A fact whose evaluation raised instead of producing a verdict."""

    status: ClassVar[ResultStatus] = ResultStatus.ERROR

    cause: Exception | None = None
    trace: TracebackType | None = None
