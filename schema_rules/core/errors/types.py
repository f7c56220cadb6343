"""Monadic Error Handling Types

Result/Either types for composable error propagation. Failures inside the
annotation pass are values, not exceptions: they are built here, logged by
the caller, and never raised to the schema generator.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union, final

T = TypeVar("T")
E = TypeVar("E", bound="AppError")


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E1xxx: Validator resolution failures
    E2xxx: Rule application failures
    """
    # Resolution (E1xxx)
    E1000_RESOLUTION_GENERIC = 1000
    E1001_RESOLVER_MISSING = 1001
    E1002_RESOLVER_FAILED = 1002
    E1003_VALIDATOR_NOT_FOUND = 1003

    # Rule application (E2xxx)
    E2000_RULE_GENERIC = 2000
    E2001_RULE_APPLY_FAILED = 2001
    E2010_INCLUDE_TRAVERSAL_FAILED = 2010
    E2011_INCLUDE_CYCLE = 2011

    @property
    def category(self) -> str:
        """Human-readable error category."""
        return "resolution" if self.value < 2000 else "rules"


@dataclass(frozen=True, slots=True)
class AppError:
    """Annotation failure with code, message and structured metadata.

    ``origin`` names the component that reported it; ``cause`` chains the
    exception that triggered it, if any.
    """
    code: ErrorCode
    message: str
    origin: str = ""
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def log_fields(self) -> dict:
        """Flat key-value fields for structured log events."""
        fields = {"code": self.code.name, "category": self.code.category, "error": self.message, **self.metadata}
        if self.origin:
            fields["origin"] = self.origin
        return fields


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result monad."""
    value: T


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result monad."""
    error: E


Result = Union[Ok[T], Err[E]]


def require(value: T | None, error: AppError) -> Result[T, AppError]:
    """Convert nullable to Result, returning Err if None."""
    return Ok(value) if value is not None else Err(error)
