"""Constraint Taxonomy

Constraints are the read-only metadata a Validator attaches to a property.
They are never executed here: the schema rules only read their kind, their
bounds and their message template.

Features:
- Closed kind enum with an explicit OTHER variant for unclassified constraints
- Frozen dataclass constraints for immutability
- FluentValidation-style message templates with named placeholders
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar


class ConstraintKind(str, Enum):
    """Semantic kind of a property constraint."""
    NOT_NULL = "not_null"
    NOT_EMPTY = "not_empty"
    LENGTH = "length"
    REGEX = "regex"
    COMPARISON = "comparison"
    BETWEEN = "between"
    OTHER = "other"


class LengthMode(str, Enum):
    """Which bounds a length constraint declares."""
    RANGE = "range"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXACT = "exact"


class ComparisonOperator(str, Enum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="


def is_numeric(value: Any) -> bool:
    """True for int, float and Decimal values; bool is not numeric."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_number(value: int | float | Decimal) -> int | float:
    return float(value) if isinstance(value, Decimal) else value


class Constraint(ABC):
    """Base class for property constraints.

    Concrete constraints are frozen dataclasses declaring a ``message`` field;
    ``None`` selects the default template of the constraint.
    """
    __slots__ = ()

    kind: ClassVar[ConstraintKind] = ConstraintKind.OTHER
    message: str | None

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Short constraint name for logs."""

    @property
    @abstractmethod
    def default_message(self) -> str:
        """English message template used when no custom message is set."""

    @property
    def error_message(self) -> str:
        return self.message if self.message is not None else self.default_message

    @property
    def message_arguments(self) -> dict[str, Any]:
        """Constraint-specific placeholder values, keyed by placeholder name."""
        return {}

    @property
    def declared_bounds(self) -> dict[str, Any]:
        """Schema bound placeholders (``MinLength``, ``Maximum``...) this constraint sets itself."""
        return {}

    def with_message(self, message: str) -> Constraint:
        return replace(self, message=message)


# ============================================================================
# Presence Constraints
# ============================================================================

@dataclass(frozen=True, slots=True)
class NotNull(Constraint):
    """Property must be present."""
    message: str | None = None

    kind: ClassVar[ConstraintKind] = ConstraintKind.NOT_NULL

    @property
    def constraint_name(self) -> str:
        return "not_null"

    @property
    def default_message(self) -> str:
        return "'{PropertyName}' must not be empty."


@dataclass(frozen=True, slots=True)
class NotEmpty(Constraint):
    """Property must be present and non-empty."""
    message: str | None = None

    kind: ClassVar[ConstraintKind] = ConstraintKind.NOT_EMPTY

    @property
    def constraint_name(self) -> str:
        return "not_empty"

    @property
    def default_message(self) -> str:
        return "'{PropertyName}' must not be empty."


# ============================================================================
# String Constraints
# ============================================================================

@dataclass(frozen=True, slots=True)
class Length(Constraint):
    """String length bounds. ``max_length`` of None means unbounded."""
    min_length: int = 0
    max_length: int | None = None
    mode: LengthMode = LengthMode.RANGE
    message: str | None = None

    kind: ClassVar[ConstraintKind] = ConstraintKind.LENGTH

    def __post_init__(self):
        if self.min_length < 0:
            raise ValueError(f"min_length must be non-negative, got {self.min_length}")
        if self.max_length is not None and self.max_length < self.min_length:
            raise ValueError(f"max_length {self.max_length} is less than min_length {self.min_length}")

    @classmethod
    def minimum(cls, length: int, message: str | None = None) -> Length:
        return cls(min_length=length, mode=LengthMode.MINIMUM, message=message)

    @classmethod
    def maximum(cls, length: int, message: str | None = None) -> Length:
        return cls(max_length=length, mode=LengthMode.MAXIMUM, message=message)

    @classmethod
    def exact(cls, length: int, message: str | None = None) -> Length:
        return cls(min_length=length, max_length=length, mode=LengthMode.EXACT, message=message)

    @property
    def constraint_name(self) -> str:
        match self.mode:
            case LengthMode.MINIMUM:
                return f"min_length[{self.min_length}]"
            case LengthMode.MAXIMUM:
                return f"max_length[{self.max_length}]"
            case LengthMode.EXACT:
                return f"exact_length[{self.min_length}]"
        return f"length[{self.min_length},{self.max_length}]"

    @property
    def default_message(self) -> str:
        mode = LengthMode.MINIMUM if self.mode is LengthMode.RANGE and self.max_length is None else self.mode
        match mode:
            case LengthMode.MINIMUM:
                return ("The length of '{PropertyName}' must be at least {MinLength} characters. "
                        "You entered {TotalLength} characters.")
            case LengthMode.MAXIMUM:
                return ("The length of '{PropertyName}' must be {MaxLength} characters or fewer. "
                        "You entered {TotalLength} characters.")
            case LengthMode.EXACT:
                return ("'{PropertyName}' must be {MaxLength} characters in length. "
                        "You entered {TotalLength} characters.")
        return ("'{PropertyName}' must be between {MinLength} and {MaxLength} characters. "
                "You entered {TotalLength} characters.")

    @property
    def declared_bounds(self) -> dict[str, Any]:
        bounds = {}
        if self.mode is not LengthMode.MAXIMUM:
            bounds["MinLength"] = self.min_length
        if self.max_length is not None:
            bounds["MaxLength"] = self.max_length
        return bounds


@dataclass(frozen=True, slots=True)
class RegexPattern(Constraint):
    """String must match a regular expression."""
    expression: str
    message: str | None = None

    kind: ClassVar[ConstraintKind] = ConstraintKind.REGEX

    @property
    def constraint_name(self) -> str:
        return f"pattern[{self.expression}]"

    @property
    def default_message(self) -> str:
        return "'{PropertyName}' is not in the correct format."

    @property
    def message_arguments(self) -> dict[str, Any]:
        return {"RegularExpression": self.expression}


# ============================================================================
# Comparison Constraints
# ============================================================================

_COMPARISON_MESSAGES = {
    ComparisonOperator.EQUAL: "'{PropertyName}' must be equal to '{ComparisonValue}'.",
    ComparisonOperator.NOT_EQUAL: "'{PropertyName}' must not be equal to '{ComparisonValue}'.",
    ComparisonOperator.GREATER_THAN: "'{PropertyName}' must be greater than '{ComparisonValue}'.",
    ComparisonOperator.GREATER_THAN_OR_EQUAL: "'{PropertyName}' must be greater than or equal to '{ComparisonValue}'.",
    ComparisonOperator.LESS_THAN: "'{PropertyName}' must be less than '{ComparisonValue}'.",
    ComparisonOperator.LESS_THAN_OR_EQUAL: "'{PropertyName}' must be less than or equal to '{ComparisonValue}'.",
}


@dataclass(frozen=True, slots=True)
class Compare(Constraint):
    """Comparison against a fixed value. The value need not be numeric."""
    operator: ComparisonOperator
    value: Any
    message: str | None = None

    kind: ClassVar[ConstraintKind] = ConstraintKind.COMPARISON

    @property
    def constraint_name(self) -> str:
        return f"compare[{self.operator.value}{self.value}]"

    @property
    def default_message(self) -> str:
        return _COMPARISON_MESSAGES[self.operator]

    @property
    def message_arguments(self) -> dict[str, Any]:
        return {"ComparisonValue": self.value}

    @property
    def declared_bounds(self) -> dict[str, Any]:
        if not is_numeric(self.value):
            return {}
        match self.operator:
            case ComparisonOperator.GREATER_THAN | ComparisonOperator.GREATER_THAN_OR_EQUAL:
                return {"Minimum": to_number(self.value)}
            case ComparisonOperator.LESS_THAN | ComparisonOperator.LESS_THAN_OR_EQUAL:
                return {"Maximum": to_number(self.value)}
        return {}


@dataclass(frozen=True, slots=True)
class Between(Constraint):
    """Value range, inclusive unless ``exclusive`` is set."""
    from_value: Any
    to_value: Any
    exclusive: bool = False
    message: str | None = None

    kind: ClassVar[ConstraintKind] = ConstraintKind.BETWEEN

    @property
    def constraint_name(self) -> str:
        left, right = ("(", ")") if self.exclusive else ("[", "]")
        return f"between{left}{self.from_value}, {self.to_value}{right}"

    @property
    def default_message(self) -> str:
        if self.exclusive:
            return "'{PropertyName}' must be between {From} and {To} (exclusive)."
        return "'{PropertyName}' must be between {From} and {To}."

    @property
    def message_arguments(self) -> dict[str, Any]:
        return {"From": self.from_value, "To": self.to_value}

    @property
    def declared_bounds(self) -> dict[str, Any]:
        bounds = {}
        if is_numeric(self.from_value):
            bounds["Minimum"] = to_number(self.from_value)
        if is_numeric(self.to_value):
            bounds["Maximum"] = to_number(self.to_value)
        return bounds


# ============================================================================
# Unclassified Constraints
# ============================================================================

@dataclass(frozen=True, slots=True)
class Email(Constraint):
    """Value must be an email address."""
    message: str | None = None

    @property
    def constraint_name(self) -> str:
        return "email"

    @property
    def default_message(self) -> str:
        return "'{PropertyName}' is not a valid email address."


@dataclass(frozen=True, slots=True)
class Custom(Constraint):
    """Named constraint the schema rules know nothing about beyond its message.

    Usage:
        Custom("even", message="'{PropertyName}' must be an even number.")
    """
    name: str = "custom"
    message: str | None = None

    @property
    def constraint_name(self) -> str:
        return self.name

    @property
    def default_message(self) -> str:
        return "The specified condition was not met for '{PropertyName}'."
