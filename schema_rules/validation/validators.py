"""Declarative Validators

A Validator is a composed set of per-property constraints plus links to
included validators. Rules are declared in ``__init__`` through a fluent
builder:

    class AddressValidator(Validator):
        def __init__(self):
            super().__init__()
            self.rule_for("street").not_empty().max_length(120)

    class CustomerValidator(Validator):
        def __init__(self):
            super().__init__()
            self.rule_for("email").not_null().email()
            self.rule_for("age").inclusive_between(18, 130)
            self.include(AddressValidator())
            self.include(VipValidator, when=lambda customer: customer.is_vip)

Includes guarded by ``when`` cannot be evaluated without an instance, so they
are never reported by ``unconditional_includes``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Protocol, TypeVar, Union

from .constraints import (
    Between,
    Compare,
    ComparisonOperator,
    Constraint,
    Custom,
    Email,
    Length,
    NotEmpty,
    NotNull,
    RegexPattern,
)

M = TypeVar("M", bound=type)

ValidatorSource = Union["Validator", Callable[[], "Validator"]]


def _instantiate(source: ValidatorSource) -> Validator:
    return source if isinstance(source, Validator) else source()


class PropertyRule:
    """Constraints declared for one property, in declaration order."""

    def __init__(self, property_name: str):
        if not property_name:
            raise ValueError("property_name must not be empty")
        self.property_name = property_name
        self._constraints: list[Constraint] = []

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._constraints)

    def applies_to(self, name: str) -> bool:
        return self.property_name.casefold() == name.casefold()

    def add(self, constraint: Constraint) -> PropertyRule:
        self._constraints.append(constraint)
        return self

    def with_message(self, message: str) -> PropertyRule:
        """Override the message of the last declared constraint."""
        if not self._constraints:
            raise ValueError(f"No constraint declared for '{self.property_name}' to attach a message to")
        self._constraints[-1] = self._constraints[-1].with_message(message)
        return self

    # Presence
    def not_null(self) -> PropertyRule: return self.add(NotNull())

    def not_empty(self) -> PropertyRule: return self.add(NotEmpty())

    # Strings
    def length(self, min_length: int, max_length: int | None = None) -> PropertyRule:
        """Length range; without ``max_length`` only the minimum is bounded."""
        return self.add(Length(min_length=min_length, max_length=max_length))

    def min_length(self, length: int) -> PropertyRule: return self.add(Length.minimum(length))

    def max_length(self, length: int) -> PropertyRule: return self.add(Length.maximum(length))

    def exact_length(self, length: int) -> PropertyRule: return self.add(Length.exact(length))

    def matches(self, expression: str) -> PropertyRule: return self.add(RegexPattern(expression))

    def email(self) -> PropertyRule: return self.add(Email())

    # Comparisons
    def equal(self, value: Any) -> PropertyRule:
        return self.add(Compare(ComparisonOperator.EQUAL, value))

    def not_equal(self, value: Any) -> PropertyRule:
        return self.add(Compare(ComparisonOperator.NOT_EQUAL, value))

    def greater_than(self, value: Any) -> PropertyRule:
        return self.add(Compare(ComparisonOperator.GREATER_THAN, value))

    def greater_than_or_equal(self, value: Any) -> PropertyRule:
        return self.add(Compare(ComparisonOperator.GREATER_THAN_OR_EQUAL, value))

    def less_than(self, value: Any) -> PropertyRule:
        return self.add(Compare(ComparisonOperator.LESS_THAN, value))

    def less_than_or_equal(self, value: Any) -> PropertyRule:
        return self.add(Compare(ComparisonOperator.LESS_THAN_OR_EQUAL, value))

    def inclusive_between(self, from_value: Any, to_value: Any) -> PropertyRule:
        return self.add(Between(from_value, to_value))

    def exclusive_between(self, from_value: Any, to_value: Any) -> PropertyRule:
        return self.add(Between(from_value, to_value, exclusive=True))

    # Anything else
    def must(self, name: str, message: str | None = None) -> PropertyRule:
        return self.add(Custom(name, message=message))

    def __repr__(self) -> str:
        return f"PropertyRule({self.property_name!r}, {[c.constraint_name for c in self._constraints]})"


@dataclass(frozen=True, slots=True)
class IncludeRule:
    """Link to a sub-validator, optionally guarded by a runtime predicate."""
    source: ValidatorSource
    condition: Callable[[Any], bool] | None = None

    @property
    def is_conditional(self) -> bool:
        return self.condition is not None

    def get_validator(self) -> Validator:
        return _instantiate(self.source)


class Validator:
    """Declarative validation rule set for one data type."""

    def __init__(self):
        self._rules: list[PropertyRule] = []
        self._includes: list[IncludeRule] = []

    def rule_for(self, property_name: str) -> PropertyRule:
        rule = PropertyRule(property_name)
        self._rules.append(rule)
        return rule

    def include(self, validator: ValidatorSource, when: Callable[[Any], bool] | None = None) -> IncludeRule:
        rule = IncludeRule(validator, when)
        self._includes.append(rule)
        return rule

    @property
    def rules(self) -> tuple[PropertyRule, ...]:
        return tuple(self._rules)

    @property
    def includes(self) -> tuple[IncludeRule, ...]:
        return tuple(self._includes)

    def constraints_for(self, property_name: str) -> list[Constraint]:
        """Constraints declared for ``property_name``, matched case-insensitively."""
        return [c for rule in self._rules if rule.applies_to(property_name) for c in rule.constraints]

    def unconditional_include_rules(self) -> list[IncludeRule]:
        return [rule for rule in self._includes if not rule.is_conditional]

    def unconditional_includes(self) -> list[Validator]:
        return [rule.get_validator() for rule in self.unconditional_include_rules()]

    def __iter__(self) -> Iterator[PropertyRule | IncludeRule]:
        yield from self._rules
        yield from self._includes

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rules={len(self._rules)}, includes={len(self._includes)})"


class ValidatorResolver(Protocol):
    """Anything that can return the validator for a type."""

    def resolve(self, model_type: type) -> Validator | None: ...


class ValidatorRegistry:
    """Maps model types to their validators.

    Registered factories are called on every ``resolve`` so each annotation
    pass gets its own validator graph.
    """

    def __init__(self):
        self._sources: dict[type, ValidatorSource] = {}

    def register(self, model_type: type, validator: ValidatorSource) -> None:
        self._sources[model_type] = validator

    def validates(self, model_type: type) -> Callable[[M], M]:
        """Class decorator registering a Validator subclass for ``model_type``."""
        def decorator(validator_cls: M) -> M:
            self.register(model_type, validator_cls)
            return validator_cls
        return decorator

    def resolve(self, model_type: type) -> Validator | None:
        source = self._sources.get(model_type)
        return _instantiate(source) if source is not None else None

    def models(self) -> list[type]:
        return list(self._sources)

    def __contains__(self, model_type: object) -> bool:
        return model_type in self._sources

    def __len__(self) -> int:
        return len(self._sources)
