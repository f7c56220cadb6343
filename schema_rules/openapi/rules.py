"""Schema Rule Table

An ordered table of named rules. Each rule pairs a predicate over a
constraint's kind with a mutation of the property schema. Every matching
rule is applied, in table order; predicates are not mutually exclusive.

Rules are replaced by name:

    rules = override_rules(build_default_rules(), [
        Rule("Pattern", kind_is(ConstraintKind.REGEX), set_pattern_with_example),
    ])
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from schema_rules.validation.constraints import (
    Between,
    Compare,
    ComparisonOperator,
    Constraint,
    ConstraintKind,
    Length,
    LengthMode,
    RegexPattern,
    is_numeric,
    to_number,
)

from .description import add_message
from .schema import PropertySchema, Schema, SchemaContext

_LISTED_KINDS = frozenset({
    ConstraintKind.NOT_NULL,
    ConstraintKind.NOT_EMPTY,
    ConstraintKind.LENGTH,
    ConstraintKind.REGEX,
    ConstraintKind.COMPARISON,
    ConstraintKind.BETWEEN,
})


@dataclass(frozen=True, slots=True)
class RuleContext:
    """One (property, constraint, rule) evaluation."""
    schema: Schema
    context: SchemaContext
    property_key: str
    constraint: Constraint

    @property
    def property_schema(self) -> PropertySchema:
        return self.schema.properties[self.property_key]


@dataclass(frozen=True, slots=True)
class Rule:
    """Named pair of constraint predicate and schema mutation."""
    name: str
    matches: Callable[[Constraint], bool]
    apply: Callable[[RuleContext], None]


def kind_is(*kinds: ConstraintKind) -> Callable[[Constraint], bool]:
    """Predicate matching constraints of any of ``kinds``."""
    wanted = frozenset(kinds)
    return lambda constraint: constraint.kind in wanted


# ============================================================================
# Default mutations
# ============================================================================

def _apply_not_listed(ctx: RuleContext) -> None:
    add_message(ctx)


def _apply_required(ctx: RuleContext) -> None:
    # required only grows; the message goes with the first addition
    if ctx.property_key not in ctx.schema.required:
        ctx.schema.required.add(ctx.property_key)
        add_message(ctx)


def _apply_not_empty(ctx: RuleContext) -> None:
    ctx.property_schema.min_length = 1
    add_message(ctx)


def _apply_length(ctx: RuleContext) -> None:
    length: Length = ctx.constraint
    prop = ctx.property_schema

    if length.max_length is not None and length.max_length > 0:
        prop.max_length = length.max_length

    if length.mode in (LengthMode.MINIMUM, LengthMode.EXACT) or prop.min_length is None:
        prop.min_length = length.min_length
    add_message(ctx)


def _apply_pattern(ctx: RuleContext) -> None:
    regex: RegexPattern = ctx.constraint
    ctx.property_schema.pattern = regex.expression
    add_message(ctx)


def _apply_comparison(ctx: RuleContext) -> None:
    comparison: Compare = ctx.constraint
    if is_numeric(comparison.value):
        value = to_number(comparison.value)
        prop = ctx.property_schema

        match comparison.operator:
            case ComparisonOperator.GREATER_THAN_OR_EQUAL | ComparisonOperator.GREATER_THAN:
                prop.minimum = value
                prop.exclusive_minimum = comparison.operator is ComparisonOperator.GREATER_THAN
            case ComparisonOperator.LESS_THAN_OR_EQUAL | ComparisonOperator.LESS_THAN:
                prop.maximum = value
                prop.exclusive_maximum = comparison.operator is ComparisonOperator.LESS_THAN
    add_message(ctx)


def _apply_between(ctx: RuleContext) -> None:
    between: Between = ctx.constraint
    prop = ctx.property_schema

    if is_numeric(between.from_value):
        prop.minimum = to_number(between.from_value)
        prop.exclusive_minimum = between.exclusive

    if is_numeric(between.to_value):
        prop.maximum = to_number(between.to_value)
        prop.exclusive_maximum = between.exclusive
    add_message(ctx)


def build_default_rules() -> tuple[Rule, ...]:
    """Default rule table, in evaluation order. Can be overridden by name."""
    return (
        Rule("NotListed", lambda constraint: constraint.kind not in _LISTED_KINDS, _apply_not_listed),
        Rule("Required", kind_is(ConstraintKind.NOT_NULL, ConstraintKind.NOT_EMPTY), _apply_required),
        Rule("NotEmpty", kind_is(ConstraintKind.NOT_EMPTY), _apply_not_empty),
        Rule("Length", kind_is(ConstraintKind.LENGTH), _apply_length),
        Rule("Pattern", kind_is(ConstraintKind.REGEX), _apply_pattern),
        Rule("Comparison", kind_is(ConstraintKind.COMPARISON), _apply_comparison),
        Rule("Between", kind_is(ConstraintKind.BETWEEN), _apply_between),
    )


def override_rules(defaults: Iterable[Rule], overrides: Iterable[Rule] | None = None) -> tuple[Rule, ...]:
    """Replace rules of the same name in place; append the rest."""
    table = {rule.name: rule for rule in defaults}
    for rule in overrides or ():
        table[rule.name] = rule
    return tuple(table.values())
