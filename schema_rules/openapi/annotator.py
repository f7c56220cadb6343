"""Schema Annotator

Applies the rule table to one type's generated schema:

1. resolve the validator for the type
2. for every schema property, find its constraints case-insensitively and
   apply every matching rule
3. repeat step 2 for every unconditionally included validator, recursively,
   against the same schema

Every failure is logged as a warning and swallowed: partial annotation is
preferable to breaking schema generation for other types.
"""
from __future__ import annotations

from typing import Any, Iterable

from schema_rules.core.config import get_settings
from schema_rules.core.errors import (
    AppError,
    Err,
    Ok,
    Result,
    include_cycle,
    include_traversal_failed,
    require,
    resolution_failed,
    resolver_missing,
    rule_error,
    rule_failed,
    validator_not_found,
)
from schema_rules.core.logging import null_logger
from schema_rules.validation.validators import Validator, ValidatorResolver

from .rules import Rule, RuleContext, build_default_rules, override_rules
from .schema import Schema, SchemaContext

_ORIGIN = "schema_annotator"


class SchemaAnnotator:
    """Encodes validator constraints into generated schemas.

    Args:
        resolver: Returns the validator for a type. Without one every
            ``apply`` is a logged no-op.
        rules: Rules replacing default rules of the same name, or appended.
        logger: structlog logger; events are dropped when omitted.
        guard_include_cycles: Skip an include already on the current include
            path. Defaults to the ``GUARD_INCLUDE_CYCLES`` setting.
    """

    def __init__(
        self,
        resolver: ValidatorResolver | None = None,
        rules: Iterable[Rule] | None = None,
        logger: Any = None,
        guard_include_cycles: bool | None = None,
    ):
        self._resolver = resolver
        self._rules = override_rules(build_default_rules(), rules)
        self._log = logger if logger is not None else null_logger()
        self._guard_include_cycles = (
            get_settings().GUARD_INCLUDE_CYCLES if guard_include_cycles is None else guard_include_cycles
        )

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def apply(self, schema: Schema, context: SchemaContext) -> None:
        """Annotate ``schema`` in place."""
        match self._resolve(context):
            case Err(error):
                self._warn("validator_resolution_failed", error)
            case Ok(validator):
                self._annotate(schema, context, validator)

    def _annotate(self, schema: Schema, context: SchemaContext, validator: Validator) -> None:
        self.apply_rules_to_schema(schema, context, validator)

        try:
            self.add_included_validator_rules(schema, context, validator)
        except Exception as e:
            self._warn("include_traversal_failed", include_traversal_failed(context.name, e, origin=_ORIGIN).error)

    def _resolve(self, context: SchemaContext) -> Result[Validator, AppError]:
        if self._resolver is None:
            return resolver_missing(origin=_ORIGIN)
        try:
            validator = self._resolver.resolve(context.model_type)
        except Exception as e:
            return resolution_failed(context.name, e, origin=_ORIGIN)
        return require(validator, validator_not_found(context.name, origin=_ORIGIN).error)

    def apply_rules_to_schema(self, schema: Schema, context: SchemaContext, validator: Validator) -> None:
        announced = False

        for key in list(schema.properties):
            try:
                constraints = validator.constraints_for(key)
            except Exception as e:
                self._warn("constraint_lookup_failed", rule_error(
                    f"Reading constraints for property '{context.name}.{key}' failed: {e}",
                    model=context.name, property_name=key, origin=_ORIGIN, cause=e,
                ).error)
                continue

            for constraint in constraints:
                for rule in self._rules:
                    try:
                        if not rule.matches(constraint):
                            continue
                        if not announced:
                            self._log.debug("applying_rules", model=context.name, validator=type(validator).__name__)
                            announced = True
                        rule.apply(RuleContext(schema, context, key, constraint))
                        self._log.debug("rule_applied", rule=rule.name, model=context.name, property=key)
                    except Exception as e:
                        self._warn("rule_apply_failed", rule_failed(rule.name, context.name, key, e, origin=_ORIGIN).error)

    def add_included_validator_rules(
        self,
        schema: Schema,
        context: SchemaContext,
        validator: Validator,
        path: frozenset[object] | None = None,
    ) -> None:
        """Merge constraints of unconditionally included validators into ``schema``.

        ``path`` holds the identities of the validators leading here; a cycle
        is skipped with a warning when the guard is on.
        """
        path = path if path is not None else frozenset({_identity(validator)})

        for included in validator.unconditional_includes():
            key = _identity(included)
            if self._guard_include_cycles and key in path:
                self._warn("include_cycle_skipped", include_cycle(
                    context.name, type(included).__name__, origin=_ORIGIN,
                ).error)
                continue

            self.apply_rules_to_schema(schema, context, included)
            self.add_included_validator_rules(schema, context, included, path | {key})

    def _warn(self, event: str, error: AppError) -> None:
        self._log.warning(event, **error.log_fields(), exc_info=error.cause)


def _identity(validator: Validator) -> object:
    # a Validator subclass declares its includes in __init__, so one nested in itself recurses forever
    return id(validator) if type(validator) is Validator else type(validator)
