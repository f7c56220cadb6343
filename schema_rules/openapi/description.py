"""Human-readable validation notes appended to property descriptions."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from schema_rules.core.config import get_settings

if TYPE_CHECKING:
    from .rules import RuleContext

_WORD_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def friendly_name(property_key: str) -> str:
    """``firstName`` -> ``First Name``; underscores read as spaces."""
    if not property_key:
        return property_key
    capitalized = property_key[0].upper() + property_key[1:]
    return _WORD_BOUNDARY.sub(" ", capitalized).replace("_", " ")


def format_value(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_message(context: RuleContext, declared: bool = False) -> str:
    """Substitute placeholders from the current property schema state.

    With ``declared``, bounds the constraint sets itself take precedence over
    the schema's, so the text no longer depends on what other constraints did.
    """
    settings = get_settings()
    prop = context.property_schema
    bounds = {
        "MaxLength": prop.max_length,
        "MinLength": prop.min_length,
        "Maximum": prop.maximum,
        "Minimum": prop.minimum,
    }
    if declared:
        bounds.update(context.constraint.declared_bounds)

    message = context.constraint.error_message.replace("{PropertyName}", friendly_name(context.property_key))
    for name, value in bounds.items():
        if value is not None:
            message = message.replace(f"{{{name}}}", format_value(value))
    message = message.replace("{TotalLength}", settings.TOTAL_LENGTH_PLACEHOLDER)
    for name, value in context.constraint.message_arguments.items():
        message = message.replace(f"{{{name}}}", format_value(value))
    return message


def add_message(context: RuleContext) -> None:
    """Append the constraint's message to the property description.

    Must run after the rule's mutation: bounds are read back from the schema.
    The section title is written once. A message already present is skipped,
    also when it was written on an earlier pass against different schema bounds.
    """
    prop = context.property_schema
    title = get_settings().description_title
    description = prop.description or ""

    message = render_message(context)
    if message in description or render_message(context, declared=True) in description:
        return
    prop.description = description + ("\n\n" if title in description else title) + message
