import pytest

from schema_rules.core.config import get_settings
from schema_rules.openapi import RuleContext, add_message, friendly_name
from schema_rules.openapi.description import format_value, render_message
from schema_rules.validation import Custom, Length, NotNull

from tests.conftest import TITLE


@pytest.mark.parametrize("key, expected", [
    ("name", "Name"),
    ("firstName", "First Name"),
    ("FirstName", "First Name"),
    ("first_name", "First name"),
    ("", ""),
])
def test_friendly_name(key, expected):
    assert friendly_name(key) == expected


def test_format_value_drops_integral_fraction():
    assert format_value(5.0) == "5"
    assert format_value(2.5) == "2.5"
    assert format_value(7) == "7"


def test_title_written_before_first_message(make_schema, context):
    schema = make_schema("name")
    add_message(RuleContext(schema, context, "name", NotNull()))
    assert schema.properties["name"].description == TITLE + "'Name' must not be empty."


def test_title_appears_once_across_messages(make_schema, context):
    schema = make_schema("name")
    add_message(RuleContext(schema, context, "name", NotNull()))
    add_message(RuleContext(schema, context, "name", Custom("x", message="Second.")))
    description = schema.properties["name"].description
    assert description.count("*Validation Rules*") == 1
    assert description == TITLE + "'Name' must not be empty.\n\nSecond."


def test_duplicate_message_skipped(make_schema, context):
    schema = make_schema("name")
    for _ in range(3):
        add_message(RuleContext(schema, context, "name", NotNull()))
    assert schema.properties["name"].description == TITLE + "'Name' must not be empty."


def test_existing_description_kept(make_schema, context):
    schema = make_schema(name="Customer display name")
    add_message(RuleContext(schema, context, "name", NotNull()))
    assert schema.properties["name"].description == "Customer display name" + TITLE + "'Name' must not be empty."


def test_bounds_read_from_current_schema_state(make_schema, context):
    schema = make_schema("code")
    prop = schema.properties["code"]
    prop.min_length, prop.max_length = 1, 50
    message = render_message(RuleContext(schema, context, "code", Length(2, 50)))
    assert message == "'Code' must be between 1 and 50 characters. You entered x characters."


def test_unset_bounds_leave_placeholders(make_schema, context):
    schema = make_schema("code")
    message = render_message(RuleContext(schema, context, "code", Length(2, 50)))
    assert "{MinLength}" in message and "{MaxLength}" in message


def test_numeric_placeholders(make_schema, context):
    schema = make_schema("score")
    prop = schema.properties["score"]
    prop.minimum, prop.maximum = 1.0, 9
    constraint = Custom("range", message="{PropertyName} in {Minimum}..{Maximum}")
    assert render_message(RuleContext(schema, context, "score", constraint)) == "Score in 1..9"


def test_heading_and_placeholder_from_settings(monkeypatch, make_schema, context):
    monkeypatch.setenv("SCHEMA_RULES_DESCRIPTION_HEADING", "Rules:")
    monkeypatch.setenv("SCHEMA_RULES_TOTAL_LENGTH_PLACEHOLDER", "N")
    get_settings.cache_clear()

    schema = make_schema("pin")
    prop = schema.properties["pin"]
    prop.min_length = prop.max_length = 4
    add_message(RuleContext(schema, context, "pin", Length.exact(4)))
    assert prop.description == "\n\nRules:\n\n'Pin' must be 4 characters in length. You entered N characters."
