import pytest
import structlog

from schema_rules.core.config import get_settings
from schema_rules.openapi import PropertySchema, Schema, SchemaAnnotator, SchemaContext
from schema_rules.validation import Validator, ValidatorRegistry


class Customer:
    """Stand-in model type; only its identity matters to the annotator."""


TITLE = "\n\n*Validation Rules*\n\n"


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def context() -> SchemaContext:
    return SchemaContext(Customer)


@pytest.fixture
def make_schema():
    def _make(*names: str, **described: str) -> Schema:
        props = {name: PropertySchema() for name in names}
        props.update({name: PropertySchema(description=text) for name, text in described.items()})
        return Schema(properties=props)
    return _make


@pytest.fixture
def registry() -> ValidatorRegistry:
    return ValidatorRegistry()


@pytest.fixture
def logger():
    return structlog.get_logger("tests")


@pytest.fixture
def annotate(registry, context, logger):
    """Register ``validator`` for Customer and annotate ``schema`` with it."""
    def _annotate(schema: Schema, validator: Validator, **kwargs) -> SchemaAnnotator:
        registry.register(Customer, validator)
        annotator = SchemaAnnotator(registry, logger=logger, **kwargs)
        annotator.apply(schema, context)
        return annotator
    return _annotate
