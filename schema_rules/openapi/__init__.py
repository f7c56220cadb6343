"""OpenAPI Schema Rules

Encodes validator constraints into generated OpenAPI/JSON schemas:
required flags, length and numeric bounds, patterns, and a readable
description of every applied rule.

Usage:
    registry = ValidatorRegistry()
    registry.register(UserCreate, UserCreateValidator)

    annotator = SchemaAnnotator(registry)
    schema = Schema.from_json_schema(UserCreate.model_json_schema())
    annotator.apply(schema, SchemaContext(UserCreate))
"""
from .schema import PropertySchema, Schema, SchemaContext
from .rules import Rule, RuleContext, build_default_rules, override_rules, kind_is
from .description import add_message, friendly_name
from .annotator import SchemaAnnotator
from .integration import annotate_model, annotate_components, attach_validation_rules, schema_name
