"""Validator-driven constraints for generated API schemas."""
from schema_rules.openapi import (
    PropertySchema,
    Schema,
    SchemaContext,
    Rule,
    RuleContext,
    SchemaAnnotator,
    build_default_rules,
    override_rules,
    annotate_model,
    attach_validation_rules,
)
from schema_rules.validation import Validator, ValidatorRegistry

__version__ = "0.1.0"
