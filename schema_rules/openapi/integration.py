"""Schema Generator Integration

Hooks the annotator into pydantic/FastAPI schema generation. FastAPI builds
its OpenAPI document lazily; ``attach_validation_rules`` wraps
``app.openapi()`` so registered models are annotated once, before the
document is cached.
"""
from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Iterable

from fastapi import FastAPI
from pydantic import BaseModel, ValidationError

from schema_rules.core.logging import annotator_logger, integration_logger
from schema_rules.validation.validators import ValidatorRegistry

from .annotator import SchemaAnnotator
from .rules import Rule
from .schema import Schema, SchemaContext


def schema_name(model: type) -> str:
    """OpenAPI component name FastAPI gives a pydantic model."""
    cfg = getattr(model, "model_config", {})
    title = cfg.get("title") if isinstance(cfg, Mapping) else None
    return str(title) if title else model.__name__


def annotate_model(
    model: type[BaseModel],
    annotator: SchemaAnnotator,
    *,
    numeric_exclusive_bounds: bool = True,
) -> dict[str, Any]:
    """Generate the JSON schema for ``model`` and annotate it.

    pydantic emits JSON Schema 2020-12, hence numeric exclusive bounds by default.
    """
    schema = Schema.from_json_schema(model.model_json_schema())
    annotator.apply(schema, SchemaContext(model, schema_name(model)))
    return schema.to_json_schema(numeric_exclusive_bounds=numeric_exclusive_bounds)


def annotate_components(
    schemas: MutableMapping[str, Any],
    registry: ValidatorRegistry,
    annotator: SchemaAnnotator,
    *,
    numeric_exclusive_bounds: bool = True,
) -> list[str]:
    """Annotate every component schema that belongs to a registered model.

    Models without a component entry are skipped. Returns annotated names.
    """
    log = integration_logger()
    annotated: list[str] = []

    for model in registry.models():
        base = schema_name(model)
        # FastAPI splits models into -Input/-Output variants when they differ
        names = [n for n in (base, f"{base}-Input", f"{base}-Output") if n in schemas]
        if not names:
            log.debug("component_schema_missing", model=base)
            continue

        for name in names:
            try:
                schema = Schema.from_json_schema(schemas[name])
            except ValidationError as e:
                log.warning("component_schema_unreadable", model=base, schema=name, error=str(e))
                continue
            annotator.apply(schema, SchemaContext(model, name))
            schemas[name] = schema.to_json_schema(numeric_exclusive_bounds=numeric_exclusive_bounds)
            annotated.append(name)

    return annotated


def attach_validation_rules(
    app: FastAPI,
    registry: ValidatorRegistry,
    rules: Iterable[Rule] | None = None,
    logger: Any = None,
) -> SchemaAnnotator:
    """Annotate the app's OpenAPI components with registered validator rules."""
    annotator = SchemaAnnotator(registry, rules, logger if logger is not None else annotator_logger())
    original_openapi = app.openapi

    def _openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        document = original_openapi()
        schemas = document.get("components", {}).get("schemas", {})
        names = annotate_components(
            schemas,
            registry,
            annotator,
            numeric_exclusive_bounds=app.openapi_version.startswith("3.1"),
        )
        integration_logger().info("openapi_annotated", schemas=len(names))

        app.openapi_schema = document
        return document

    app.openapi = _openapi
    return annotator
