"""OpenAPI Schema Model

Mutable models for one generated object schema and its properties. Only the
keywords the rules write are typed; everything else a generator emits
(``type``, ``title``, ``$ref``, ``anyOf``...) is carried through untouched.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    model_serializer,
    model_validator,
)

from schema_rules.validation.constraints import is_numeric

_EXCLUSIVE_BOUNDS = (("exclusiveMinimum", "minimum"), ("exclusiveMaximum", "maximum"))
_FLAGS = frozenset({"exclusiveMinimum", "exclusiveMaximum", "exclusive_minimum", "exclusive_maximum"})


class PropertySchema(BaseModel):
    """Contract fragment for one property."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    min_length: int | None = Field(None, alias="minLength")
    max_length: int | None = Field(None, alias="maxLength")
    pattern: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: bool = Field(False, alias="exclusiveMinimum")
    exclusive_maximum: bool = Field(False, alias="exclusiveMaximum")
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_numeric_exclusive_bounds(cls, data: Any) -> Any:
        """Read JSON Schema 2020-12 ``exclusiveMinimum: 5`` as ``minimum: 5`` plus a flag."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for flag, bound in _EXCLUSIVE_BOUNDS:
            if is_numeric(data.get(flag)):
                data[bound] = data[flag]
                data[flag] = True
        return data

    @model_serializer(mode="wrap")
    def _drop_unset_keywords(self, handler) -> dict[str, Any]:
        # extra keywords pass through as generated, including explicit nulls
        data = handler(self)
        typed = {name for name in type(self).model_fields} | {
            f.alias for f in type(self).model_fields.values() if f.alias
        }
        return {
            key: value for key, value in data.items()
            if key not in typed or not (value is None or (key in _FLAGS and value is False))
        }


class Schema(BaseModel):
    """Object schema for one API type."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    properties: dict[str, PropertySchema] = Field(default_factory=dict)
    required: set[str] = Field(default_factory=set)

    @field_serializer("required")
    def _sorted_required(self, required: set[str]) -> list[str]:
        return sorted(required)

    @classmethod
    def from_json_schema(cls, data: dict[str, Any]) -> Schema:
        return cls.model_validate(data)

    def to_json_schema(self, numeric_exclusive_bounds: bool = False) -> dict[str, Any]:
        """Serialize back to a JSON schema dict.

        Args:
            numeric_exclusive_bounds: Write exclusive bounds the JSON Schema
                2020-12 / OpenAPI 3.1 way (``exclusiveMinimum: 5``) instead of
                the OpenAPI 3.0 boolean flag next to ``minimum``.
        """
        data = self.model_dump(mode="json", by_alias=True)
        if not data.get("required"):
            data.pop("required", None)
        if not data["properties"] and "properties" not in self.model_fields_set:
            del data["properties"]
        if numeric_exclusive_bounds:
            for prop in data.get("properties", {}).values():
                for flag, bound in _EXCLUSIVE_BOUNDS:
                    if prop.get(flag) is True and bound in prop:
                        prop[flag] = prop.pop(bound)
        return data


@dataclass(frozen=True, slots=True)
class SchemaContext:
    """Identity of the type whose schema is being annotated."""
    model_type: type
    schema_name: str | None = None

    @property
    def name(self) -> str:
        return self.schema_name or self.model_type.__name__
