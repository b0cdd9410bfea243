"""
Adapters: resource attribute maps -> Desired* models.

Resource definitions arrive as plain mappings (parsed YAML, CLI input, ...).
This module centralises checking and coercion so the rest of the engine only
sees well-typed desired state:

- required names must be non-empty strings
- `connection_limit` is coerced to int
- empty strings for optional fields mean "not set"
- unknown keys are rejected rather than silently ignored
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.errors import ResourceDefinitionError


# ---------- tiny helpers ----------

def _reject_unknown_keys(attributes: Mapping[str, Any], model: type, label: str) -> None:
    allowed = {f.name for f in fields(model)}
    unknown = sorted(set(attributes) - allowed)
    if unknown:
        raise ResourceDefinitionError(
            f"Unknown {label} attribute(s): {', '.join(unknown)}",
            context={"allowed": sorted(allowed)},
        )


def _required_name(attributes: Mapping[str, Any], key: str, label: str) -> str:
    value = attributes.get(key)
    if value is None or str(value).strip() == "":
        raise ResourceDefinitionError(f"A {label} requires a non-empty '{key}'.")
    return str(value)


def _optional_text(attributes: Mapping[str, Any], key: str) -> str | None:
    value = attributes.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(attributes: Mapping[str, Any], key: str) -> int | None:
    value = attributes.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ResourceDefinitionError(f"'{key}' must be an integer, got {value!r}.")
    try:
        return int(value)
    except (TypeError, ValueError) as error:
        raise ResourceDefinitionError(f"'{key}' must be an integer, got {value!r}.") from error


# ---------- public builders ----------

def build_desired_database(attributes: Mapping[str, Any]) -> DesiredDatabase:
    """Convert a database attribute map into a DesiredDatabase."""
    _reject_unknown_keys(attributes, DesiredDatabase, "database")
    return DesiredDatabase(
        name=_required_name(attributes, "name", "database"),
        encoding=_optional_text(attributes, "encoding"),
        template=_optional_text(attributes, "template"),
        tablespace=_optional_text(attributes, "tablespace"),
        collation=_optional_text(attributes, "collation"),
        connection_limit=_optional_int(attributes, "connection_limit"),
        owner=_optional_text(attributes, "owner"),
    )


def build_desired_schema(attributes: Mapping[str, Any]) -> DesiredSchema:
    """Convert a schema attribute map into a DesiredSchema."""
    _reject_unknown_keys(attributes, DesiredSchema, "schema")
    return DesiredSchema(
        schema_name=_required_name(attributes, "schema_name", "schema"),
        owner=_optional_text(attributes, "owner"),
        database_name=_optional_text(attributes, "database_name"),
    )
