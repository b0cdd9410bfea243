"""Load declarative resource files into ResourceRequests."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from src.enums import ResourceAction, ResourceType
from src.postgres_engine.connection import ConnectionSpec
from src.postgres_engine.desired.builders import build_desired_database, build_desired_schema
from src.postgres_engine.errors import ResourceDefinitionError
from src.postgres_engine.runner import ResourceRequest

_RESERVED_KEYS = ("type", "action", "connection", "sql_query")


def load_resource_file(path: str | Path) -> tuple[ResourceRequest, ...]:
    """Read a YAML resource file and build one ResourceRequest per entry."""
    config_path = Path(path)
    with config_path.open("r") as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as error:
            raise ResourceDefinitionError(f"{config_path}: invalid YAML: {error}") from error

    if not isinstance(document, Mapping):
        raise ResourceDefinitionError(f"{config_path}: expected a mapping at the top level.")

    base_connection = ConnectionSpec.from_mapping(_resolve_variables(document.get("connection")))
    entries = document.get("resources") or []
    if not isinstance(entries, list):
        raise ResourceDefinitionError(f"{config_path}: 'resources' must be a list.")

    return tuple(build_resource_request(entry, base_connection) for entry in entries)


def build_resource_request(
    entry: Mapping[str, Any], base_connection: ConnectionSpec | None = None
) -> ResourceRequest:
    """Turn one `resources:` entry into a ResourceRequest."""
    if not isinstance(entry, Mapping):
        raise ResourceDefinitionError(f"Resource entries must be mappings, got {entry!r}.")

    entry = _resolve_variables(entry)
    resource_type = _parse_type(entry.get("type"))
    attributes = {k: v for k, v in entry.items() if k not in _RESERVED_KEYS}

    if resource_type is ResourceType.DATABASE:
        resource = build_desired_database(attributes)
    else:
        resource = build_desired_schema(attributes)

    actions = _parse_actions(entry.get("action", ResourceAction.CREATE))
    sql_query = entry.get("sql_query")
    if ResourceAction.QUERY in actions and not sql_query:
        raise ResourceDefinitionError(f"{resource_type} resource: 'query' requires 'sql_query'.")

    connection = (base_connection or ConnectionSpec()).merged(entry.get("connection"))
    return ResourceRequest(
        resource=resource,
        actions=actions,
        connection=connection,
        sql_query=sql_query,
    )


def _parse_type(value: Any) -> ResourceType:
    try:
        return ResourceType(str(value).lower())
    except ValueError as error:
        allowed = ", ".join(t.value for t in ResourceType)
        raise ResourceDefinitionError(
            f"Unknown resource type {value!r}; expected one of: {allowed}"
        ) from error


def _parse_actions(value: Any) -> tuple[ResourceAction, ...]:
    names = value if isinstance(value, list) else [value]
    try:
        return tuple(ResourceAction(str(name).lower()) for name in names)
    except ValueError as error:
        allowed = ", ".join(a.value for a in ResourceAction)
        raise ResourceDefinitionError(
            f"Unknown action in {value!r}; expected: {allowed}"
        ) from error


def _resolve_variables(value: Any) -> Any:
    """Replace "${NAME}" strings with the NAME environment variable (None if unset)."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.getenv(value[2:-1])
    if isinstance(value, Mapping):
        return {k: _resolve_variables(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_variables(v) for v in value]
    return value
