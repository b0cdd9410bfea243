"""
Connection parameters for psql invocations.

`ConnectionSpec.database` is an override: when set, every statement issued
through the connection targets it, whatever database the statement asked for.
Leave it unset for normal use so database-level DDL can run from the
maintenance database.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any, Self, TypeAlias

from src import settings
from src.constants import DEFAULT_PORT, DEFAULT_USERNAME
from src.postgres_engine.errors import ResourceDefinitionError

PasswordResolver: TypeAlias = Callable[[str], str | None]


@dataclass(frozen=True)
class ConnectionSpec:
    """Where and as whom psql connects."""

    host: str | None = None
    port: int = DEFAULT_PORT
    username: str = DEFAULT_USERNAME
    password: str | None = None
    database: str | None = None

    def resolve_database(self, database: str | None) -> str | None:
        """The database a statement actually runs against."""
        return self.database or database

    def merged(self, overrides: Mapping[str, Any] | None) -> ConnectionSpec:
        """Return a copy with the given connection-map keys replaced."""
        if not overrides:
            return self
        base = {f.name: getattr(self, f.name) for f in fields(self)}
        base.update(overrides)
        return ConnectionSpec.from_mapping(base)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> Self:
        """Build from a connection map: {host, port, username, password, database}."""
        values = dict(mapping or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ResourceDefinitionError(
                f"Unknown connection key(s): {', '.join(unknown)}",
                context={"allowed": sorted(known)},
            )

        port = values.get("port")
        if port is None or port == "":
            values["port"] = DEFAULT_PORT
        else:
            try:
                values["port"] = int(port)
            except (TypeError, ValueError) as error:
                raise ResourceDefinitionError(f"Invalid port: {port!r}") from error

        if not values.get("username"):
            values["username"] = DEFAULT_USERNAME

        return cls(**values)


def default_password_resolver(username: str) -> str | None:
    """Node-level fallback password, only known for the administrative user."""
    if username == DEFAULT_USERNAME:
        return settings.POSTGRES_PASSWORD
    return None
