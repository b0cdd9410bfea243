"""
Desired-state models for server objects.

These dataclasses describe what *should* exist after an action runs. Optional
fields follow one rule: None means "not set", and unset fields never reach the
generated SQL.

- `DesiredDatabase.encoding`: any server encoding name, or the keyword
  "DEFAULT" which is rendered unquoted.
- `DesiredDatabase.collation`: pins both LC_CTYPE and LC_COLLATE.
- `DesiredDatabase.connection_limit`: 0 is a real limit, not "unset".
- `DesiredSchema.database_name`: the database the schema lives in. A database
  override on the connection still wins.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DesiredDatabase:
    """Desired state for a single database."""

    name: str
    encoding: str | None = None
    template: str | None = None
    tablespace: str | None = None
    collation: str | None = None
    connection_limit: int | None = None
    owner: str | None = None


@dataclass(frozen=True)
class DesiredSchema:
    """Desired state for a single schema."""

    schema_name: str
    owner: str | None = None
    database_name: str | None = None
