"""
Statement builders: desired state -> (SQL, target database) pairs.

`StatementBuilder` is the only place the action layer gets SQL from, so a
parameterized implementation can replace the string-rendering ones below
without touching `actions.py`.

Targeting
---------
- Database-level statements (exists/create/drop) run from the maintenance
  database: a database cannot be checked for before it exists, and cannot be
  dropped while connected to it.
- A database's `query` runs inside the database itself.
- Schema statements all run inside the schema's database.

A database override on the connection still replaces every target here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src import settings
from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.sql import (
    sql_create_database,
    sql_create_schema,
    sql_drop_database,
    sql_drop_schema,
    sql_select_database_exists,
    sql_select_schema_exists,
)


@dataclass(frozen=True)
class Statement:
    """SQL text plus the database it should run against (None: client default)."""

    sql: str
    database: str | None


class StatementBuilder(Protocol):
    """Source of every statement a resource action may run."""

    def describe(self) -> str: ...

    def exists_statement(self) -> Statement: ...

    def create_statement(self) -> Statement: ...

    def drop_statement(self) -> Statement: ...

    def query_statement(self, sql: str) -> Statement: ...


class DatabaseStatements:
    """Statements for a `DesiredDatabase`."""

    def __init__(
        self, desired: DesiredDatabase, maintenance_database: str | None = None
    ) -> None:
        self.desired = desired
        self.maintenance_database = maintenance_database or settings.MAINTENANCE_DATABASE

    def describe(self) -> str:
        return f"database {self.desired.name}"

    def exists_statement(self) -> Statement:
        return Statement(sql_select_database_exists(self.desired.name), self.maintenance_database)

    def create_statement(self) -> Statement:
        return Statement(sql_create_database(self.desired), self.maintenance_database)

    def drop_statement(self) -> Statement:
        return Statement(sql_drop_database(self.desired.name), self.maintenance_database)

    def query_statement(self, sql: str) -> Statement:
        return Statement(sql, self.desired.name)


class SchemaStatements:
    """Statements for a `DesiredSchema`, all run inside the schema's database."""

    def __init__(self, desired: DesiredSchema) -> None:
        self.desired = desired

    def describe(self) -> str:
        return f"schema {self.desired.schema_name}"

    def exists_statement(self) -> Statement:
        return Statement(
            sql_select_schema_exists(self.desired.schema_name), self.desired.database_name
        )

    def create_statement(self) -> Statement:
        return Statement(
            sql_create_schema(self.desired.schema_name, self.desired.owner),
            self.desired.database_name,
        )

    def drop_statement(self) -> Statement:
        return Statement(sql_drop_schema(self.desired.schema_name), self.desired.database_name)

    def query_statement(self, sql: str) -> Statement:
        return Statement(sql, self.desired.database_name)
