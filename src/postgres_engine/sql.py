"""
SQL string builders for PostgreSQL database and schema operations.

All functions return fully-formed SQL strings. Identifiers are double-quoted
and literals single-quoted via `src.postgres_engine.identifiers`; no value is
escaped beyond that.

Design guarantees
- Deterministic, side-effect free string generation.
- CREATE DATABASE clauses always appear in the same order:
  TEMPLATE, ENCODING, TABLESPACE, LC_CTYPE/LC_COLLATE, CONNECTION LIMIT, OWNER.
- No business rules: the action layer decides when a statement runs.
"""

from __future__ import annotations

from src.postgres_engine.desired.models import DesiredDatabase
from src.postgres_engine.identifiers import format_encoding, quote_identifier, quote_literal


def _database_clauses(desired: DesiredDatabase) -> list[str]:
    clauses: list[str] = []
    if desired.template:
        clauses.append(f"TEMPLATE = {desired.template}")
    if desired.encoding:
        clauses.append(f"ENCODING = {format_encoding(desired.encoding)}")
    if desired.tablespace:
        clauses.append(f"TABLESPACE = {desired.tablespace}")
    if desired.collation:
        collation = quote_literal(desired.collation)
        clauses.append(f"LC_CTYPE = {collation} LC_COLLATE = {collation}")
    if desired.connection_limit is not None:
        clauses.append(f"CONNECTION LIMIT = {desired.connection_limit}")
    if desired.owner:
        clauses.append(f"OWNER = {quote_identifier(desired.owner)}")
    return clauses


def sql_create_database(desired: DesiredDatabase) -> str:
    """CREATE DATABASE "name" [TEMPLATE = ...] [ENCODING = ...] ... [OWNER = "..."]."""
    statement = f"CREATE DATABASE {quote_identifier(desired.name)}"
    clauses = _database_clauses(desired)
    if clauses:
        statement += " " + " ".join(clauses)
    return statement


def sql_drop_database(database_name: str) -> str:
    """DROP DATABASE "name"."""
    return f"DROP DATABASE {quote_identifier(database_name)}"


def sql_select_database_exists(database_name: str) -> str:
    """One row per matching pg_database entry (zero rows if absent)."""
    return f"SELECT * FROM pg_database WHERE datname = {quote_literal(database_name)}"


def sql_create_schema(schema_name: str, owner: str | None = None) -> str:
    """CREATE SCHEMA "name" [AUTHORIZATION "owner"]."""
    statement = f"CREATE SCHEMA {quote_identifier(schema_name)}"
    if owner:
        statement += f" AUTHORIZATION {quote_identifier(owner)}"
    return statement


def sql_drop_schema(schema_name: str) -> str:
    """DROP SCHEMA "name"."""
    return f"DROP SCHEMA {quote_identifier(schema_name)}"


def sql_select_schema_exists(schema_name: str) -> str:
    """One row if the schema exists in the connected database (zero rows if absent)."""
    return (
        "SELECT schema_name FROM information_schema.schemata "
        f"WHERE schema_name={quote_literal(schema_name)}"
    )
