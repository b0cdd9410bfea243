"""
Quoting helpers for PostgreSQL statements.

Conventions:
- Identifiers (database, schema, role names) are wrapped in double quotes.
- Literals (encodings, collations, names compared in WHERE clauses) are wrapped
  in single quotes.
- Values are NOT escaped. Callers must supply well-formed names; a name that
  contains a quote character produces a broken statement.
"""

from __future__ import annotations

from src.constants import DEFAULT_ENCODING


def quote_identifier(identifier: str) -> str:
    """Wrap an identifier in double quotes: app -> "app"."""
    return f'"{identifier}"'


def quote_literal(value: str) -> str:
    """Wrap a value in single quotes: UTF8 -> 'UTF8'."""
    return f"'{value}'"


def format_encoding(encoding: str) -> str:
    """Quote an encoding unless it is the DEFAULT keyword."""
    if encoding == DEFAULT_ENCODING:
        return encoding
    return quote_literal(encoding)
