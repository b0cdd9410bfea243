"""Shared constant values used across the provisioning engine."""

from typing import Final

DEFAULT_PORT: Final[int] = 5432
DEFAULT_USERNAME: Final[str] = "postgres"
DEFAULT_ENCODING: Final[str] = "DEFAULT"
PASSWORD_ENV_VAR: Final[str] = "PGPASSWORD"

ROW_SEPARATOR: Final[str] = "\x1e"
FIELD_SEPARATOR: Final[str] = "\x1f"

# psql exits with 2 when the connection to the server went bad
PSQL_CONNECTION_FAILURE_EXIT_CODE: Final[int] = 2
