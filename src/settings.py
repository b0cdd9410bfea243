"""Configuration values sourced from environment variables."""

import os
from typing import Final

_timeout = os.getenv(key="PSQL_TIMEOUT_SECONDS", default="")


LOG_LEVEL: Final[str] = os.getenv(key="LOG_LEVEL", default="INFO")
LOGGER_NAME: Final[str] = os.getenv(key="LOGGER_NAME", default="pg-resources")
LOG_COLOUR_ENABLED: Final[bool] = bool(
    os.getenv(key="LOG_COLOUR_ENABLED", default="True").upper() == "TRUE"
)
PSQL_BINARY: Final[str] = os.getenv(key="PSQL_BINARY", default="psql")
MAINTENANCE_DATABASE: Final[str] = os.getenv(key="MAINTENANCE_DATABASE", default="template1")
POSTGRES_PASSWORD: Final[str | None] = os.getenv(key="POSTGRES_PASSWORD")
PSQL_TIMEOUT_SECONDS: Final[float | None] = float(_timeout) if _timeout else None
