"""
Exception hierarchy for the provisioning engine.

Hierarchy:
    PostgresResourceError
    ├── ResourceDefinitionError   invalid desired state or resource file
    └── ExecutionError            psql exited non-zero
        └── ClientConnectionError psql could not be spawned or reach the server

No retries happen anywhere: every error is fatal to the current action and the
client's diagnostic text travels in `context["stderr"]`.
"""

from __future__ import annotations

from typing import Any


class PostgresResourceError(Exception):
    """Base exception for all provisioning errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context})"


class ResourceDefinitionError(PostgresResourceError, ValueError):
    """A desired-state definition is missing fields or carries invalid values."""


class ExecutionError(PostgresResourceError):
    """psql ran but exited non-zero (SQL error, permission error, ...)."""

    @property
    def stderr(self) -> str:
        return self.context.get("stderr", "")

    @property
    def returncode(self) -> int | None:
        return self.context.get("returncode")


class ClientConnectionError(ExecutionError):
    """psql could not be started, timed out, or could not reach the server."""
