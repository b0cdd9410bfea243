"""Enumerations used throughout the provisioning engine."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Kind of server object a resource describes."""

    DATABASE = "database"
    SCHEMA = "schema"


class ResourceAction(StrEnum):
    """Action requested for a resource."""

    CREATE = "create"
    DROP = "drop"
    QUERY = "query"
    NOTHING = "nothing"


class AuthMode(StrEnum):
    """How psql authenticates against the server."""

    PEER = "peer"
    PASSWORD = "password"


class ApplyStatus(StrEnum):
    OK = "ok"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"  # dry-run
