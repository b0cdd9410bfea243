"""
Authentication selection for psql invocations.

Local connections (default socket, or a host that is a socket directory) made
without a password use peer authentication: psql runs as the OS user named in
the connection and the server trusts that identity. Everything else, and
everything on Windows, authenticates with a password handed over in the
PGPASSWORD environment variable of that single process. Passwords never go on
the command line.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src.constants import PASSWORD_ENV_VAR
from src.enums import AuthMode


@dataclass(frozen=True)
class AuthOptions:
    """
    Process identity and environment overrides for one invocation.

    run_as_user:
        OS user to run psql as (peer authentication), or None.
    environment:
        Variables to set for the process. A None value removes the variable
        from the inherited environment.
    """

    mode: AuthMode
    run_as_user: str | None = None
    environment: Mapping[str, str | None] = field(
        default_factory=lambda: MappingProxyType({})
    )


def select_auth(host: str | None, password: str | None, is_windows: bool) -> AuthMode:
    """Pick peer authentication when it can work, password authentication otherwise."""
    is_local = not host or host.startswith("/")
    if is_local and password is None and not is_windows:
        return AuthMode.PEER
    return AuthMode.PASSWORD


def build_auth_options(mode: AuthMode, username: str, password: str | None) -> AuthOptions:
    """Translate an AuthMode into process overrides."""
    if mode is AuthMode.PEER:
        return AuthOptions(mode=mode, run_as_user=username)
    # TODO: support a generated .pgpass file as an alternative to PGPASSWORD.
    return AuthOptions(mode=mode, environment=MappingProxyType({PASSWORD_ENV_VAR: password}))
