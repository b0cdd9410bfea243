"""
Execution gateway: one SQL statement -> one psql process -> decoded rows.

Steps for every statement
-------------------------
1. Resolve the target database (a database override on the connection wins).
2. Resolve the password: the connection's own, else the injected resolver when
   connecting as the administrative user.
3. Select peer or password authentication.
4. Build the psql argument vector (SQL passed as a single `-c` argument).
5. Run it through the ProcessRunner port and decode stdout.

No retries: a failing statement raises straight to the caller.
"""

from __future__ import annotations

import platform

from src import settings
from src.constants import DEFAULT_USERNAME, PSQL_CONNECTION_FAILURE_EXIT_CODE
from src.logger import LOGGER
from src.postgres_engine.connection import (
    ConnectionSpec,
    PasswordResolver,
    default_password_resolver,
)
from src.postgres_engine.errors import ClientConnectionError, ExecutionError
from src.postgres_engine.execute.auth import build_auth_options, select_auth
from src.postgres_engine.execute.codec import ExecutionResult, decode_rows, output_format_args
from src.postgres_engine.execute.ports import ProcessRunner
from src.postgres_engine.execute.process import SubprocessRunner


def build_psql_args(
    sql: str,
    connection: ConnectionSpec,
    database: str | None,
    psql_binary: str = "psql",
) -> list[str]:
    """
    Argument vector for one psql invocation, in a fixed order:

        psql -w -t -A -R <RS> -F <FS> -c <sql> -p <port> -U <user> [-h <host>] [<database>]
    """
    args = [psql_binary, "-w", *output_format_args(), "-c", sql]
    args += ["-p", str(connection.port), "-U", connection.username]
    if connection.host:
        args += ["-h", connection.host]
    if database:
        args.append(database)
    return args


class ConnectionExecutor:
    """Run SQL statements through psql for a single connection."""

    def __init__(
        self,
        connection: ConnectionSpec,
        runner: ProcessRunner | None = None,
        password_resolver: PasswordResolver | None = None,
        is_windows: bool | None = None,
        psql_binary: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.connection = connection
        self._runner = runner or SubprocessRunner()
        self._password_resolver = password_resolver or default_password_resolver
        self._is_windows = platform.system() == "Windows" if is_windows is None else is_windows
        self._psql_binary = psql_binary or settings.PSQL_BINARY
        self._timeout = settings.PSQL_TIMEOUT_SECONDS if timeout is None else timeout

    def resolve_password(self) -> str | None:
        """Explicit password, else the fallback for the administrative user."""
        if self.connection.password is not None:
            return self.connection.password
        if self.connection.username == DEFAULT_USERNAME:
            return self._password_resolver(self.connection.username)
        return None

    def execute(self, sql: str, database: str | None = None) -> ExecutionResult:
        """Run `sql` against `database` and return the decoded rows."""
        connection = self.connection
        target_database = connection.resolve_database(database)
        LOGGER.debug(
            "Connecting to database %s on %s:%s as %s",
            target_database,
            connection.host,
            connection.port,
            connection.username,
        )

        password = self.resolve_password()
        mode = select_auth(connection.host, password, self._is_windows)
        auth = build_auth_options(mode, connection.username, password)
        args = build_psql_args(sql, connection, target_database, self._psql_binary)

        LOGGER.debug("Performing query [%s] (%s authentication)", sql, mode)
        result = self._runner.run(
            args,
            run_as_user=auth.run_as_user,
            environment=auth.environment,
            timeout=self._timeout,
        )

        if not result.ok:
            context = {
                "argv": args,
                "database": target_database,
                "returncode": result.returncode,
                "stderr": result.stderr,
            }
            diagnostic = result.stderr.strip() or f"exit status {result.returncode}"
            if result.returncode == PSQL_CONNECTION_FAILURE_EXIT_CODE:
                raise ClientConnectionError(
                    f"psql could not connect to {connection.host or 'local socket'}: {diagnostic}",
                    context=context,
                )
            raise ExecutionError(f"psql failed running [{sql}]: {diagnostic}", context=context)

        return decode_rows(result.stdout)
