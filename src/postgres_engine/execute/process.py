"""
Default process runner: `subprocess.run` with shell=False.

- The command is passed as a list, never a shell string, so quoting in SQL
  text cannot turn into shell injection.
- Environment overrides are applied to a copy of `os.environ`; a None value
  removes the variable.
- The OS user is only switched when it differs from the current one
  (switching requires privileges).
- Spawn failures and timeouts raise `ClientConnectionError`; a non-zero exit is
  reported through `ProcessResult` and left to the caller.
"""

from __future__ import annotations

import getpass
import os
import subprocess
from collections.abc import Mapping, Sequence

from src.postgres_engine.errors import ClientConnectionError
from src.postgres_engine.execute.ports import ProcessResult


def build_environment(overrides: Mapping[str, str | None] | None) -> dict[str, str]:
    """Copy of the current environment with `overrides` applied."""
    env = os.environ.copy()
    for key, value in (overrides or {}).items():
        if value is None:
            env.pop(key, None)
        else:
            env[key] = value
    return env


def _user_to_switch_to(run_as_user: str | None, command: list[str]) -> str | None:
    """The OS user to run as, or None when no switch is needed."""
    if not run_as_user:
        return None
    try:
        current_user = getpass.getuser()
    except (OSError, KeyError) as error:
        # no passwd entry and no USER/LOGNAME for the current uid
        raise ClientConnectionError(
            f"Could not start {command[0]} as {run_as_user}: current user is unknown ({error})",
            context={"argv": command, "run_as_user": run_as_user},
        ) from error
    return None if run_as_user == current_user else run_as_user


class SubprocessRunner:
    """Run a process to completion and capture its text output."""

    def run(
        self,
        argv: Sequence[str],
        *,
        run_as_user: str | None = None,
        environment: Mapping[str, str | None] | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        command = list(argv)
        user = _user_to_switch_to(run_as_user, command)

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                env=build_environment(environment),
                user=user,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as error:
            raise ClientConnectionError(
                f"{command[0]} timed out after {timeout}s",
                context={"argv": command, "timeout": timeout},
            ) from error
        except (OSError, KeyError) as error:
            # missing binary, unknown OS user (KeyError), no privilege to switch user
            raise ClientConnectionError(
                f"Could not start {command[0]}: {error}",
                context={"argv": command, "run_as_user": user},
            ) from error

        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
