"""
Execution ports and result types.

- ProcessRunner: protocol for anything that can spawn psql (subprocess, fakes)
- ProcessResult: captured exit status and output of one process
- ExecutionPolicy: dry-run toggle
- ActionOutcome: structured outcome of one resource action
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol

from src.enums import ApplyStatus, ResourceAction
from src.postgres_engine.execute.codec import ExecutionResult


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of a finished process."""

    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    """Spawns a process without a shell and waits for it to exit."""

    def run(
        self,
        argv: Sequence[str],
        *,
        run_as_user: str | None = None,
        environment: Mapping[str, str | None] | None = None,
        timeout: float | None = None,
    ) -> ProcessResult: ...


@dataclass(frozen=True)
class ExecutionPolicy:
    """Controls how actions behave."""

    dry_run: bool = False


@dataclass(frozen=True)
class ActionOutcome:
    """
    Outcome of one action on one resource.

    mutated:
        True iff a create/drop/query statement actually ran.
    statement:
        SQL that ran (or would have run under dry-run); None when nothing was due.
    result:
        Rows returned by a query action.
    """

    resource: str
    action: ResourceAction
    status: ApplyStatus
    mutated: bool
    statement: str | None = None
    result: ExecutionResult | None = None
    message: str = ""
