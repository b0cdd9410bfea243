"""
Resource runner

Purpose
-------
Apply a sequence of resource requests in listed order, each with one or more
actions, and collect the outcomes into a RunReport.

Design
------
- Each request may carry its own connection; an Engine is built per request.
- Fail fast: the first error is logged and re-raised, later requests never run.
- No SQL here; everything goes through Engine.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from src.enums import ResourceAction
from src.logger import LOGGER
from src.postgres_engine.connection import ConnectionSpec
from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.engine import Engine
from src.postgres_engine.errors import PostgresResourceError
from src.postgres_engine.execute.ports import ActionOutcome, ExecutionPolicy


@dataclass(frozen=True)
class ResourceRequest:
    """One declared resource and the actions to run on it, in order."""

    resource: DesiredDatabase | DesiredSchema
    actions: tuple[ResourceAction, ...]
    connection: ConnectionSpec = ConnectionSpec()
    sql_query: str | None = None


@dataclass(frozen=True)
class RunReport:
    """Outcomes for a whole run."""

    outcomes: tuple[ActionOutcome, ...]

    @property
    def updated(self) -> bool:
        return any(outcome.mutated for outcome in self.outcomes)


EngineFactory = Callable[[ConnectionSpec, ExecutionPolicy], Engine]


def _default_engine_factory(connection: ConnectionSpec, policy: ExecutionPolicy) -> Engine:
    return Engine(connection, policy=policy)


class ResourceRunner:
    """Run every request's actions in order and report the outcomes."""

    def __init__(
        self,
        policy: ExecutionPolicy | None = None,
        engine_factory: EngineFactory | None = None,
    ) -> None:
        self._policy = policy or ExecutionPolicy()
        self._engine_factory = engine_factory or _default_engine_factory

    def apply(self, requests: Iterable[ResourceRequest]) -> RunReport:
        outcomes: list[ActionOutcome] = []
        for request in requests:
            engine = self._engine_factory(request.connection, self._policy)
            for action in request.actions:
                try:
                    outcome = engine.run(request.resource, action, request.sql_query)
                except PostgresResourceError as error:
                    LOGGER.error("%s failed: %s", action, error.message)
                    raise
                outcomes.append(outcome)
        report = RunReport(outcomes=tuple(outcomes))
        LOGGER.info(
            "Run completed: %d action(s), %d changed.",
            len(report.outcomes),
            sum(1 for outcome in report.outcomes if outcome.mutated),
        )
        return report
