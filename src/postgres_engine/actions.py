"""
Resource actions: check-before-mutate state resolution.

Every action starts with an existence check and only runs its statement when
the precondition holds:

    create : absent  -> CREATE        present -> no-op
    drop   : present -> DROP          absent  -> no-op
    query  : present -> caller's SQL  absent  -> no-op

The query action is gated on the named database/schema existing; the query
text itself is run verbatim and never validated.

Failures from the executor propagate unchanged: no retries, and a failed
existence check is an error, never "does not exist".

`DatabaseActions` and `SchemaActions` share one `ConnectionExecutor` capability
and differ only in the statement builder they use.
"""

from __future__ import annotations

from typing import Protocol

from src.enums import ApplyStatus, ResourceAction
from src.logger import LOGGER
from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.execute.codec import ExecutionResult
from src.postgres_engine.execute.ports import ActionOutcome, ExecutionPolicy
from src.postgres_engine.statements import (
    DatabaseStatements,
    SchemaStatements,
    Statement,
    StatementBuilder,
)


class StatementExecutor(Protocol):
    """Anything that can run one SQL statement against a database."""

    def execute(self, sql: str, database: str | None = None) -> ExecutionResult: ...


class ResourceActions:
    """create / drop / query for a single server object."""

    def __init__(
        self,
        executor: StatementExecutor,
        statements: StatementBuilder,
        policy: ExecutionPolicy | None = None,
    ) -> None:
        self._executor = executor
        self._statements = statements
        self._policy = policy or ExecutionPolicy()

    @property
    def resource(self) -> str:
        return self._statements.describe()

    # ----- public API -----

    def exists(self) -> bool:
        """True when the existence query returns at least one row."""
        statement = self._statements.exists_statement()
        LOGGER.debug("%s: checking if it exists", self.resource)
        rows = self._run(statement)
        found = len(rows) != 0
        LOGGER.debug("%s: %s", self.resource, "exists" if found else "does not exist")
        return found

    def create(self) -> ActionOutcome:
        if self.exists():
            return self._unchanged(ResourceAction.CREATE, "already exists")
        return self._apply(ResourceAction.CREATE, self._statements.create_statement())

    def drop(self) -> ActionOutcome:
        if not self.exists():
            return self._unchanged(ResourceAction.DROP, "does not exist")
        return self._apply(ResourceAction.DROP, self._statements.drop_statement())

    def query(self, sql: str) -> ActionOutcome:
        if not self.exists():
            return self._unchanged(ResourceAction.QUERY, "does not exist; query not run")
        outcome = self._apply(ResourceAction.QUERY, self._statements.query_statement(sql))
        if outcome.mutated:
            LOGGER.debug("%s: query [%s] succeeded", self.resource, sql)
        return outcome

    # ----- helpers -----

    def _run(self, statement: Statement) -> ExecutionResult:
        return self._executor.execute(statement.sql, statement.database)

    def _apply(self, action: ResourceAction, statement: Statement) -> ActionOutcome:
        if self._policy.dry_run:
            message = f"(dry-run) would {action} {self.resource}: {statement.sql}"
            LOGGER.info(message)
            return ActionOutcome(
                resource=self.resource,
                action=action,
                status=ApplyStatus.SKIPPED,
                mutated=False,
                statement=statement.sql,
                message=message,
            )

        LOGGER.info("%s: running %s", self.resource, action)
        rows = self._run(statement)
        return ActionOutcome(
            resource=self.resource,
            action=action,
            status=ApplyStatus.OK,
            mutated=True,
            statement=statement.sql,
            result=rows if action is ResourceAction.QUERY else None,
            message=f"{action} {self.resource}",
        )

    def _unchanged(self, action: ResourceAction, reason: str) -> ActionOutcome:
        LOGGER.debug("%s: %s skipped, %s", self.resource, action, reason)
        return ActionOutcome(
            resource=self.resource,
            action=action,
            status=ApplyStatus.UNCHANGED,
            mutated=False,
            message=f"{self.resource} {reason}",
        )


class DatabaseActions(ResourceActions):
    """Actions for a database; DDL runs from the maintenance database."""

    def __init__(
        self,
        executor: StatementExecutor,
        desired: DesiredDatabase,
        policy: ExecutionPolicy | None = None,
        maintenance_database: str | None = None,
    ) -> None:
        super().__init__(executor, DatabaseStatements(desired, maintenance_database), policy)
        self.desired = desired


class SchemaActions(ResourceActions):
    """Actions for a schema; everything runs inside the schema's database."""

    def __init__(
        self,
        executor: StatementExecutor,
        desired: DesiredSchema,
        policy: ExecutionPolicy | None = None,
    ) -> None:
        super().__init__(executor, SchemaStatements(desired), policy)
        self.desired = desired
