"""
Engine: high-level entry point for provisioning resources.

Responsibilities
----------------
- Wire default components (process runner, password resolver, executor).
- Hand out action objects for databases and schemas.
- Dispatch a single action by name: run(resource, action, sql_query).

Notes:
-----
- No SQL or process logic here; work is delegated to injected components.
- Defaults are provided, but everything can be overridden for testing.
"""

from __future__ import annotations

from src.enums import ApplyStatus, ResourceAction
from src.postgres_engine.actions import DatabaseActions, ResourceActions, SchemaActions
from src.postgres_engine.connection import ConnectionSpec, PasswordResolver
from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.errors import ResourceDefinitionError
from src.postgres_engine.execute.gateway import ConnectionExecutor
from src.postgres_engine.execute.ports import ActionOutcome, ExecutionPolicy, ProcessRunner


class Engine:
    """
    High-level entry point for one connection.

    You can:
      - pass your own runner / resolver / executor (for tests or custom behaviour), or
      - rely on defaults (psql via subprocess, password from settings).
    """

    def __init__(
        self,
        connection: ConnectionSpec | None = None,
        runner: ProcessRunner | None = None,
        password_resolver: PasswordResolver | None = None,
        policy: ExecutionPolicy | None = None,
        executor: ConnectionExecutor | None = None,
    ) -> None:
        self.connection = connection or ConnectionSpec()
        self.policy = policy or ExecutionPolicy()
        self.executor = executor or ConnectionExecutor(
            self.connection, runner=runner, password_resolver=password_resolver
        )

    def database(self, desired: DesiredDatabase) -> DatabaseActions:
        return DatabaseActions(self.executor, desired, self.policy)

    def schema(self, desired: DesiredSchema) -> SchemaActions:
        return SchemaActions(self.executor, desired, self.policy)

    def actions_for(self, resource: DesiredDatabase | DesiredSchema) -> ResourceActions:
        if isinstance(resource, DesiredDatabase):
            return self.database(resource)
        if isinstance(resource, DesiredSchema):
            return self.schema(resource)
        raise ResourceDefinitionError(f"Unsupported resource: {resource!r}")

    def run(
        self,
        resource: DesiredDatabase | DesiredSchema,
        action: ResourceAction | str,
        sql_query: str | None = None,
    ) -> ActionOutcome:
        """Run one action against one resource."""
        try:
            action = ResourceAction(action)
        except ValueError as error:
            allowed = ", ".join(a.value for a in ResourceAction)
            raise ResourceDefinitionError(
                f"Unknown action {action!r}; expected one of: {allowed}"
            ) from error
        actions = self.actions_for(resource)

        if action is ResourceAction.CREATE:
            return actions.create()
        if action is ResourceAction.DROP:
            return actions.drop()
        if action is ResourceAction.QUERY:
            if not sql_query:
                raise ResourceDefinitionError(f"{actions.resource}: query action requires sql_query")
            return actions.query(sql_query)
        return ActionOutcome(
            resource=actions.resource,
            action=action,
            status=ApplyStatus.UNCHANGED,
            mutated=False,
            message="nothing to do",
        )
