"""Round trips against a real server; run with --include-postgres-tests."""

import uuid

import pytest

from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.engine import Engine
from src.postgres_engine.errors import ExecutionError


@pytest.fixture
def database_name():
    return f"pg_resources_{uuid.uuid4().hex[:8]}"


def test_database_lifecycle(psql_connection, database_name):
    engine = Engine(psql_connection)
    desired = DesiredDatabase(name=database_name, encoding="UTF8", template="template0")

    try:
        assert engine.run(desired, "create").mutated is True
        assert engine.run(desired, "create").mutated is False

        outcome = engine.run(desired, "query", sql_query="SELECT current_database(), 1")
        assert outcome.result.rows == [[database_name, "1"]]
    finally:
        engine.run(desired, "drop")

    assert engine.run(desired, "drop").mutated is False


def test_schema_lifecycle(psql_connection, database_name):
    engine = Engine(psql_connection)
    database = DesiredDatabase(name=database_name)
    schema = DesiredSchema(schema_name="reporting", database_name=database_name)

    engine.run(database, "create")
    try:
        assert engine.run(schema, "create").mutated is True
        assert engine.run(schema, "create").mutated is False
        assert engine.run(schema, "drop").mutated is True
    finally:
        engine.run(database, "drop")


def test_sql_error_surfaces_client_diagnostics(psql_connection, database_name):
    engine = Engine(psql_connection)
    desired = DesiredDatabase(name=database_name)

    engine.run(desired, "create")
    try:
        with pytest.raises(ExecutionError) as excinfo:
            engine.run(desired, "query", sql_query="SELECT * FROM no_such_table")
        assert "no_such_table" in excinfo.value.stderr
    finally:
        engine.run(desired, "drop")
