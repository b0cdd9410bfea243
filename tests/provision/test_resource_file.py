import textwrap

import pytest

from src.enums import ResourceAction
from src.postgres_engine.connection import ConnectionSpec
from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.errors import ResourceDefinitionError
from src.provision.utils import build_resource_request, load_resource_file


def _write(tmp_path, text):
    path = tmp_path / "resources.yml"
    path.write_text(textwrap.dedent(text))
    return path


def test_load_resource_file(tmp_path, monkeypatch):
    monkeypatch.setenv("APP_DB_PASSWORD", "from-env")
    path = _write(
        tmp_path,
        """
        connection:
          host: db.internal
          port: 6432
          password: ${APP_DB_PASSWORD}
        resources:
          - type: database
            name: app
            encoding: DEFAULT
            connection_limit: 5
          - type: schema
            schema_name: reporting
            database_name: app
            action: [drop, create]
            connection:
              username: admin
          - type: database
            name: app
            action: query
            sql_query: SELECT 1
        """,
    )

    requests = load_resource_file(path)

    assert len(requests) == 3
    database, schema, query = requests
    assert database.resource == DesiredDatabase(name="app", encoding="DEFAULT", connection_limit=5)
    assert database.actions == (ResourceAction.CREATE,)
    assert database.connection == ConnectionSpec(host="db.internal", port=6432, password="from-env")

    assert schema.resource == DesiredSchema(schema_name="reporting", database_name="app")
    assert schema.actions == (ResourceAction.DROP, ResourceAction.CREATE)
    assert schema.connection.username == "admin"
    assert schema.connection.host == "db.internal"

    assert query.actions == (ResourceAction.QUERY,)
    assert query.sql_query == "SELECT 1"


def test_unset_variable_resolves_to_none(tmp_path, monkeypatch):
    monkeypatch.delenv("MISSING_PASSWORD", raising=False)
    path = _write(
        tmp_path,
        """
        connection:
          password: ${MISSING_PASSWORD}
        resources: []
        """,
    )
    assert load_resource_file(path) == ()


def test_empty_file_has_no_requests(tmp_path):
    assert load_resource_file(_write(tmp_path, "")) == ()


def test_invalid_yaml_raises(tmp_path):
    with pytest.raises(ResourceDefinitionError, match="invalid YAML"):
        load_resource_file(_write(tmp_path, "resources: [unclosed"))


def test_resources_must_be_a_list(tmp_path):
    with pytest.raises(ResourceDefinitionError, match="list"):
        load_resource_file(_write(tmp_path, "resources: {type: database}"))


def test_unknown_type_rejected():
    with pytest.raises(ResourceDefinitionError, match="tablespace"):
        build_resource_request({"type": "tablespace", "name": "x"})


def test_unknown_action_rejected():
    with pytest.raises(ResourceDefinitionError, match="Unknown action"):
        build_resource_request({"type": "database", "name": "x", "action": "truncate"})


def test_query_without_sql_rejected():
    with pytest.raises(ResourceDefinitionError, match="sql_query"):
        build_resource_request({"type": "database", "name": "x", "action": "query"})


def test_unknown_connection_key_rejected():
    with pytest.raises(ResourceDefinitionError, match="sslmode"):
        build_resource_request(
            {"type": "database", "name": "x", "connection": {"sslmode": "require"}}
        )
