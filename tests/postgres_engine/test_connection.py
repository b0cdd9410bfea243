import pytest

import src.postgres_engine.connection as connection_mod
from src.postgres_engine.connection import ConnectionSpec, default_password_resolver
from src.postgres_engine.errors import ResourceDefinitionError


def test_defaults():
    spec = ConnectionSpec()
    assert spec.host is None
    assert spec.port == 5432
    assert spec.username == "postgres"
    assert spec.password is None
    assert spec.database is None


def test_from_mapping_coerces_port_and_defaults_username():
    spec = ConnectionSpec.from_mapping({"host": "db", "port": "6432", "username": None})
    assert spec == ConnectionSpec(host="db", port=6432, username="postgres")


def test_from_mapping_none_gives_defaults():
    assert ConnectionSpec.from_mapping(None) == ConnectionSpec()


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ResourceDefinitionError, match="sslmode"):
        ConnectionSpec.from_mapping({"sslmode": "require"})


def test_from_mapping_rejects_bad_port():
    with pytest.raises(ResourceDefinitionError, match="port"):
        ConnectionSpec.from_mapping({"port": "five"})


def test_database_override_wins():
    spec = ConnectionSpec(database="override")
    assert spec.resolve_database("template1") == "override"
    assert spec.resolve_database(None) == "override"


@pytest.mark.parametrize("override", [None, ""])
def test_no_override_keeps_requested_database(override):
    assert ConnectionSpec(database=override).resolve_database("app") == "app"


def test_merged_replaces_only_given_keys():
    base = ConnectionSpec(host="db", port=6432, password="secret")
    merged = base.merged({"database": "app", "port": 5433})
    assert merged == ConnectionSpec(host="db", port=5433, password="secret", database="app")
    assert base.merged(None) is base


def test_default_password_resolver_only_for_postgres_user(monkeypatch):
    monkeypatch.setattr(connection_mod.settings, "POSTGRES_PASSWORD", "node-secret")
    assert default_password_resolver("postgres") == "node-secret"
    assert default_password_resolver("app") is None
