import pytest

import src.postgres_engine.statements as statements_mod
from src.postgres_engine.desired.models import DesiredDatabase, DesiredSchema
from src.postgres_engine.statements import DatabaseStatements, SchemaStatements, Statement


# ---------- database ----------

def test_database_ddl_targets_maintenance_database():
    statements = DatabaseStatements(DesiredDatabase(name="app"), maintenance_database="template1")

    assert statements.exists_statement() == Statement(
        "SELECT * FROM pg_database WHERE datname = 'app'", "template1"
    )
    assert statements.create_statement() == Statement('CREATE DATABASE "app"', "template1")
    assert statements.drop_statement() == Statement('DROP DATABASE "app"', "template1")


def test_database_query_targets_the_database_itself():
    statements = DatabaseStatements(DesiredDatabase(name="app"))
    assert statements.query_statement("SELECT 1") == Statement("SELECT 1", "app")


def test_database_maintenance_database_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(statements_mod.settings, "MAINTENANCE_DATABASE", "postgres")
    statements = DatabaseStatements(DesiredDatabase(name="app"))
    assert statements.exists_statement().database == "postgres"


def test_database_describe():
    assert DatabaseStatements(DesiredDatabase(name="app")).describe() == "database app"


# ---------- schema ----------

@pytest.mark.parametrize("database_name", ["app", None])
def test_schema_statements_target_schema_database(database_name):
    statements = SchemaStatements(
        DesiredSchema(schema_name="reporting", owner="analyst", database_name=database_name)
    )

    assert statements.exists_statement().database == database_name
    assert statements.create_statement() == Statement(
        'CREATE SCHEMA "reporting" AUTHORIZATION "analyst"', database_name
    )
    assert statements.drop_statement() == Statement('DROP SCHEMA "reporting"', database_name)
    assert statements.query_statement("SELECT 2") == Statement("SELECT 2", database_name)


def test_schema_describe():
    assert SchemaStatements(DesiredSchema(schema_name="raw")).describe() == "schema raw"
