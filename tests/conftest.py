import os
import shutil

import pytest

from src.postgres_engine.connection import ConnectionSpec

# Names of fixtures that require a reachable PostgreSQL server
_POSTGRES_FIXTURE_NAME = "psql_connection"


@pytest.fixture(scope="session")
def psql_connection() -> ConnectionSpec:
    """Connection to a throwaway server, configured through the usual PG* variables."""
    if shutil.which("psql") is None:
        pytest.skip("psql is not on PATH")

    return ConnectionSpec(
        host=os.getenv("PGHOST") or None,
        port=int(os.getenv("PGPORT", "5432")),
        username=os.getenv("PGUSER", "postgres"),
        password=os.getenv("PGPASSWORD"),
    )


def _mark_tests_using_postgres_fixture(tests: list[pytest.Item]) -> None:
    """
    Adds the `requires_postgres` marker to tests that are using the fixture that
    requires a PostgreSQL server.

    :param tests: list of tests collected by `pytest`
    """
    for test in tests:
        if _POSTGRES_FIXTURE_NAME in getattr(test, "fixturenames", ()):
            test.add_marker(pytest.mark.requires_postgres)


def _skip_postgres_tests(test: pytest.Item) -> None:
    """
    Tell `pytest` to skip tests that require a PostgreSQL server.

    If the config argument `--include-postgres-tests` is present, this shouldn't be
    invoked.

    :param test: test collected by `pytest`
    """
    requires_postgres_markers = list(test.iter_markers(name="requires_postgres"))

    if requires_postgres_markers:
        pytest.skip("Skipped tests that require a PostgreSQL server")


def pytest_addoption(parser: pytest.Parser):
    parser.addoption(
        "--include-postgres-tests",
        action="store_true",
        default=False,
        help="Run tests against a live PostgreSQL server",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    if not config.getoption("--include-postgres-tests"):
        _mark_tests_using_postgres_fixture(tests=items)


def pytest_runtest_setup(item: pytest.Item):
    if not item.config.getoption("--include-postgres-tests"):
        _skip_postgres_tests(test=item)
