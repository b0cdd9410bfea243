"""Entry point for applying a resource file against a PostgreSQL server."""

from __future__ import annotations

import sys
from argparse import ArgumentParser
from collections.abc import Sequence

from src.logger import LOGGER, set_log_level
from src.postgres_engine.errors import PostgresResourceError
from src.postgres_engine.execute.ports import ExecutionPolicy
from src.postgres_engine.runner import ResourceRunner, RunReport
from src.provision.utils import load_resource_file


def _build_parser() -> ArgumentParser:
    p = ArgumentParser(
        prog="pg-resources",
        description="Create, drop or query PostgreSQL databases and schemas through psql.",
    )
    p.add_argument("resource_file", help="YAML file declaring connection and resources")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Check existence only; print the statements that would run",
    )
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, ...)")
    return p


def _print_report(report: RunReport) -> None:
    for outcome in report.outcomes:
        print(f"{outcome.status:<9} {outcome.action:<7} {outcome.resource}: {outcome.message}")
        if outcome.result is not None:
            for row in outcome.result:
                print("    " + " | ".join(row))


def run_resources(resource_file: str, dry_run: bool = False) -> RunReport:
    """Load `resource_file` and apply every resource in it."""
    requests = load_resource_file(resource_file)
    runner = ResourceRunner(policy=ExecutionPolicy(dry_run=dry_run))
    return runner.apply(requests)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level.upper())

    try:
        report = run_resources(args.resource_file, dry_run=args.dry_run)
    except PostgresResourceError as error:
        LOGGER.error(error.message)
        return 1
    except OSError as error:
        LOGGER.error("Could not read %s: %s", args.resource_file, error)
        return 1

    _print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
