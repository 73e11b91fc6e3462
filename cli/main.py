from __future__ import annotations

import argparse
import sys
from getpass import getpass
from typing import Any, Callable, Dict, Optional, Sequence

from pydantic import ValidationError

from adapters.base import UnsupportedDriverError
from adapters.factory import build_descriptor, list_supported
from cli.render import done_line, format_rows
from commands.operations import (
    OperationResult,
    StatementOutcome,
    create_database,
    describe_table,
    drop_database,
    run_sql,
)
from config.connection import ConnectionParameters, load_connection_parameters
from utils.log import configure_logging

APP_NAME = "Database migration utility"
APP_VERSION = "0.1.0"

APP_HELP_USAGE = "Use -h to display help information."
APP_AVAILABLE_DRIVERS = "Available drivers"

_ASK_PASSWORD = "\0ask"

# Descriptor variant used by each command: with or without the database name.
_INCLUDE_DATABASE_NAME = {"create": False, "drop": False, "describe": True, "sql": True}


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _connection_arguments(with_table: bool) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--drv", "--driver", dest="driver", help="Database driver.")
    parser.add_argument("--db", "--dbname", dest="dbname", help="Name of the database.")
    parser.add_argument("--host", help="Hostname or ip (default: 127.0.0.1).")
    parser.add_argument("--protocol", help="Communication protocol (default: tcp).")
    parser.add_argument("--port", type=int, help="Database port (default: 3306).")
    parser.add_argument("-u", "--user", help="Username.")
    parser.add_argument(
        "-p",
        "--password",
        nargs="?",
        const=_ASK_PASSWORD,
        help="Password; prompts without echo when given without a value.",
    )
    parser.add_argument("--charset", help="Character set (default: utf8).")
    parser.add_argument("--dbpath", help="Directory holding sqlite3 database files (default: ./).")
    parser.add_argument("--sslmode", help="SSL mode for postgres (default: disable).")
    if with_table:
        parser.add_argument("--tbl", "--table", dest="table", help="Table name (default: scheme_info).")
    parser.add_argument("--env-file", help="Read MIG_* connection defaults from a .env style file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="mig",
        description=f"{APP_NAME}\nv{APP_VERSION}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action="store_true", help="Display current version.")
    parser.add_argument("--drivers", action="store_true", help="Display available drivers.")

    subparsers = parser.add_subparsers(dest="command")
    plain = _connection_arguments(with_table=False)
    with_table = _connection_arguments(with_table=True)
    subparsers.add_parser("create", parents=[plain], help="Creates database")
    subparsers.add_parser("drop", parents=[plain], help="Drops database")
    subparsers.add_parser("describe", parents=[with_table], help="Describes table")
    subparsers.add_parser("sql", parents=[with_table], help="Prompts SQL queries")
    return parser


def _usage_banner() -> str:
    return (
        f"{APP_NAME}\nv{APP_VERSION}\n\n{APP_HELP_USAGE}\n\n"
        f"{APP_AVAILABLE_DRIVERS}: {list_supported()}"
    )


def _ask(read_line: Callable[[str], str], label: str) -> str:
    try:
        return read_line(f"{label}: ").strip()
    except EOFError:
        return ""


def resolve_parameters(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    read_line: Callable[[str], str] = input,
) -> ConnectionParameters:
    fields = ConnectionParameters.model_fields
    overrides: Dict[str, Any] = {key: value for key, value in vars(args).items() if key in fields}
    if overrides.get("password") == _ASK_PASSWORD:
        overrides["password"] = getpass("Database password: ")

    try:
        params = load_connection_parameters(overrides, env_path=args.env_file)
    except FileNotFoundError as exc:
        parser.error(str(exc))
    except ValidationError as exc:
        parser.error(str(exc))

    prompted: Dict[str, str] = {}
    if not params.driver:
        prompted["driver"] = _ask(read_line, "Database driver")
    if not params.dbname:
        prompted["dbname"] = _ask(read_line, "Database name")
    if prompted:
        params = params.model_copy(update=prompted)
    if not params.driver:
        parser.error("the following arguments are required: --driver")
    if not params.dbname:
        parser.error("the following arguments are required: --dbname")
    return params


def _print_error(error: Exception) -> None:
    print(f"\n{error}", file=sys.stderr)
    if isinstance(error, UnsupportedDriverError):
        print(f"{APP_AVAILABLE_DRIVERS}: {list_supported()}", file=sys.stderr)


def _print_connection(command: str, params: ConnectionParameters) -> None:
    print("\nConnection query:")
    print(build_descriptor(params.redacted(), _INCLUDE_DATABASE_NAME[command]))


def report(command: str, params: ConnectionParameters, result: OperationResult) -> None:
    if result.descriptor is None:
        if result.error is not None:
            _print_error(result.error)
        return

    _print_connection(command, params)
    if result.statements:
        print("\nSQL:")
        for statement in result.statements:
            print(f"{statement};")
    if result.error is not None:
        _print_error(result.error)
        return
    if result.rows is not None:
        print("\nResult:")
        for line in format_rows(result.rows):
            print(line)
    print(f"\n{done_line(result.elapsed)}")


def _print_outcome(outcome: StatementOutcome) -> None:
    if outcome.error is not None:
        _print_error(outcome.error)
        return
    if outcome.rows:
        print()
        for line in format_rows(outcome.rows):
            print(line)
    print(f"\n{done_line(outcome.elapsed)}")


def _run_command(
    command: str,
    params: ConnectionParameters,
    read_line: Callable[[str], str],
) -> None:
    if command == "create":
        report(command, params, create_database(params))
    elif command == "drop":
        report(command, params, drop_database(params))
    elif command == "describe":
        report(command, params, describe_table(params))
    else:
        connected = []

        def _on_ready(result: OperationResult) -> None:
            connected.append(result.descriptor)
            _print_connection(command, params)
            print()

        result = run_sql(params, read_line=read_line, on_statement=_print_outcome, on_ready=_on_ready)
        if result.error is not None:
            if result.descriptor is not None and not connected:
                _print_connection(command, params)
            _print_error(result.error)


def main(argv: Optional[Sequence[str]] = None, read_line: Callable[[str], str] = input) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        print(_usage_banner(), file=sys.stderr)
        return 1

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        if args.version:
            print(APP_VERSION)
        if args.drivers:
            print(list_supported(multiline=True))
        if not (args.version or args.drivers):
            parser.print_help()
        return 0

    configure_logging("DEBUG" if args.verbose else "WARNING")
    params = resolve_parameters(parser, args, read_line=read_line)
    _run_command(args.command, params, read_line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
