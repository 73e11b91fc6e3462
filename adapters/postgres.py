from __future__ import annotations

from typing import List

from adapters.base import DatabaseAdapter
from config.connection import ConnectionParameters


def _conninfo_value(value: str) -> str:
    if value and not any(ch.isspace() or ch in "'\\" for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class PostgresAdapter(DatabaseAdapter):
    engine = "postgres"

    def build_descriptor(self, params: ConnectionParameters, include_database_name: bool) -> str:
        # libpq conninfo; the database is targeted by statements, not by the descriptor.
        return " ".join(
            f"{key}={_conninfo_value(value)}"
            for key, value in (
                ("host", params.host),
                ("user", params.user),
                ("password", params.password),
                ("sslmode", params.sslmode),
            )
        )

    def connect(self, descriptor: str, create: bool = False):
        try:
            import psycopg  # type: ignore

            return psycopg.connect(descriptor, autocommit=True)
        except ImportError:
            try:
                import psycopg2  # type: ignore
            except ImportError as exc:
                raise ImportError(
                    "No PostgreSQL driver found. Install one of: "
                    '`python -m pip install "psycopg[binary]"` or `python -m pip install psycopg2-binary`.'
                ) from exc
            conn = psycopg2.connect(descriptor)
            conn.autocommit = True
            return conn

    def create_statements(self, params: ConnectionParameters) -> List[str]:
        return [f"CREATE DATABASE {params.dbname} OWNER {params.user} ENCODING '{params.charset.upper()}'"]

    def describe_statement(self, params: ConnectionParameters) -> str:
        table = params.table.replace("'", "''")
        return (
            "SELECT attname FROM pg_attribute, pg_class "
            f"WHERE attrelid = pg_class.oid AND relname = '{table}' "
            "AND COALESCE(attstattarget, -1) <> 0"
        )
