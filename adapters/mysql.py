from __future__ import annotations

import re
from typing import Any, Dict, List

from adapters.base import ConnectionOpenError, DatabaseAdapter
from config.connection import ConnectionParameters

_DESCRIPTOR_RE = re.compile(
    r"^(?P<user>[^:@]*):(?P<password>.*)@(?P<protocol>\w*)\((?P<address>[^)]*)\)"
    r"/(?P<database>[^?]*)\?charset=(?P<charset>.*)$"
)


def parse_descriptor(descriptor: str) -> Dict[str, Any]:
    match = _DESCRIPTOR_RE.match(descriptor)
    if not match:
        raise ConnectionOpenError(f"Malformed MySQL connection string: {descriptor}")
    parts = match.groupdict()
    params: Dict[str, Any] = {
        "user": parts["user"],
        "password": parts["password"],
        "charset": parts["charset"],
        "autocommit": True,
    }
    if parts["database"]:
        params["database"] = parts["database"]

    address = parts["address"]
    if parts["protocol"] == "unix":
        params["unix_socket"] = address
        return params

    host, _, port_raw = address.rpartition(":")
    if not host:
        host, port_raw = address, ""
    params["host"] = host or "127.0.0.1"
    if port_raw:
        try:
            params["port"] = int(port_raw)
        except ValueError as exc:
            raise ConnectionOpenError(f"Invalid MySQL port: {port_raw}") from exc
    return params


class MySQLAdapter(DatabaseAdapter):
    engine = "mysql"

    def build_descriptor(self, params: ConnectionParameters, include_database_name: bool) -> str:
        dbname = params.dbname if include_database_name else ""
        return (
            f"{params.user}:{params.password}@{params.protocol}({params.host}:{params.port})"
            f"/{dbname}?charset={params.charset}"
        )

    def connect(self, descriptor: str, create: bool = False):
        params = parse_descriptor(descriptor)
        try:
            import mysql.connector  # type: ignore

            return mysql.connector.connect(**params)
        except ImportError:
            try:
                import pymysql  # type: ignore

                return pymysql.connect(**params)
            except ImportError as exc:
                raise ImportError(
                    "No MySQL driver found. Install one of: "
                    "`python -m pip install mysql-connector-python` or `python -m pip install pymysql`."
                ) from exc

    def create_statements(self, params: ConnectionParameters) -> List[str]:
        return [
            f"CREATE DATABASE {params.dbname} CHARACTER SET {params.charset}",
            f"USE {params.dbname}",
        ]

    def describe_statement(self, params: ConnectionParameters) -> str:
        return f"DESCRIBE {params.table}"
