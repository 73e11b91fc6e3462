from __future__ import annotations

from enum import Enum
from typing import Dict, Type

from adapters.base import DatabaseAdapter, DescriptorBuildError, UnsupportedDriverError
from adapters.mysql import MySQLAdapter
from adapters.postgres import PostgresAdapter
from adapters.sqlite import SQLiteAdapter
from config.connection import ConnectionParameters


class Backend(str, Enum):
    SQLITE = "sqlite3"
    MYSQL = "mysql"
    POSTGRES = "postgres"


DRIVERS = tuple(backend.value for backend in Backend)

_ADAPTERS: Dict[Backend, Type[DatabaseAdapter]] = {
    Backend.SQLITE: SQLiteAdapter,
    Backend.MYSQL: MySQLAdapter,
    Backend.POSTGRES: PostgresAdapter,
}


def is_supported(driver: str) -> bool:
    return driver in DRIVERS


def list_supported(multiline: bool = False) -> str:
    sep = "\n" if multiline else ", "
    return sep.join(DRIVERS)


def check_driver(driver: str) -> Backend:
    if not is_supported(driver):
        raise UnsupportedDriverError(driver)
    return Backend(driver)


def get_adapter(driver: str) -> DatabaseAdapter:
    return _ADAPTERS[check_driver(driver)]()


def build_descriptor(params: ConnectionParameters, include_database_name: bool) -> str:
    adapter_cls = _ADAPTERS.get(Backend(params.driver)) if is_supported(params.driver) else None
    if adapter_cls is None:
        raise DescriptorBuildError(f"build connection was ignored for driver: {params.driver}")
    return adapter_cls().build_descriptor(params, include_database_name)
