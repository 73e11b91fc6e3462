from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, List

from adapters.base import ConnectionOpenError, DatabaseAdapter, FileRemovalError
from config.connection import ConnectionParameters
from utils.log import get_logger

if TYPE_CHECKING:
    from executor.session import Session

log = get_logger(__name__)

FILE_EXTENSION = ".db"


class SQLiteAdapter(DatabaseAdapter):
    engine = "sqlite3"

    def build_descriptor(self, params: ConnectionParameters, include_database_name: bool) -> str:
        # The file path is the database; there is no separate USE step.
        return f"{params.dbpath}{params.dbname}{FILE_EXTENSION}"

    def connect(self, descriptor: str, create: bool = False) -> sqlite3.Connection:
        db_path = Path(descriptor)
        if not create and not db_path.exists():
            raise ConnectionOpenError(f"SQLite database file does not exist: {db_path}")
        return sqlite3.connect(str(db_path), isolation_level=None)

    def create_statements(self, params: ConnectionParameters) -> List[str]:
        return []

    def drop_statements(self, params: ConnectionParameters) -> List[str]:
        return []

    def describe_statement(self, params: ConnectionParameters) -> str:
        return f'PRAGMA table_info("{params.table}")'

    def open_for_drop(self, session: "Session") -> None:
        # Removing the file needs no handle; a missing file surfaces from unlink.
        return None

    def drop_database(self, session: "Session", params: ConnectionParameters) -> None:
        session.close()
        db_path = Path(session.descriptor)
        try:
            db_path.unlink()
        except OSError as exc:
            raise FileRemovalError(f"Failed to remove {db_path}: {exc}") from exc
        log.debug("Removed database file %s", db_path)
