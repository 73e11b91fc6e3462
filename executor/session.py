from __future__ import annotations

from typing import Any, List, Optional

from adapters.base import AdapterError, ConnectionOpenError, DatabaseAdapter, StatementError
from executor.materializer import ResultSet, materialize
from utils.log import get_logger

log = get_logger(__name__)


class Session:
    """One owned connection for one adapter + descriptor pair."""

    def __init__(self, adapter: DatabaseAdapter, descriptor: str):
        self.adapter = adapter
        self.descriptor = descriptor
        self.history: List[str] = []
        self._conn: Optional[Any] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self, create: bool = False) -> Session:
        if self._conn is not None:
            return self
        try:
            self._conn = self.adapter.connect(self.descriptor, create=create)
        except AdapterError:
            raise
        except Exception as exc:
            raise ConnectionOpenError(str(exc)) from exc
        log.debug("Opened %s session", self.adapter.engine)
        return self

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        conn.close()
        log.debug("Closed %s session", self.adapter.engine)

    def __enter__(self) -> Session:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def execute(self, statement: str) -> int:
        cur = self._cursor(statement)
        try:
            self._run(cur, statement)
            rowcount = cur.rowcount
            return rowcount if isinstance(rowcount, int) else -1
        finally:
            cur.close()

    def query(self, statement: str) -> ResultSet:
        cur = self._cursor(statement)
        try:
            self._run(cur, statement)
            try:
                return materialize(cur)
            except Exception as exc:
                raise StatementError(str(exc), statement) from exc
        finally:
            cur.close()

    def _cursor(self, statement: str) -> Any:
        if self._conn is None:
            raise StatementError("Session is closed", statement)
        self.history.append(statement)
        try:
            return self._conn.cursor()
        except Exception as exc:
            raise StatementError(str(exc), statement) from exc

    def _run(self, cur: Any, statement: str) -> None:
        log.debug("Executing on %s: %s", self.adapter.engine, statement)
        try:
            cur.execute(statement)
        except Exception as exc:
            raise StatementError(str(exc), statement) from exc
