from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from adapters.base import AdapterError, DatabaseAdapter, StatementError
from adapters.factory import get_adapter
from config.connection import ConnectionParameters
from executor.materializer import ResultSet
from executor.session import Session
from utils.log import get_logger

log = get_logger(__name__)

EXIT_TOKENS = frozenset({"q", "exit", "\\q", "/q", ".exit"})


@dataclass
class OperationResult:
    operation: str
    driver: str
    descriptor: Optional[str] = None
    statements: List[str] = field(default_factory=list)
    rows: Optional[ResultSet] = None
    error: Optional[AdapterError] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class StatementOutcome:
    statement: str
    rows: ResultSet = field(default_factory=list)
    error: Optional[StatementError] = None
    elapsed: float = 0.0


ReadLine = Callable[[str], str]
StatementListener = Callable[[StatementOutcome], None]


def _prepare(
    result: OperationResult,
    params: ConnectionParameters,
    include_database_name: bool,
) -> Optional[Tuple[DatabaseAdapter, Session]]:
    try:
        adapter = get_adapter(params.driver)
        result.descriptor = adapter.build_descriptor(params, include_database_name)
    except AdapterError as exc:
        result.error = exc
        return None
    return adapter, Session(adapter, result.descriptor)


def _finish(result: OperationResult, session: Session, started: float) -> OperationResult:
    result.statements = list(session.history)
    result.elapsed = time.perf_counter() - started
    if result.error is not None:
        log.debug("%s failed on %s: %s", result.operation, result.driver, result.error)
    return result


def create_database(params: ConnectionParameters) -> OperationResult:
    result = OperationResult(operation="create", driver=params.driver)
    prepared = _prepare(result, params, include_database_name=False)
    if prepared is None:
        return result
    adapter, session = prepared

    started = time.perf_counter()
    try:
        with session.open(create=True):
            adapter.create_database(session, params)
    except AdapterError as exc:
        result.error = exc
    return _finish(result, session, started)


def drop_database(params: ConnectionParameters) -> OperationResult:
    result = OperationResult(operation="drop", driver=params.driver)
    prepared = _prepare(result, params, include_database_name=False)
    if prepared is None:
        return result
    adapter, session = prepared

    started = time.perf_counter()
    try:
        adapter.open_for_drop(session)
        adapter.drop_database(session, params)
    except AdapterError as exc:
        result.error = exc
    finally:
        session.close()
    return _finish(result, session, started)


def describe_table(params: ConnectionParameters) -> OperationResult:
    result = OperationResult(operation="describe", driver=params.driver)
    prepared = _prepare(result, params, include_database_name=True)
    if prepared is None:
        return result
    adapter, session = prepared

    started = time.perf_counter()
    try:
        with session.open():
            result.rows = session.query(adapter.describe_statement(params))
    except AdapterError as exc:
        result.error = exc
    return _finish(result, session, started)


def sql_loop(
    session: Session,
    read_line: ReadLine,
    on_statement: StatementListener,
    prompt: str = "> ",
) -> int:
    """Run statements read from ``read_line`` until an exit token or end of input.

    A failing statement is reported through ``on_statement`` and the loop
    keeps going on the same session. Returns the number of statements run.
    """
    executed = 0
    while True:
        try:
            text = read_line(prompt)
        except EOFError:
            break
        text = text.strip()
        if text in EXIT_TOKENS:
            break
        if not text:
            continue

        started = time.perf_counter()
        outcome = StatementOutcome(statement=text)
        try:
            outcome.rows = session.query(text)
        except StatementError as exc:
            outcome.error = exc
        outcome.elapsed = time.perf_counter() - started
        executed += 1
        on_statement(outcome)
    return executed


def run_sql(
    params: ConnectionParameters,
    read_line: ReadLine,
    on_statement: StatementListener,
    on_ready: Optional[Callable[[OperationResult], None]] = None,
) -> OperationResult:
    result = OperationResult(operation="sql", driver=params.driver)
    prepared = _prepare(result, params, include_database_name=True)
    if prepared is None:
        return result
    _adapter, session = prepared

    started = time.perf_counter()
    try:
        with session.open():
            if on_ready is not None:
                on_ready(result)
            sql_loop(session, read_line, on_statement, prompt=f"{params.driver}> ")
    except AdapterError as exc:
        result.error = exc
    return _finish(result, session, started)
