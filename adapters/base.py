from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

from config.connection import ConnectionParameters

if TYPE_CHECKING:
    from executor.session import Session


class AdapterError(RuntimeError):
    pass


class UnsupportedDriverError(AdapterError):
    def __init__(self, driver: str):
        self.driver = driver
        super().__init__(f"driver: {driver} is not available")


class DescriptorBuildError(AdapterError):
    pass


class ConnectionOpenError(AdapterError):
    pass


class StatementError(AdapterError):
    def __init__(self, message: str, statement: str = ""):
        self.statement = statement
        super().__init__(message)


class FileRemovalError(AdapterError):
    pass


class DatabaseAdapter(ABC):
    engine: str = "unknown"

    @abstractmethod
    def build_descriptor(self, params: ConnectionParameters, include_database_name: bool) -> str:
        raise NotImplementedError

    @abstractmethod
    def connect(self, descriptor: str, create: bool = False) -> Any:
        raise NotImplementedError

    @abstractmethod
    def create_statements(self, params: ConnectionParameters) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def describe_statement(self, params: ConnectionParameters) -> str:
        raise NotImplementedError

    def drop_statements(self, params: ConnectionParameters) -> List[str]:
        return [f"DROP DATABASE {params.dbname}"]

    def create_database(self, session: "Session", params: ConnectionParameters) -> None:
        for statement in self.create_statements(params):
            session.execute(statement)

    def open_for_drop(self, session: "Session") -> None:
        session.open()

    def drop_database(self, session: "Session", params: ConnectionParameters) -> None:
        for statement in self.drop_statements(params):
            session.execute(statement)
