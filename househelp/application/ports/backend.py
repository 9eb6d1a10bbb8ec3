from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TableQuery:
    eq: dict[str, Any] = field(default_factory=dict)
    gt: dict[str, Any] = field(default_factory=dict)
    gte: dict[str, Any] = field(default_factory=dict)
    in_: dict[str, list[Any]] = field(default_factory=dict)
    order: tuple[tuple[str, bool], ...] = ()  # (column, ascending)
    limit: int | None = None


class BackendPort(ABC):
    @abstractmethod
    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        """Call a stored procedure. Returns the decoded JSON result."""
        raise NotImplementedError

    @abstractmethod
    async def select(self, table: str, query: TableQuery | None = None, columns: str = "*") -> list[dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    async def select_one(self, table: str, query: TableQuery, columns: str = "*") -> dict[str, Any]:
        """Return exactly one row. Raises RecordNotFoundError when nothing matches."""
        raise NotImplementedError

    @abstractmethod
    async def select_maybe_one(self, table: str, query: TableQuery, columns: str = "*") -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    async def count(self, table: str, query: TableQuery | None = None) -> int:
        raise NotImplementedError

    @abstractmethod
    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row. Returns the stored row including generated columns."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, table: str, values: dict[str, Any], query: TableQuery) -> list[dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, table: str, query: TableQuery) -> None:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
