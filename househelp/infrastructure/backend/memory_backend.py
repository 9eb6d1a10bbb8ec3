from __future__ import annotations

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from househelp.application.exceptions import BackendUpstreamError, RecordNotFoundError
from househelp.application.ports.backend import BackendPort, TableQuery

Procedure = Callable[["MemoryBackend", dict[str, Any]], Any]

NO_ROWS_CODE = "PGRST116"
UNKNOWN_FUNCTION_CODE = "PGRST202"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(row: dict[str, Any], query: TableQuery | None) -> bool:
    if query is None:
        return True
    for column, value in query.eq.items():
        if row.get(column) != value:
            return False
    for column, value in query.gt.items():
        current = row.get(column)
        if current is None or not current > value:
            return False
    for column, value in query.gte.items():
        current = row.get(column)
        if current is None or not current >= value:
            return False
    for column, values in query.in_.items():
        if row.get(column) not in values:
            return False
    return True


def _sorted(rows: list[dict[str, Any]], query: TableQuery | None) -> list[dict[str, Any]]:
    if query is None:
        return rows
    # stable sorts applied from the least significant key
    for column, ascending in reversed(query.order):
        present = [r for r in rows if r.get(column) is not None]
        missing = [r for r in rows if r.get(column) is None]
        present.sort(key=lambda r: r[column], reverse=not ascending)
        rows = present + missing
    if query.limit is not None:
        rows = rows[: query.limit]
    return rows


class MemoryBackend(BackendPort):
    """
    In-process stand-in for the hosted backend, used in dev/local and tests.
    Tables are lists of dict rows; stored procedures are plain callables
    registered by name. Column lists and embedded selects are ignored.
    """

    def __init__(
        self,
        tables: dict[str, list[dict[str, Any]]] | None = None,
        procedures: dict[str, Procedure] | None = None,
    ) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self._procedures: dict[str, Procedure] = dict(procedures or {})
        self._failing: set[str] = set()
        self.rpc_calls: list[tuple[str, dict[str, Any]]] = []
        self._logger = logging.getLogger(__name__)

    def register(self, name: str, procedure: Procedure) -> None:
        self._procedures[name] = procedure

    def fail(self, target: str) -> None:
        """Make every call on a table or procedure name raise an upstream error."""
        self._failing.add(target)

    def recover(self, target: str) -> None:
        self._failing.discard(target)

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self._tables.setdefault(table, [])

    def _check(self, target: str) -> None:
        if target in self._failing:
            raise BackendUpstreamError(f"{target} unavailable", status=503)

    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        self._check(function)
        self.rpc_calls.append((function, dict(params)))
        procedure = self._procedures.get(function)
        if procedure is None:
            raise BackendUpstreamError(
                f"Could not find the function {function}", code=UNKNOWN_FUNCTION_CODE, status=404
            )
        return copy.deepcopy(procedure(self, params))

    async def select(self, table: str, query: TableQuery | None = None, columns: str = "*") -> list[dict[str, Any]]:
        self._check(table)
        matched = [row for row in self.rows(table) if _matches(row, query)]
        return copy.deepcopy(_sorted(matched, query))

    async def select_one(self, table: str, query: TableQuery, columns: str = "*") -> dict[str, Any]:
        rows = await self.select(table, query, columns)
        if len(rows) != 1:
            raise RecordNotFoundError(
                f"JSON object requested, multiple (or no) rows returned from {table}",
                code=NO_ROWS_CODE,
                status=406,
            )
        return rows[0]

    async def select_maybe_one(self, table: str, query: TableQuery, columns: str = "*") -> dict[str, Any] | None:
        rows = await self.select(table, query, columns)
        if len(rows) > 1:
            raise BackendUpstreamError(f"Multiple rows returned from {table}", status=406)
        return rows[0] if rows else None

    async def count(self, table: str, query: TableQuery | None = None) -> int:
        self._check(table)
        return sum(1 for row in self.rows(table) if _matches(row, query))

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        self._check(table)
        stored = {key: value for key, value in row.items() if value is not None}
        stored.setdefault("id", str(uuid.uuid4()))
        now = _now_iso()
        stored.setdefault("created_at", now)
        stored.setdefault("updated_at", now)
        self.rows(table).append(stored)
        return copy.deepcopy(stored)

    async def update(self, table: str, values: dict[str, Any], query: TableQuery) -> list[dict[str, Any]]:
        self._check(table)
        updated = []
        for row in self.rows(table):
            if _matches(row, query):
                row.update(copy.deepcopy(values))
                updated.append(copy.deepcopy(row))
        return updated

    async def delete(self, table: str, query: TableQuery) -> None:
        self._check(table)
        self._tables[table] = [row for row in self.rows(table) if not _matches(row, query)]
