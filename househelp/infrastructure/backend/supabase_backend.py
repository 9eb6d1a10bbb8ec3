from __future__ import annotations

import logging
from typing import Any

import httpx

from househelp.application.exceptions import (
    BackendContractError,
    BackendUpstreamError,
    RecordNotFoundError,
)
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.core.config import settings

NO_ROWS_CODE = "PGRST116"
SINGLE_OBJECT = "application/vnd.pgrst.object+json"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quote(value: Any) -> str:
    text = _format_value(value).replace('"', '\\"')
    return f'"{text}"'


def build_params(query: TableQuery | None, columns: str | None = None) -> list[tuple[str, str]]:
    """Translate a TableQuery into PostgREST query string parameters."""
    params: list[tuple[str, str]] = []
    if columns:
        params.append(("select", columns))
    if query is None:
        return params
    for column, value in query.eq.items():
        params.append((column, "is.null" if value is None else f"eq.{_format_value(value)}"))
    for column, value in query.gt.items():
        params.append((column, f"gt.{_format_value(value)}"))
    for column, value in query.gte.items():
        params.append((column, f"gte.{_format_value(value)}"))
    for column, values in query.in_.items():
        params.append((column, "in.(" + ",".join(_quote(v) for v in values) + ")"))
    if query.order:
        params.append(
            ("order", ",".join(f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in query.order))
        )
    if query.limit is not None:
        params.append(("limit", str(query.limit)))
    return params


class SupabaseBackend(BackendPort):
    """Talks to the hosted Postgres through its PostgREST endpoint."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base_url = url or settings.SUPABASE_URL
        self._api_key = api_key or settings.SUPABASE_ANON_KEY
        if not base_url:
            raise ValueError("SUPABASE_URL is required for the Supabase backend")
        if not self._api_key:
            raise ValueError("SUPABASE_ANON_KEY is required for the Supabase backend")

        token = access_token or settings.SUPABASE_ACCESS_TOKEN or self._api_key
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": self._api_key,
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout or settings.BACKEND_TIMEOUT_SECONDS,
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            self._logger.error("Backend request failed", extra={"table": path, "error": str(e)})
            raise BackendUpstreamError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            code = None
            message = resp.text
            try:
                body = resp.json()
                code = body.get("code")
                message = body.get("message") or message
            except (ValueError, AttributeError):
                pass

            self._logger.error(
                "Backend returned an error",
                extra={"table": path, "status": resp.status_code, "error": message},
            )
            error_cls = RecordNotFoundError if code == NO_ROWS_CODE else BackendUpstreamError
            raise error_cls(message, code=code, status=resp.status_code)
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise BackendContractError(f"Invalid JSON from backend: {e}") from e

    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        resp = await self._request("POST", f"/rpc/{function}", json=params)
        return self._decode(resp)

    async def select(self, table: str, query: TableQuery | None = None, columns: str = "*") -> list[dict[str, Any]]:
        resp = await self._request("GET", f"/{table}", params=build_params(query, columns))
        data = self._decode(resp)
        if data is None:
            return []
        if not isinstance(data, list):
            raise BackendContractError(f"Expected rows from {table}")
        return data

    async def select_one(self, table: str, query: TableQuery, columns: str = "*") -> dict[str, Any]:
        resp = await self._request(
            "GET", f"/{table}", params=build_params(query, columns), headers={"Accept": SINGLE_OBJECT}
        )
        data = self._decode(resp)
        if not isinstance(data, dict):
            raise BackendContractError(f"Expected a single row from {table}")
        return data

    async def select_maybe_one(self, table: str, query: TableQuery, columns: str = "*") -> dict[str, Any] | None:
        rows = await self.select(table, query, columns)
        if len(rows) > 1:
            raise BackendContractError(f"Expected at most one row from {table}, got {len(rows)}")
        return rows[0] if rows else None

    async def count(self, table: str, query: TableQuery | None = None) -> int:
        resp = await self._request(
            "HEAD", f"/{table}", params=build_params(query, "*"), headers={"Prefer": "count=exact"}
        )
        content_range = resp.headers.get("content-range", "")
        total = content_range.rsplit("/", 1)[-1]
        try:
            return int(total)
        except ValueError as e:
            raise BackendContractError(f"Missing row count in Content-Range: {content_range!r}") from e

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        payload = {key: value for key, value in row.items() if value is not None}
        resp = await self._request(
            "POST", f"/{table}", json=payload, headers={"Prefer": "return=representation"}
        )
        data = self._decode(resp)
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        raise BackendContractError(f"Insert into {table} returned no row")

    async def update(self, table: str, values: dict[str, Any], query: TableQuery) -> list[dict[str, Any]]:
        resp = await self._request(
            "PATCH",
            f"/{table}",
            params=build_params(query),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        data = self._decode(resp)
        return data if isinstance(data, list) else []

    async def delete(self, table: str, query: TableQuery) -> None:
        await self._request("DELETE", f"/{table}", params=build_params(query))
