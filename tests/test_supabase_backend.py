import asyncio
import json

import httpx
import pytest

from househelp.application.exceptions import BackendContractError, BackendUpstreamError, RecordNotFoundError
from househelp.application.ports.backend import TableQuery
from househelp.infrastructure.backend.supabase_backend import SupabaseBackend, build_params


def _backend(handler):
    return SupabaseBackend(
        url="https://project.supabase.co/",
        api_key="anon-key",
        access_token="user-token",
        transport=httpx.MockTransport(handler),
    )


def test_build_params():
    query = TableQuery(
        eq={"user_id": "u1", "is_read": False, "deleted_at": None},
        gt={"created_at": "2024-01-01T00:00:00+00:00"},
        gte={"rating": 4.0},
        in_={"review_id": ["r1", "r2"]},
        order=(("is_default", False), ("created_at", True)),
        limit=5,
    )
    assert build_params(query, "id,title") == [
        ("select", "id,title"),
        ("user_id", "eq.u1"),
        ("is_read", "eq.false"),
        ("deleted_at", "is.null"),
        ("created_at", "gt.2024-01-01T00:00:00+00:00"),
        ("rating", "gte.4.0"),
        ("review_id", 'in.("r1","r2")'),
        ("order", "is_default.desc,created_at.asc"),
        ("limit", "5"),
    ]


def test_requires_url_and_key():
    with pytest.raises(ValueError):
        SupabaseBackend(url="https://project.supabase.co", api_key="", transport=httpx.MockTransport(lambda r: None))


def test_select_sends_auth_and_filters():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        seen["headers"] = request.headers
        return httpx.Response(200, json=[{"id": "n1"}])

    rows = asyncio.run(_backend(handler).select("notifications", TableQuery(eq={"user_id": "u1"})))

    assert rows == [{"id": "n1"}]
    assert seen["url"].path == "/rest/v1/notifications"
    assert seen["url"].params["user_id"] == "eq.u1"
    assert seen["url"].params["select"] == "*"
    assert seen["headers"]["apikey"] == "anon-key"
    assert seen["headers"]["authorization"] == "Bearer user-token"


def test_rpc_posts_params():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"is_valid": True}])

    result = asyncio.run(_backend(handler).rpc("validate_discount_code", {"code_param": "WELCOME10"}))

    assert result == [{"is_valid": True}]
    assert seen == {
        "method": "POST",
        "path": "/rest/v1/rpc/validate_discount_code",
        "body": {"code_param": "WELCOME10"},
    }


def test_rpc_returning_void():
    result = asyncio.run(_backend(lambda request: httpx.Response(204)).rpc("mark_invoice_paid", {}))
    assert result is None


def test_select_one_no_rows_raises_not_found():
    def handler(request):
        assert request.headers["accept"] == "application/vnd.pgrst.object+json"
        return httpx.Response(406, json={"code": "PGRST116", "message": "JSON object requested, multiple (or no) rows returned"})

    with pytest.raises(RecordNotFoundError) as excinfo:
        asyncio.run(_backend(handler).select_one("wallets", TableQuery(eq={"user_id": "u1"})))
    assert excinfo.value.code == "PGRST116"
    assert excinfo.value.status == 406


def test_other_errors_are_upstream_errors():
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(BackendUpstreamError) as excinfo:
        asyncio.run(_backend(handler).select("languages"))
    assert not isinstance(excinfo.value, RecordNotFoundError)
    assert excinfo.value.status == 500


def test_transport_errors_are_upstream_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendUpstreamError):
        asyncio.run(_backend(handler).rpc("get_wallet_balance", {}))


def test_count_reads_content_range():
    def handler(request):
        assert request.method == "HEAD"
        assert request.headers["prefer"] == "count=exact"
        return httpx.Response(200, headers={"Content-Range": "*/7"})

    assert asyncio.run(_backend(handler).count("notifications", TableQuery(eq={"is_read": False}))) == 7


def test_count_without_range_is_contract_error():
    with pytest.raises(BackendContractError):
        asyncio.run(_backend(lambda request: httpx.Response(200)).count("notifications"))


def test_insert_drops_nulls_and_returns_row():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        seen["prefer"] = request.headers["prefer"]
        return httpx.Response(201, json=[{"id": "r1", **seen["body"]}])

    row = asyncio.run(_backend(handler).insert("review_reports", {"review_id": "rv1", "reason": "spam", "notes": None}))

    assert seen["body"] == {"review_id": "rv1", "reason": "spam"}
    assert seen["prefer"] == "return=representation"
    assert row["id"] == "r1"


def test_update_and_delete_use_filters():
    calls = []

    def handler(request):
        calls.append((request.method, request.url.params["id"]))
        if request.method == "PATCH":
            return httpx.Response(200, json=[{"id": "pm1", "is_default": True}])
        return httpx.Response(204)

    backend = _backend(handler)
    updated = asyncio.run(backend.update("payment_methods", {"is_default": True}, TableQuery(eq={"id": "pm1"})))
    asyncio.run(backend.delete("payment_methods", TableQuery(eq={"id": "pm1"})))

    assert updated == [{"id": "pm1", "is_default": True}]
    assert calls == [("PATCH", "eq.pm1"), ("DELETE", "eq.pm1")]


def test_invalid_json_is_contract_error():
    with pytest.raises(BackendContractError):
        asyncio.run(_backend(lambda request: httpx.Response(200, text="<html>")).select("languages"))
