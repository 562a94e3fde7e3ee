import asyncio

import httpx
import pytest
from tenacity import wait_none

from razorinv.api import transport as tr
from razorinv.api.transport import HttpTransport
from razorinv.errors import TransportError


class DummyClient:
    def __init__(self, responses, calls):
        self.responses = responses
        self.calls = calls

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        pass

    def _next(self, method, url, **kw):
        self.calls.append((method, url, kw))
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r

    async def get(self, url, params, headers, auth):
        return self._next("GET", url, params=params, headers=headers, auth=auth)

    async def post(self, url, json, headers, auth):
        return self._next("POST", url, json=json, headers=headers, auth=auth)

    async def patch(self, url, json, headers, auth):
        return self._next("PATCH", url, json=json, headers=headers, auth=auth)


@pytest.fixture
def dummy(monkeypatch):
    state = {"responses": [], "calls": []}
    monkeypatch.setattr(
        tr.httpx, "AsyncClient", lambda *a, **kw: DummyClient(state["responses"], state["calls"])
    )
    monkeypatch.setattr(tr, "wait_exponential_jitter", lambda *a, **kw: wait_none())
    return state


def _transport(**kw):
    kw.setdefault("base_url", "https://api.example.test/v1/")
    return HttpTransport("rzp_key", "secret", **kw)


def _resp(status, method="GET", url="https://api.example.test/v1/invoices", **kw):
    return httpx.Response(status, request=httpx.Request(method, url), **kw)


def test_get_sends_params_without_none(dummy):
    dummy["responses"].append(_resp(200, json={"entity": "collection", "count": 0, "items": []}))

    body = asyncio.run(_transport().get("/invoices", {"count": 10, "skip": 0, "from": None}))

    assert body["entity"] == "collection"
    method, url, kw = dummy["calls"][0]
    assert (method, url) == ("GET", "https://api.example.test/v1/invoices")
    assert kw["params"] == {"count": 10, "skip": 0}
    assert kw["auth"] == ("rzp_key", "secret")
    assert kw["headers"]["Accept"] == "application/json"


def test_post_and_patch_send_json(dummy):
    dummy["responses"].extend([
        _resp(200, "POST", json={"success": True}),
        _resp(200, "PATCH", json={"id": "inv_1"}),
    ])
    t = _transport()

    assert asyncio.run(t.post("/invoices/inv_1/notify_by/sms")) == {"success": True}
    assert asyncio.run(t.patch("/invoices/inv_1", {"description": "x"})) == {"id": "inv_1"}

    assert dummy["calls"][0][0] == "POST"
    assert dummy["calls"][0][2]["json"] is None
    assert dummy["calls"][1][2]["json"] == {"description": "x"}


def test_http_error_raises_transport_error(dummy):
    dummy["responses"].append(_resp(400, "POST", json={"error": {"code": "BAD_REQUEST_ERROR"}}))

    with pytest.raises(TransportError) as exc:
        asyncio.run(_transport().post("/invoices", {"customer_id": "c"}))

    assert exc.value.status_code == 400
    assert exc.value.method == "POST"
    assert exc.value.body == {"error": {"code": "BAD_REQUEST_ERROR"}}
    assert len(dummy["calls"]) == 1


def test_non_json_error_body_kept_as_text(dummy):
    dummy["responses"].append(_resp(502, text="Bad Gateway"))
    with pytest.raises(TransportError) as exc:
        asyncio.run(_transport().get("/invoices/inv_1"))
    assert exc.value.body == "Bad Gateway"


def test_invalid_json_success_body(dummy):
    dummy["responses"].append(_resp(200, text="<html>"))
    with pytest.raises(TransportError) as exc:
        asyncio.run(_transport().get("/invoices/inv_1"))
    assert exc.value.status_code == 200


def test_connect_errors_are_retried(dummy):
    req = httpx.Request("GET", "https://api.example.test/v1/invoices/inv_1")
    dummy["responses"].extend([httpx.ConnectError("refused", request=req), _resp(200, json={"id": "inv_1"})])

    body = asyncio.run(_transport(connect_attempts=3).get("/invoices/inv_1"))

    assert body == {"id": "inv_1"}
    assert len(dummy["calls"]) == 2


def test_connect_retries_give_up(dummy):
    req = httpx.Request("POST", "https://api.example.test/v1/invoices")
    dummy["responses"].extend([httpx.ConnectError("refused", request=req) for _ in range(2)])

    with pytest.raises(TransportError) as exc:
        asyncio.run(_transport(connect_attempts=2).post("/invoices", {}))

    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    assert len(dummy["calls"]) == 2


def test_read_timeouts_are_not_retried(dummy):
    req = httpx.Request("POST", "https://api.example.test/v1/invoices")
    dummy["responses"].extend([httpx.ReadTimeout("slow", request=req), _resp(200, "POST", json={})])

    with pytest.raises(TransportError):
        asyncio.run(_transport(connect_attempts=3).post("/invoices", {}))
    assert len(dummy["calls"]) == 1


def test_no_auth_without_key():
    t = HttpTransport("", None, base_url="https://api.example.test/v1")
    assert t.auth is None
