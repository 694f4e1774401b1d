# tests/test_core/test_request_id.py

import uuid

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from seriesgate.middleware.request_id import RequestIDMiddleware, get_request_id


def _mk_client():
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/echo")
    async def echo(request: Request):
        return {"request_id": get_request_id(request)}

    return TestClient(app)


def test_generates_uuid4_when_missing():
    resp = _mk_client().get("/echo")
    rid = resp.headers["X-Request-ID"]
    assert uuid.UUID(rid).version == 4
    assert resp.json()["request_id"] == rid


def test_trusts_client_uuid4():
    rid = str(uuid.uuid4())
    resp = _mk_client().get("/echo", headers={"X-Request-ID": rid})
    assert resp.headers["X-Request-ID"] == rid
    assert resp.json()["request_id"] == rid


def test_accepts_correlation_id_alias():
    rid = str(uuid.uuid4())
    resp = _mk_client().get("/echo", headers={"X-Correlation-ID": rid})
    assert resp.headers["X-Request-ID"] == rid


def test_replaces_non_uuid_client_ids():
    resp = _mk_client().get("/echo", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] != "req-123"
    assert uuid.UUID(resp.headers["X-Request-ID"]).version == 4


def test_get_request_id_without_middleware():
    class _Bare:
        pass

    assert get_request_id(_Bare()) == ""
