from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from hookchess.protocol.http.app import create_app
from hookchess.protocol.http.logging_middleware import resolve_request_id


def test_healthz_ok() -> None:
    client = TestClient(create_app())
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert "x-request-id" in r.headers


def test_incoming_request_id_is_echoed() -> None:
    client = TestClient(create_app())
    r = client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_malformed_request_id_is_replaced() -> None:
    client = TestClient(create_app())
    r = client.get("/healthz", headers={"x-request-id": "x" * 200})
    rid = r.headers["x-request-id"]
    assert rid != "x" * 200
    assert len(rid) == 36


def test_resolve_request_id() -> None:
    assert resolve_request_id("req-42.a_b") == "req-42.a_b"
    assert resolve_request_id("has space") != "has space"
    assert resolve_request_id(None)


def test_client_error_response_logs_warning(caplog) -> None:
    client = TestClient(create_app())
    with caplog.at_level(logging.INFO, logger="hookchess.protocol.http.logging_middleware"):
        client.get("/api/matches/missing/state")
    responses = [rec for rec in caplog.records if rec.getMessage() == "response"]
    assert responses
    assert responses[-1].levelno == logging.WARNING
    assert responses[-1].status_code == 404
