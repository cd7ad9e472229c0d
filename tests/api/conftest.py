"""
tests/api/conftest.py

Shared fixtures for ASGI-level middleware tests.

The `make_client` fixture builds a small FastAPI app wrapped with
RequestLoggingMiddleware (outermost) and Recoverer (inside it), logging to
the capturing `logger` fixture from tests/conftest.py.  An optional
request-ID middleware sits outside both, standing in for whatever
correlation-ID layer a real deployment uses.

Routes
------
  GET  /            → 200 "root."
  GET  /widgets     → 404 "not found"
  GET  /big-error   → 500 with a 2 KiB body
  GET  /panic       → raises RuntimeError("boom")
  GET  /entry       → 200, echoes whether the log entry is reachable
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient
from starlette.types import ASGIApp, Receive, Scope, Send

from structhttplog import Recoverer, RequestLoggingMiddleware, get_log_entry
from structhttplog.config import Option

REQUEST_ID = "req-0001"


class FixedRequestIDMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            scope.setdefault("state", {})["request_id"] = REQUEST_ID
        await self.app(scope, receive, send)


def build_app(logger: Any, options: list[Option], with_request_id: bool = False) -> FastAPI:
    app = FastAPI()

    @app.get("/")
    async def root() -> PlainTextResponse:
        return PlainTextResponse("root.")

    @app.get("/widgets")
    async def widgets() -> PlainTextResponse:
        return PlainTextResponse("not found", status_code=404)

    @app.get("/big-error")
    async def big_error() -> PlainTextResponse:
        return PlainTextResponse("e" * 2048, status_code=500)

    @app.get("/panic")
    async def panic() -> None:
        raise RuntimeError("boom")

    @app.get("/entry")
    async def entry(request: Request) -> dict[str, bool]:
        return {"has_entry": get_log_entry(request) is not None}

    app.add_middleware(Recoverer)
    app.add_middleware(RequestLoggingMiddleware, logger=logger, options=options)
    if with_request_id:
        app.add_middleware(FixedRequestIDMiddleware)
    return app


@pytest.fixture()
def make_client(logger: Any) -> Callable[..., TestClient]:
    """Return a factory: make_client(*options, with_request_id=False)."""

    def factory(*options: Option, with_request_id: bool = False) -> TestClient:
        app = build_app(logger, list(options), with_request_id=with_request_id)
        return TestClient(app, raise_server_exceptions=False)

    return factory
