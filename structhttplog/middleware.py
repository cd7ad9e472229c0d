"""
structhttplog/middleware.py

ASGI request logging middleware.

RequestLoggingMiddleware
    Emits one structlog record per HTTP request.  The request-side fields
    are bound under ``httpRequest`` when the request arrives; the response
    side (status, bytes, elapsed, and outside concise mode the error body
    and headers) is attached under ``httpResponse`` when the application
    returns.  The record level follows the final status code.

Implemented as pure ASGI middleware rather than BaseHTTPMiddleware so the
response body streams through untouched while its first bytes are mirrored
into a bounded side buffer.
"""
from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from typing import Any

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from structhttplog.capture import DEFAULT_LIMIT, LimitBuffer
from structhttplog.config import Option, build_options
from structhttplog.entry import STATE_KEY, RequestLogEntry
from structhttplog.fields import REQUEST_GROUP, request_fields
from structhttplog.headers import group_headers


class ResponseRecorder:
    """Wraps an ASGI ``send`` callable and records what goes through it.

    Status stays 0 until ``http.response.start`` is sent.  Body chunks are
    forwarded unchanged and also written to every teed buffer.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self._tees: list[LimitBuffer] = []
        self.status = 0
        self.bytes_written = 0
        self.headers: dict[str, list[str]] = {}

    def tee(self, buf: LimitBuffer) -> None:
        self._tees.append(buf)

    @property
    def started(self) -> bool:
        return self.status != 0

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = group_headers(message.get("headers", []))
        elif message["type"] == "http.response.body":
            body = message.get("body", b"")
            self.bytes_written += len(body)
            for buf in self._tees:
                buf.write(body)
        await self._send(message)


class RequestLoggingMiddleware:
    """Log each HTTP request as a single structured record."""

    def __init__(
        self,
        app: ASGIApp,
        logger: Any,
        options: Iterable[Option] = (),
        capture_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.app = app
        self.logger = logger
        self.opts = build_options(options)
        self.capture_limit = capture_limit

    def new_entry(self, scope: Scope) -> RequestLogEntry:
        fields = request_fields(scope, self.opts)
        return RequestLogEntry(
            logger=self.logger.bind(**{REQUEST_GROUP: fields}),
            msg=f"{scope.get('method', '')} {scope.get('path', '')}",
            opts=self.opts,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        entry = self.new_entry(scope)
        scope.setdefault("state", {})[STATE_KEY] = entry

        recorder = ResponseRecorder(send)
        buf = LimitBuffer(self.capture_limit)
        recorder.tee(buf)

        start = time.perf_counter()
        try:
            await self.app(scope, receive, recorder)
        finally:
            body = buf.read() if recorder.status >= 400 else None
            entry.write(
                recorder.status,
                recorder.bytes_written,
                recorder.headers,
                time.perf_counter() - start,
                body,
            )


def new_middleware(logger: Any, *options: Option) -> Callable[[ASGIApp], ASGIApp]:
    """Return a function wrapping an ASGI app with request logging.

    Options are resolved when an app is wrapped and shared by every
    request that app serves.
    """
    opts = list(options)

    def wrap(app: ASGIApp) -> ASGIApp:
        return RequestLoggingMiddleware(app, logger, opts)

    return wrap
