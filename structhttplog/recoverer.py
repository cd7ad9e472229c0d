"""
structhttplog/recoverer.py

Recovery middleware.

Place it inside RequestLoggingMiddleware.  An exception escaping the
application is handed to the request's log entry (message, ``panic`` and
``stacktrace`` fields) and answered with a plain 500, so the logging
middleware records the failure with the status the client actually got.
"""
from __future__ import annotations

import traceback

import structlog
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from structhttplog.entry import get_log_entry

logger = structlog.get_logger(__name__)


class Recoverer:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            stack = traceback.format_exc()
            entry = get_log_entry(scope)
            if entry is not None:
                entry.panic(exc, stack)
            else:
                logger.error("panic_recovered", panic=repr(exc), stacktrace=stack)

            # Too late to change the status; let the server drop the connection.
            if response_started:
                raise
            response = PlainTextResponse("Internal Server Error", status_code=500)
            await response(scope, receive, send)
