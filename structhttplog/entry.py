"""
structhttplog/entry.py

Per-request log entry.

An entry is created when a request enters the middleware with the
request-side fields already bound into its logger.  It is finalized
exactly once by ``write()`` after the application returns, by any path.
A recovery layer may call ``panic()`` first; the panic details then ride
along in the same single record.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from starlette.requests import HTTPConnection
from starlette.types import Scope

from structhttplog.config import Options
from structhttplog.fields import RESPONSE_GROUP, response_fields
from structhttplog.status import log_func, status_label

# Key under scope["state"] (request.state.log_entry in Starlette).
STATE_KEY = "log_entry"


class RequestLogEntry:
    def __init__(self, logger: Any, msg: str, opts: Options) -> None:
        self.logger = logger
        self.msg = msg
        self.opts = opts
        self.panicked = False

    def write(
        self,
        status: int,
        bytes_written: int,
        headers: Mapping[str, Sequence[str]],
        elapsed: float,
        body: bytes | None = None,
    ) -> None:
        """Emit the request's single log record."""
        label = f"{status} {status_label(status)}"
        msg = f"{self.msg} - {label}" if self.msg else label

        fields = response_fields(status, bytes_written, headers, elapsed, body, self.opts)
        log_func(self.logger, status)(msg, **{RESPONSE_GROUP: fields})

    def panic(self, value: Any, stack: str) -> None:
        """Record an unhandled error before the entry is written.

        Only the first call counts; a recovery layer further out cannot
        replace the innermost error it wraps.
        """
        if self.panicked:
            return
        self.logger = self.logger.bind(stacktrace=stack, panic=repr(value))
        self.msg = str(value)
        self.panicked = True


def get_log_entry(conn: Scope | HTTPConnection) -> RequestLogEntry | None:
    """Return the entry attached to a request, or None outside the middleware."""
    scope = conn.scope if isinstance(conn, HTTPConnection) else conn
    state = scope.get("state") or {}
    return state.get(STATE_KEY)
