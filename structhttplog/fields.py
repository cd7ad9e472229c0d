"""
structhttplog/fields.py

Request-side and response-side field groups.

Both builders only describe fields; nothing is formatted until the record
is rendered.  The nested ``header`` group in particular is redacted lazily,
so a record dropped by level filtering never walks the headers.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence

from starlette.types import Scope

from structhttplog.config import Options
from structhttplog.headers import group_headers, header_fields
from structhttplog.tree import FieldTree

REQUEST_GROUP = "httpRequest"
RESPONSE_GROUP = "httpResponse"

_SECURE_SCHEMES = frozenset({"https", "wss"})


def request_scheme(scope: Scope) -> str:
    return "https" if scope.get("scheme") in _SECURE_SCHEMES else "http"


def request_host(scope: Scope, headers: Mapping[str, Sequence[str]]) -> str:
    """Host as sent by the client, falling back to the server address."""
    host = headers.get("host")
    if host:
        return host[0]
    server = scope.get("server")
    if not server:
        return ""
    name, port = server
    return name if port is None else f"{name}:{port}"


def request_uri(scope: Scope) -> str:
    """Raw request target: undecoded path plus query string."""
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope.get("path", "")
    query = scope.get("query_string", b"")
    if query:
        path = f"{path}?{query.decode('latin-1')}"
    return path


def remote_addr(scope: Scope) -> str:
    client = scope.get("client")
    if not client:
        return ""
    host, port = client
    if ":" in host:
        host = f"[{host}]"
    return f"{host}:{port}"


def request_proto(scope: Scope) -> str:
    """Protocol string as ``HTTP/major.minor``."""
    version = scope.get("http_version", "1.1")
    if "." not in version:
        version = f"{version}.0"
    return f"HTTP/{version}"


def request_id(scope: Scope) -> str | None:
    """Correlation ID propagated by an upstream middleware, if any."""
    state = scope.get("state") or {}
    value = state.get("request_id")
    return str(value) if value else None


def request_fields(scope: Scope, opts: Options) -> FieldTree:
    """Describe the inbound request for the ``httpRequest`` group."""
    headers = group_headers(scope.get("headers", []))
    scheme = request_scheme(scope)
    request_url = f"{scheme}://{request_host(scope, headers)}{request_uri(scope)}"

    fields = (
        FieldTree()
        .add("requestURL", request_url)
        .add("requestMethod", scope.get("method", ""))
        .add("requestPath", scope.get("path", ""))
        .add("remoteIP", remote_addr(scope))
        .add("proto", request_proto(scope))
    )
    req_id = request_id(scope)
    if req_id:
        fields.add("requestID", req_id)

    if opts.concise:
        return fields

    fields.add("scheme", scheme)
    if headers:
        fields.add_func("header", lambda: header_fields(headers, opts))
    return fields


def response_fields(
    status: int,
    bytes_written: int,
    headers: Mapping[str, Sequence[str]],
    elapsed: float,
    body: bytes | None,
    opts: Options,
) -> FieldTree:
    """Describe the outgoing response for the ``httpResponse`` group.

    Args:
        status: Final status code (0 when no response was started).
        bytes_written: Body bytes sent to the client.
        headers: Grouped response headers.
        elapsed: Seconds since the request entered the middleware.
        body: Captured body prefix; only logged for error statuses.
        opts: Middleware options.
    """
    fields = (
        FieldTree()
        .add("status", status)
        .add("bytes", bytes_written)
        .add("elapsed", elapsed)
    )
    if opts.concise:
        return fields

    # Error bodies are kept so the message sent back to the client can be inspected.
    if status >= 400:
        fields.add_func("body", lambda: _decode_body(body))
    if headers:
        fields.add_func("header", lambda: header_fields(headers, opts))
    return fields


def _decode_body(body: bytes | None) -> str:
    return (body or b"").decode("utf-8", errors="replace")
