from collections.abc import Iterable, Mapping, Sequence

from structhttplog.config import Options
from structhttplog.tree import FieldTree

REDACTED = "***"

# Always redacted, regardless of configuration.
SENSITIVE_HEADERS: frozenset[str] = frozenset({"authorization", "cookie", "set-cookie"})


def group_headers(raw: Iterable[tuple[bytes, bytes]]) -> dict[str, list[str]]:
    """Group raw ASGI header pairs into ``{lower-name: [values]}``.

    Names keep the order in which they were first seen.
    """
    grouped: dict[str, list[str]] = {}
    for name, value in raw:
        grouped.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
    return grouped


def header_fields(headers: Mapping[str, Sequence[str]], opts: Options) -> FieldTree:
    """Build the redacted ``header`` field group.

    Sensitive and skipped headers are replaced by the redaction marker and
    the scan carries on with the remaining headers.  Multi-valued headers
    are rendered as ``"[v1], [v2]"``.
    """
    out = FieldTree()
    for name, values in headers.items():
        key = name.lower()
        if key in SENSITIVE_HEADERS or key in opts.skip_headers:
            out.add(key, REDACTED)
            continue
        if len(values) == 0:
            continue
        if len(values) == 1:
            out.add(key, values[0])
        else:
            out.add(key, "[" + "], [".join(values) + "]")
    return out
