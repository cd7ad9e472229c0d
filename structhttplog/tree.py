"""
structhttplog/tree.py

Deferred structured fields.

A FieldTree is an ordered list of (name, writer) pairs.  Writers are only
called when the tree is realized, which happens while structlog renders an
event that survived level filtering.  Nested trees are realized recursively.
"""
from __future__ import annotations

from collections.abc import Callable, MutableMapping
from typing import Any

FieldWriter = Callable[[], Any]


class FieldTree:
    __slots__ = ("_fields",)

    def __init__(self) -> None:
        self._fields: list[tuple[str, FieldWriter]] = []

    def add(self, name: str, value: Any) -> FieldTree:
        self._fields.append((name, lambda: value))
        return self

    def add_func(self, name: str, writer: FieldWriter) -> FieldTree:
        """Add a field whose value is produced by *writer* at render time."""
        self._fields.append((name, writer))
        return self

    def names(self) -> list[str]:
        return [name for name, _ in self._fields]

    def encode(self, enc: MutableMapping[str, Any]) -> None:
        for name, writer in self._fields:
            value = writer()
            if isinstance(value, FieldTree):
                value = value.realize()
            enc[name] = value

    def realize(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        self.encode(out)
        return out

    # structlog's JSONRenderer falls back to __structlog__ for unknown types.
    def __structlog__(self) -> dict[str, Any]:
        return self.realize()

    def __len__(self) -> int:
        return len(self._fields)

    # Renderers without a FieldTree-aware processor (ConsoleRenderer,
    # KeyValueRenderer) fall back to repr at render time.
    def __repr__(self) -> str:
        return repr(self.realize())


def render_field_trees(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor that realizes every top-level FieldTree value."""
    for key, value in event_dict.items():
        if isinstance(value, FieldTree):
            event_dict[key] = value.realize()
    return event_dict
