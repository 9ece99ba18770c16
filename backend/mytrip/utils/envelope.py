"""Provider envelope normalization.

Every KorService2 response wraps its records as
``{"response": {"body": {"items": {"item": ...}, "totalCount": n}}}``.
A one-record result arrives as a bare object instead of a one-element list,
and an empty result arrives with ``items`` set to ``""`` or omitted.
"""

from __future__ import annotations

from typing import Any

from mytrip.errors import MissingDataError

Record = dict[str, Any]


def envelope_body(data: Any) -> dict[str, Any]:
    """Return the ``body`` object, or an empty dict when the shape is off.

    Accepts both the full ``{"response": {...}}`` wrapper and a bare
    ``{"body": {...}}``.
    """
    if not isinstance(data, dict):
        return {}
    root = data.get("response", data)
    if not isinstance(root, dict):
        return {}
    body = root.get("body")
    return body if isinstance(body, dict) else {}


def parse_envelope(data: Any) -> Record | list[Record]:
    """Extract ``body.items.item``; raise MissingDataError when absent."""
    items = envelope_body(data).get("items")
    item = items.get("item") if isinstance(items, dict) else None
    if item is None:
        raise MissingDataError("Invalid API response: items.item is missing")
    return item  # type: ignore[no-any-return]


def to_array(value: Record | list[Record]) -> list[Record]:
    """Wrap a bare record in a list; lists pass through unchanged."""
    return value if isinstance(value, list) else [value]
