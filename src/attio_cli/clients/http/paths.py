"""URL path and query helpers shared by the resource clients."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode

__all__ = ["path_part", "with_query"]

# Characters url.PathEscape style escaping leaves intact inside a segment.
_PATH_SAFE = "$&+,:;=@"


def path_part(value: str) -> str:
    """Escape a single path segment after trimming surrounding whitespace."""

    return quote(value.strip(), safe=_PATH_SAFE)


def with_query(path: str, query: Mapping[str, Any] | None) -> str:
    """Append ``query`` to ``path`` when it has at least one value.

    ``None`` values are dropped and keys are sorted so the same parameters
    always produce the same URL.
    """

    if not query:
        return path
    pairs = [(key, value) for key, value in sorted(query.items()) if value is not None]
    if not pairs:
        return path
    return f"{path}?{urlencode(pairs)}"
