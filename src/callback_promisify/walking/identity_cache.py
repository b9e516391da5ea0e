"""Per-call bookkeeping of visited nodes.

Two disciplines share one object:

    originals -> wrapped   every callable (both modes) and every record in
                           non-mutating mode; a later encounter returns the
                           wrapped value, which terminates cycles and keeps
                           shared references shared in the output
    visited                records in mutating mode; a later encounter returns
                           the record itself

Entries are keyed by `id()` and keep the original alive for the duration of
the call, so an id can never be recycled by a different object mid-walk.
Nothing is removed; the whole cache is dropped when the call returns.
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

__all__ = ["IdentityCache", "MISSING"]


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class IdentityCache:
    def __init__(self) -> None:
        self._wrapped: Dict[int, Tuple[Any, Any]] = {}
        self._visited: Dict[int, Any] = {}

    def has(self, original: Any) -> Any:
        """Return the wrapped value registered for `original`, or `MISSING`."""
        entry = self._wrapped.get(id(original))
        if entry is None:
            return MISSING
        return entry[1]

    def put(self, original: Any, wrapped: Any) -> None:
        self._wrapped[id(original)] = (original, wrapped)

    def has_visited(self, obj: Any) -> bool:
        return id(obj) in self._visited

    def mark_visited(self, obj: Any) -> None:
        self._visited[id(obj)] = obj

    def __len__(self) -> int:
        return len(self._wrapped) + len(self._visited)
