"""Callables with an explicit attribute fallback.

A `PromisifiedCallable` owns an attribute namespace (its `__dict__`) and may
name a *delegate*: attribute lookups that miss the own namespace are answered
by the delegate. Wrapped and cloned functions use this to keep attributes of
the original reachable without copying every one of them, and without relying
on a function's class for lookups.

Stored on a class, a `PromisifiedCallable` binds to instances exactly when the
callable it stands for (its *origin*) would: a wrapped function receives
`self`, while a wrapped builtin, `functools.partial` or class does not.
"""
from __future__ import annotations

import types
from typing import Any, Callable, Optional

__all__ = ["PromisifiedCallable", "link_fallback", "fallback_of"]

_INTERNAL = ("_target", "_delegate", "_origin")


class PromisifiedCallable:
    """Forward calls to `target`; fall back to `delegate` for missing attributes."""

    __slots__ = ("_target", "_delegate", "_origin", "__dict__", "__weakref__")

    def __init__(
        self,
        target: Callable[..., Any],
        delegate: Optional[Any] = None,
        origin: Optional[Any] = None,
    ) -> None:
        self._target = target
        self._delegate = delegate
        self._origin = target if origin is None else origin

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._target(*args, **kwargs)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        origin = self._origin
        get = getattr(type(origin), "__get__", None)
        if get is None or get(origin, instance, owner) is origin:
            return self
        return types.MethodType(self, instance)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup failed.
        if name in _INTERNAL:
            raise AttributeError(name)
        delegate = self._delegate
        if delegate is None:
            raise AttributeError(
                f"{type(self).__name__!s} object has no attribute {name!r}"
            )
        return getattr(delegate, name)

    def __repr__(self) -> str:
        name = self.__dict__.get("__qualname__") or self.__dict__.get("__name__") or "?"
        return f"<promisified callable {name}>"


def link_fallback(wrapped: Any, original: Any) -> None:
    """Make `original` the attribute fallback of `wrapped`.

    Linking a callable to itself is skipped; values that do not support a
    fallback are left as they are.
    """
    if wrapped is original or not isinstance(wrapped, PromisifiedCallable):
        return
    wrapped._delegate = original


def fallback_of(wrapped: Any) -> Optional[Any]:
    if isinstance(wrapped, PromisifiedCallable):
        return wrapped._delegate
    return None
