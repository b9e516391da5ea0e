"""Shallow cloning of callables for non-mutating traversal.

A clone is a new callable identity that behaves like the original while being
independent for attribute assignment:

* classes are cloned as a subclass carrying the same name, so instances built
  from the clone still pass `isinstance` checks against the original and every
  method the clone does not override is inherited;
* any other callable is cloned as a forwarding `PromisifiedCallable` with the
  original's metadata and own attributes copied and the original as fallback.

Clones are memoized per original: cloning the same original twice, or cloning
a clone, returns the same object. Callables that cannot be weakly referenced
(some builtins) are cloned afresh each time.
"""
from __future__ import annotations

import functools
import inspect
import logging
import types
import weakref
from typing import Any, Callable, Optional

from .delegation import PromisifiedCallable

logger = logging.getLogger(__name__)

__all__ = ["clone"]

_clones: "weakref.WeakKeyDictionary[Any, weakref.ref]" = weakref.WeakKeyDictionary()
_produced: "weakref.WeakSet[Any]" = weakref.WeakSet()


def _memoized(fn: Any) -> Optional[Any]:
    try:
        if fn in _produced:
            return fn
        ref = _clones.get(fn)
    except TypeError:
        return None
    return ref() if ref is not None else None


def _remember(fn: Any, cloned: Any) -> None:
    # Values are weak too: a clone holds its original, so a strong value would
    # keep both alive forever.
    try:
        _clones[fn] = weakref.ref(cloned)
        _produced.add(cloned)
    except TypeError:
        logger.debug("Cannot memoize clone of %r (not weak-referenceable)", fn)


def _forwarding_clone(fn: Callable[..., Any]) -> PromisifiedCallable:
    cloned = PromisifiedCallable(fn, delegate=fn)
    updated = () if inspect.isclass(fn) else functools.WRAPPER_UPDATES
    functools.update_wrapper(cloned, fn, updated=updated)
    return cloned


def _subclass_clone(cls: type) -> Any:
    def fill(namespace: dict) -> None:
        namespace["__module__"] = cls.__module__
        namespace["__qualname__"] = cls.__qualname__
        namespace["__doc__"] = cls.__doc__

    try:
        # new_class runs the metaclass __prepare__ (EnumType needs its own dict).
        return types.new_class(cls.__name__, (cls,), exec_body=fill)
    except Exception:
        # Final classes (bool, enums with members, ...) and metaclasses or
        # __init_subclass__ hooks that reject the subclass.
        logger.debug(
            "Class %r cannot be subclassed; cloning as forwarding callable", cls, exc_info=True
        )
        return _forwarding_clone(cls)


def clone(fn: Callable[..., Any], *, memoize: bool = True) -> Any:
    """Return the memoized clone of `fn`, creating it on first use.

    With `memoize=False` a fresh clone is built and not remembered; the walker
    uses this so that each top-level call owns the clones it installs members on.
    """
    if memoize:
        cloned = _memoized(fn)
        if cloned is not None:
            return cloned
    if inspect.isclass(fn):
        cloned = _subclass_clone(fn)
    else:
        cloned = _forwarding_clone(fn)
    if memoize:
        _remember(fn, cloned)
    return cloned
