"""Recursive graph walker.

`walk` visits every node reachable from a value exactly once per top-level
call and returns the processed value:

    PRIMITIVE  returned unchanged
    CALLABLE   classified; Asynchronous -> denodeified, Plain -> cloned when
               not mutating, otherwise kept. Registered in the cache *before*
               its own properties and prototype are walked, so a callable that
               refers to itself resolves to its already-registered wrapper.
    RECORD     shallow-copied (non-mutating) or marked visited (mutating)
               before its members are walked; nested records are always
               descended into, member callables only when no predicate is
               supplied or the predicate accepts them.

Invariants:
    - A second encounter of the same original (by identity) returns the value
      produced the first time; shared references stay shared and cycles end.
    - Non-mutating walks never assign to anything reachable from the input.
      Clones are built fresh per top-level call, so a later call never
      changes a value an earlier call returned.
    - The fallback of a denodeified callable is never the callable itself.
"""
from __future__ import annotations

import copy
import inspect
import logging
from collections.abc import MutableMapping
from types import ModuleType
from typing import Any, Optional

from ..cloning import clone
from ..delegation import PromisifiedCallable, link_fallback
from ..deferred import denodeify
from ..models.report import ClassificationRecord
from .detection import Classification, classify, predicate_verdict
from .identity_cache import MISSING
from .node_kind import NodeKind, child_label, node_kind, own_properties
from .prototype import extract_prototype, install_prototype
from .walk_context import WalkContext

logger = logging.getLogger(__name__)

__all__ = ["walk"]


def walk(
    value: Any,
    ctx: WalkContext,
    key_name: Optional[str] = None,
    parent_label: Optional[str] = None,
    *,
    verdict: Optional[bool] = None,
) -> Any:
    """Process `value` and return its promisified counterpart.

    Args:
        value: Node to process.
        ctx: Per-call state (cache, predicate, mode, callback names).
        key_name: Property name `value` was reached through, if any.
        parent_label: Dotted path of the container holding `value`.
        verdict: Predicate result already computed by the container, so the
            predicate runs once per member.
    """
    kind = node_kind(value)
    if kind is NodeKind.PRIMITIVE:
        return value

    if ctx.no_mutate or kind is NodeKind.CALLABLE:
        hit = ctx.cache.has(value)
        if hit is not MISSING:
            return hit
    elif ctx.cache.has_visited(value):
        return value

    if kind is NodeKind.CALLABLE:
        return _walk_callable(value, ctx, key_name, parent_label, verdict)
    label = child_label(parent_label, key_name) if key_name is not None else parent_label
    return _walk_record(value, ctx, label)


def _walk_callable(
    fn: Any,
    ctx: WalkContext,
    key_name: Optional[str],
    parent_label: Optional[str],
    verdict: Optional[bool],
) -> Any:
    name = key_name if key_name is not None else getattr(fn, "__name__", None)
    path = child_label(parent_label, name if name is not None else type(fn).__name__)
    classification = classify(
        fn,
        name,
        parent_label,
        predicate=ctx.predicate,
        callback_names=ctx.callback_names,
        verdict=verdict,
    )
    _report(ctx, fn, path, classification)

    # `host` is the callable whose namespace receives the walked prototype.
    host = fn
    if classification.asynchronous:
        if ctx.no_mutate and inspect.isclass(fn):
            host = clone(fn, memoize=False)
        wrapped = denodeify(host)
    elif ctx.no_mutate:
        wrapped = host = clone(fn, memoize=False)
    else:
        wrapped = fn
    ctx.cache.put(fn, wrapped)

    for key, item in own_properties(fn):
        walked = walk(item, ctx, str(key), path)
        if wrapped is not fn or walked is not item:
            setattr(wrapped, key, walked)

    prototype = extract_prototype(fn)
    if prototype is not None:
        walked_members = walk(prototype.members, ctx, None, path)
        if inspect.isclass(host):
            install_prototype(host, prototype, walked_members)
        else:
            logger.debug("Prototype of %s not installed: %r is not a class", path, host)

    if classification.asynchronous:
        link_fallback(wrapped, host)
    return wrapped


def _walk_record(record: Any, ctx: WalkContext, label: Optional[str]) -> Any:
    if ctx.no_mutate:
        target = _shallow_copy(record)
        ctx.cache.put(record, target)
    else:
        target = record
        ctx.cache.mark_visited(record)

    for key, item in own_properties(record):
        kind = node_kind(item)
        key_name = str(key)
        if kind is NodeKind.RECORD:
            walked = walk(item, ctx, key_name, label)
        elif kind is NodeKind.CALLABLE:
            verdict = predicate_verdict(ctx.predicate, item, key_name, label)
            if verdict is False:
                continue
            walked = walk(item, ctx, key_name, label, verdict=verdict)
        else:
            continue
        if walked is not item:
            _set_member(target, key, walked)
    return target


def _shallow_copy(record: Any) -> Any:
    if isinstance(record, ModuleType):
        # Modules cannot be copied; rebuild one sharing every attribute.
        module_copy = ModuleType(record.__name__, record.__doc__)
        vars(module_copy).update(vars(record))
        return module_copy
    return copy.copy(record)


def _set_member(target: Any, key: Any, value: Any) -> None:
    if isinstance(target, (MutableMapping, list)):
        target[key] = value
    else:
        setattr(target, key, value)


def _callable_kind(fn: Any) -> str:
    if inspect.isclass(fn):
        return "class"
    if inspect.isroutine(fn) or isinstance(fn, PromisifiedCallable):
        return "function"
    return "callable"


def _report(ctx: WalkContext, fn: Any, path: str, classification: Classification) -> None:
    ctx.report.append(
        ClassificationRecord(
            path=path,
            kind=_callable_kind(fn),
            asynchronous=classification.asynchronous,
            via=classification.via,
            parameters=list(classification.parameters),
            callback_name=classification.callback_name,
        )
    )
    log = logger.info if ctx.verbose else logger.debug
    log(
        "Classified %s as %s (via=%s params=%s)",
        path,
        "async" if classification.asynchronous else "plain",
        classification.via,
        list(classification.parameters),
    )
