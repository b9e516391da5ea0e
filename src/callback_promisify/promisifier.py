"""Public facade for converting callback-style APIs to deferred-value APIs.

All traversal logic lives in the `callback_promisify.walking` package; this
module resolves module names, picks the mutation mode and builds the per-call
context.

Public Functions:
    promisify: Promisify a module (by name), function, record or class
    scan: Report how every reachable callable would be classified

Mutation policy:
    A value passed directly is mutated in place unless `no_mutate=True`. A
    module resolved by name is processed without mutation unless
    `no_mutate=False` is passed explicitly: the module object is shared with
    every other importer, so rewriting it would change their view too.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from .callbacks import callbacks, effective_callback_names
from .config import get_settings
from .models.report import ClassificationRecord
from .resolver import resolve
from .walking.detection import Predicate
from .walking.identity_cache import IdentityCache
from .walking.walk_context import WalkContext
from .walking.walker import walk

logger = logging.getLogger(__name__)

__all__ = ["promisify", "scan", "callbacks"]


def _context(predicate: Optional[Predicate], no_mutate: bool) -> WalkContext:
    settings = get_settings()
    return WalkContext(
        predicate=predicate,
        callback_names=effective_callback_names(settings.CALLBACK_NAMES_EXTRA),
        no_mutate=no_mutate,
        cache=IdentityCache(),
        verbose=settings.DEBUG,
    )


def _resolve_input(name_or_value: Any, no_mutate: Optional[bool]) -> tuple[Any, bool]:
    if isinstance(name_or_value, str) and name_or_value:
        return resolve(name_or_value), no_mutate is not False
    return name_or_value, bool(no_mutate)


def promisify(
    name_or_value: Any,
    predicate: Optional[Predicate] = None,
    no_mutate: Optional[bool] = None,
) -> Any:
    """Replace callback-last callables reachable from a value with deferred-value wrappers.

    Args:
        name_or_value: A module name (resolved with `importlib`), or a
            function, class, dict, list, namespace or module.
        predicate: Optional `(candidate, key_name, parent_label) -> bool`.
            A true result marks the candidate asynchronous regardless of its
            parameter names. On record members a false result also leaves the
            member unexamined.
        no_mutate: Clone instead of modifying the input. Defaults to True for
            module names and False for values.

    Returns:
        The processed value: the input itself (mutating) or a structurally
        parallel copy (non-mutating). Primitives are returned unchanged.

    Note:
        Wrapped callables return a `concurrent.futures.Future`; use
        `asyncio.wrap_future` to await one from a coroutine.
    """
    value, effective_no_mutate = _resolve_input(name_or_value, no_mutate)
    ctx = _context(predicate, effective_no_mutate)
    result = walk(value, ctx)
    logger.debug(
        "promisify(%r) no_mutate=%s classified=%d async=%d cached=%d",
        name_or_value,
        effective_no_mutate,
        len(ctx.report),
        sum(1 for r in ctx.report if r.asynchronous),
        len(ctx.cache),
    )
    return result


def scan(
    name_or_value: Any, predicate: Optional[Predicate] = None
) -> List[ClassificationRecord]:
    """Classify every callable reachable from a value without modifying it."""
    value, _ = _resolve_input(name_or_value, True)
    ctx = _context(predicate, True)
    walk(value, ctx)
    return ctx.report
