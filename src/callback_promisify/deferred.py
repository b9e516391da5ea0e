"""Convert a callback-last function into one returning a deferred value.

The deferred value is a `concurrent.futures.Future`, which can be waited on
directly (`future.result(timeout)`) or awaited from asyncio through
`asyncio.wrap_future(future)`. The injected callback follows the error-first
convention:

    callback(error)                 -> reject with `error` when truthy
    callback(None)                  -> resolve with None
    callback(None, value)           -> resolve with `value`
    callback(None, v1, v2, ...)     -> resolve with [v1, v2, ...]

The future settles at most once. Repeated callback invocations after settling
are ignored, and an exception raised synchronously by the wrapped function
rejects the future rather than propagating to the caller.
"""
from __future__ import annotations

import functools
import inspect
import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional

from .delegation import PromisifiedCallable

logger = logging.getLogger(__name__)

__all__ = ["PromisifyError", "CallbackError", "denodeify", "settle_from_callback"]


class PromisifyError(Exception):
    """Base class for errors raised by callback-promisify."""


class CallbackError(PromisifyError):
    """A callback was invoked with a truthy error that is not an exception.

    The raw value is kept on `reason`.
    """

    def __init__(self, reason: Any) -> None:
        super().__init__(f"callback invoked with error {reason!r}")
        self.reason = reason


def settle_from_callback(future: Future, *results: Any) -> None:
    """Settle `future` from error-first callback arguments."""
    if future.done():
        return
    error = results[0] if results else None
    if error:
        if not isinstance(error, BaseException):
            error = CallbackError(error)
        future.set_exception(error)
        return
    values = results[1:]
    if len(values) > 1:
        future.set_result(list(values))
    elif values:
        future.set_result(values[0])
    else:
        future.set_result(None)


def _reduced_signature(fn: Callable[..., Any]) -> Optional[inspect.Signature]:
    """Signature of `fn` without the positional slot the callback fills.

    The callback is passed after the caller's positional arguments, so it
    takes the last positional parameter. Keyword-only parameters stay. When
    `fn` accepts `*args` the callback lands there and the signature is kept.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    params = list(signature.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return signature
    positional = [
        i
        for i, p in enumerate(params)
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if not positional:
        return signature
    del params[positional[-1]]
    return signature.replace(parameters=params)


def denodeify(fn: Callable[..., Any]) -> PromisifiedCallable:
    """Wrap `fn` so that calling it returns a `Future` instead of taking a callback."""

    def call(*args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        lock = threading.Lock()
        settled = False

        def callback(*results: Any) -> None:
            nonlocal settled
            with lock:
                if settled:
                    logger.debug(
                        "Ignoring repeated callback for %s", getattr(fn, "__qualname__", fn)
                    )
                    return
                settled = True
            settle_from_callback(future, *results)

        try:
            fn(*args, callback, **kwargs)
        except Exception as exc:
            with lock:
                already_settled = settled
                settled = True
            if already_settled:
                logger.warning(
                    "%s raised after its callback fired; the deferred value is unchanged",
                    getattr(fn, "__qualname__", fn),
                    exc_info=True,
                )
            elif not future.done():
                future.set_exception(exc)
        return future

    wrapped = PromisifiedCallable(call, origin=fn)
    # A class namespace is its prototype, not a set of own attributes.
    updated = () if inspect.isclass(fn) else functools.WRAPPER_UPDATES
    functools.update_wrapper(wrapped, fn, updated=updated)
    reduced = _reduced_signature(fn)
    if reduced is not None:
        wrapped.__signature__ = reduced
    return wrapped
