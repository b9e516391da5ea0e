"""Declared parameter names of a callable."""
from __future__ import annotations

import inspect
from typing import Any, List


def parameter_names(fn: Any) -> List[str]:
    """Return the declared parameter names of `fn` in source order.

    Builtins and other callables without an introspectable signature yield an
    empty list, which the detection heuristic treats as "not asynchronous".
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return []
    return list(signature.parameters)


__all__ = ["parameter_names"]
