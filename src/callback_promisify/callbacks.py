"""Recognized callback parameter names.

`callbacks` is deliberately a plain, process-wide list: callers may inspect it
and append to it, and every later `promisify` call in the process honours the
change. The list is not exhaustive, so a library whose methods use a
non-standard callback name needs an extension, either by appending here or
through the `PROMISIFY_CALLBACK_NAMES_EXTRA` setting.

Matching is exact and case-sensitive: `Callback` or `cb2` never match.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CALLBACK_NAMES: Tuple[str, ...] = ("cb", "callback", "callback_", "done")

callbacks: List[str] = list(DEFAULT_CALLBACK_NAMES)


def register_callback_name(name: str) -> None:
    """Append a callback name to the shared list (no-op when already present)."""
    if not isinstance(name, str) or not name:
        raise ValueError("callback name must be a non-empty string")
    if name not in callbacks:
        callbacks.append(name)
        logger.debug("Registered callback name %r", name)


def reset_callback_names() -> None:
    """Restore the shared list to its defaults, in place."""
    callbacks[:] = DEFAULT_CALLBACK_NAMES


def effective_callback_names(extra: Iterable[str] = ()) -> Tuple[str, ...]:
    """Snapshot the shared list plus per-process extras for a single call."""
    names = list(callbacks)
    for name in extra:
        if name not in names:
            names.append(name)
    return tuple(names)


__all__ = [
    "DEFAULT_CALLBACK_NAMES",
    "callbacks",
    "register_callback_name",
    "reset_callback_names",
    "effective_callback_names",
]
