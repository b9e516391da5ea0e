"""Module name resolution.

`resolve` is a thin layer over `importlib.import_module`, so repeated
resolution of the same name returns the same module object from
`sys.modules`. `resolve_target` accepts the `package.module:attr.path` form
used by the CLI.
"""
from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Any, Tuple

logger = logging.getLogger(__name__)


def resolve(name: str) -> ModuleType:
    """Import and return the module called `name`."""
    module = importlib.import_module(name)
    logger.debug("Resolved module %s -> %r", name, module)
    return module


def split_target(target: str) -> Tuple[str, list[str]]:
    """Split `module:attr.path` into the module name and attribute path."""
    module_name, _, attr_path = target.partition(":")
    if not module_name:
        raise ValueError(f"Invalid target {target!r}: missing module name")
    attrs = [a for a in attr_path.split(".") if a] if attr_path else []
    return module_name, attrs


def lookup_path(value: Any, attrs: list[str]) -> Any:
    """Follow an attribute path, indexing into mappings where needed."""
    for attr in attrs:
        if isinstance(value, dict):
            value = value[attr]
        else:
            value = getattr(value, attr)
    return value


def resolve_target(target: str) -> Any:
    """Resolve `module:attr.path` to the value it names."""
    module_name, attrs = split_target(target)
    return lookup_path(resolve(module_name), attrs)


__all__ = ["resolve", "resolve_target", "split_target", "lookup_path"]
