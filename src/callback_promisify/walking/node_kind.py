"""Node classification for the graph walker.

Every value is tagged exactly once before dispatch:

    PRIMITIVE  passed through by reference, never cached
    CALLABLE   functions, builtins, methods, partials, classes, promisified callables
    RECORD     dicts (any MutableMapping), lists, SimpleNamespace, modules

`own_properties` yields the (key, value) pairs the walker descends into for a
node. Dunder attributes are never considered own properties; classes expose
their namespace as a prototype (see `prototype.py`) rather than as own
properties.
"""
from __future__ import annotations

import enum
import inspect
from collections.abc import MutableMapping
from types import ModuleType, SimpleNamespace
from typing import Any, Hashable, List, Tuple

__all__ = ["NodeKind", "node_kind", "own_properties", "is_dunder", "child_label"]


class NodeKind(enum.Enum):
    PRIMITIVE = "primitive"
    CALLABLE = "callable"
    RECORD = "record"


def is_dunder(name: Any) -> bool:
    return isinstance(name, str) and len(name) > 4 and name.startswith("__") and name.endswith("__")


def node_kind(value: Any) -> NodeKind:
    if value is None:
        return NodeKind.PRIMITIVE
    if callable(value):
        return NodeKind.CALLABLE
    if isinstance(value, (MutableMapping, list, SimpleNamespace, ModuleType)):
        return NodeKind.RECORD
    return NodeKind.PRIMITIVE


def _module_exports(module: ModuleType) -> List[Tuple[str, Any]]:
    namespace = vars(module)
    exported = getattr(module, "__all__", None)
    if exported is not None:
        names = [n for n in exported if isinstance(n, str) and n in namespace]
    else:
        names = [n for n in namespace if not n.startswith("_")]
    package_prefix = module.__name__ + "."
    pairs: List[Tuple[str, Any]] = []
    for name in names:
        item = namespace[name]
        # Imported foreign modules are not exports; own submodules are.
        if isinstance(item, ModuleType) and not item.__name__.startswith(package_prefix):
            continue
        pairs.append((name, item))
    return pairs


def own_properties(value: Any) -> List[Tuple[Hashable, Any]]:
    """Snapshot of the properties the walker descends into for `value`."""
    if isinstance(value, ModuleType):
        return _module_exports(value)
    if isinstance(value, MutableMapping):
        return list(value.items())
    if isinstance(value, list):
        return list(enumerate(value))
    if inspect.isclass(value) or inspect.ismethod(value):
        # Bound methods proxy their function's __dict__ but accept no assignment.
        return []
    namespace = getattr(value, "__dict__", None)
    if not isinstance(namespace, dict):
        return []
    return [(k, v) for k, v in namespace.items() if not is_dunder(k)]


def child_label(parent_label: str | None, key: Any) -> str:
    """Dotted path of a child reached through `key`."""
    if parent_label is None:
        return str(key)
    return f"{parent_label}.{key}"
