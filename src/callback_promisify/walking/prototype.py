"""Class prototypes.

The prototype of a class is the non-dunder part of its own namespace: the
members instances (and, for static and class methods, the class itself) look
up. The walker sees the prototype as a record; `staticmethod` and
`classmethod` entries are unwrapped to their underlying function first so the
signature heuristic sees the declared parameters, and are wrapped again in the
same descriptor type when installed.

Only members whose walked value differs from the original are installed, so a
mutating walk leaves untouched methods alone and a cloned class keeps
inheriting them from the original.
"""
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .node_kind import is_dunder

logger = logging.getLogger(__name__)

__all__ = ["Prototype", "extract_prototype", "install_prototype"]


@dataclass
class Prototype:
    members: Dict[str, Any]
    descriptors: Dict[str, type] = field(default_factory=dict)
    originals: Dict[str, Any] = field(default_factory=dict)


def extract_prototype(cls: Any) -> Optional[Prototype]:
    """Return the prototype of a class, or None for non-classes and empty namespaces."""
    if not inspect.isclass(cls):
        return None
    members: Dict[str, Any] = {}
    descriptors: Dict[str, type] = {}
    for name, member in vars(cls).items():
        if is_dunder(name):
            continue
        if isinstance(member, (staticmethod, classmethod)):
            descriptors[name] = type(member)
            member = member.__func__
        members[name] = member
    if not members:
        return None
    return Prototype(members=members, descriptors=descriptors, originals=dict(members))


def install_prototype(host: type, prototype: Prototype, walked: Mapping[str, Any]) -> int:
    """Set every changed member of `walked` on `host`; return how many were set."""
    installed = 0
    for name, member in walked.items():
        if name in prototype.originals and member is prototype.originals[name]:
            continue
        descriptor = prototype.descriptors.get(name)
        if descriptor is not None:
            member = descriptor(member)
        try:
            setattr(host, name, member)
        except (AttributeError, TypeError):
            # Builtin and extension types refuse new attributes.
            logger.warning(
                "Cannot install %s on %s; the member keeps its original form",
                name,
                getattr(host, "__qualname__", host),
                exc_info=True,
            )
            continue
        installed += 1
    if installed:
        logger.debug(
            "Installed %d prototype member(s) on %s",
            installed,
            getattr(host, "__qualname__", host),
        )
    return installed
