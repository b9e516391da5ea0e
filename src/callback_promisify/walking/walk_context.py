"""Traversal state container for one top-level promisify call.

State Fields:
    predicate: Optional caller predicate overriding name-based detection
    callback_names: Snapshot of recognized callback names for this call
    no_mutate: Clone instead of mutating the input graph
    cache: Identity cache (fresh per call, never shared)
    verbose: Log classifications at INFO instead of DEBUG
    report: Classification records appended as callables are classified

Design Note:
    Context mutability is confined to the walker; detection and prototype
    helpers stay pure by receiving the state they need as parameters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..models.report import ClassificationRecord
from .detection import Predicate
from .identity_cache import IdentityCache

__all__ = ["WalkContext"]


@dataclass
class WalkContext:
    predicate: Optional[Predicate]
    callback_names: Tuple[str, ...]
    no_mutate: bool
    cache: IdentityCache = field(default_factory=IdentityCache)
    verbose: bool = False
    report: List[ClassificationRecord] = field(default_factory=list)
