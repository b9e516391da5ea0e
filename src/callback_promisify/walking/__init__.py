"""Graph-walking engine behind `promisify`.

This package discovers callback-last callables in an arbitrary value graph and
replaces them with deferred-value wrappers. Everything here is pure with
respect to I/O: the only side effects are the in-place mutations of a
mutating walk.

Modules:
    walker: Recursive traversal coordinating classification and wrapping
    node_kind: Tagged classification of values (primitive, callable, record)
    detection: Predicate and last-parameter callback-name heuristic
    identity_cache: Per-call identity-keyed bookkeeping of visited nodes
    prototype: Class namespace extraction and installation
    walk_context: State container for one top-level call

Design Invariants:
    - Each distinct original reference is processed at most once per call
    - Shared references in the input stay shared in the output
    - Nodes are registered before their children are walked (cycle safety)
    - Non-mutating walks leave the input graph untouched
"""
from __future__ import annotations

from .identity_cache import IdentityCache
from .node_kind import NodeKind, node_kind
from .walk_context import WalkContext
from .walker import walk

__all__ = ["IdentityCache", "NodeKind", "node_kind", "WalkContext", "walk"]
