"""Asynchronous-function detection.

A callable is classified Asynchronous when

    1. a caller-supplied predicate returns true for it, or
    2. its last declared parameter name is one of the recognized callback
       names (exact, case-sensitive equality; no prefix or fuzzy match).

A predicate returning false does not suppress the heuristic for that callable.
Callables with no declared parameters never match the heuristic.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Collection, Optional, Sequence, Tuple

from ..signature import parameter_names

__all__ = [
    "Predicate",
    "Classification",
    "matching_callback_name",
    "classify",
    "predicate_verdict",
]

# (candidate, key_name, parent_label) -> bool
Predicate = Callable[[Any, Optional[str], Optional[str]], bool]


@dataclass(frozen=True)
class Classification:
    asynchronous: bool
    via: str  # "predicate" | "signature" | "none"
    parameters: Tuple[str, ...] = ()
    callback_name: Optional[str] = None


def matching_callback_name(
    parameters: Sequence[str], callback_names: Collection[str]
) -> Optional[str]:
    """Return the last parameter name when it is a recognized callback name."""
    if not parameters:
        return None
    last = parameters[-1]
    return last if last in callback_names else None


def predicate_verdict(
    predicate: Optional[Predicate],
    candidate: Any,
    key_name: Optional[str],
    parent_label: Optional[str],
) -> Optional[bool]:
    """Evaluate `predicate`, or return None when there is none."""
    if predicate is None:
        return None
    return bool(predicate(candidate, key_name, parent_label))


def classify(
    fn: Any,
    key_name: Optional[str],
    parent_label: Optional[str],
    *,
    predicate: Optional[Predicate],
    callback_names: Collection[str],
    verdict: Optional[bool] = None,
) -> Classification:
    """Classify `fn`, reusing `verdict` when the predicate already ran for it."""
    if verdict is None:
        verdict = predicate_verdict(predicate, fn, key_name, parent_label)
    parameters = tuple(parameter_names(fn))
    if verdict:
        return Classification(True, "predicate", parameters)
    callback_name = matching_callback_name(parameters, callback_names)
    if callback_name is not None:
        return Classification(True, "signature", parameters, callback_name)
    return Classification(False, "none", parameters)
