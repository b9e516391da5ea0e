"""Pydantic models describing classification decisions.

A walk appends one `ClassificationRecord` per callable it classifies. The
records are what `scan` returns and what the CLI prints (as a table or JSON).
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, TypeAdapter


class ClassificationRecord(BaseModel):
    """Outcome of classifying one callable during a walk."""

    path: str
    kind: Literal["function", "class", "callable"]
    asynchronous: bool
    # Which check decided: a caller predicate, the last-parameter heuristic,
    # or neither (plain).
    via: Literal["predicate", "signature", "none"]
    parameters: List[str] = Field(default_factory=list)
    callback_name: Optional[str] = None


ClassificationReport = TypeAdapter(List[ClassificationRecord])

__all__ = ["ClassificationRecord", "ClassificationReport"]
