"""Automatic conversion of callback-style APIs into deferred-value APIs.

    >>> from callback_promisify import promisify
    >>> def read(path, callback):
    ...     callback(None, path.upper())
    >>> promisify(read)("a").result()
    'A'

Functions whose last declared parameter is one of `callbacks` (or that a
caller predicate selects) are wrapped so that they return a
`concurrent.futures.Future` instead of taking a callback.
"""
from __future__ import annotations

from .callbacks import (
    DEFAULT_CALLBACK_NAMES,
    callbacks,
    register_callback_name,
    reset_callback_names,
)
from .cloning import clone
from .delegation import PromisifiedCallable
from .deferred import CallbackError, PromisifyError, denodeify
from .models.report import ClassificationRecord
from .promisifier import promisify, scan

__all__ = [
    "promisify",
    "scan",
    "callbacks",
    "DEFAULT_CALLBACK_NAMES",
    "register_callback_name",
    "reset_callback_names",
    "denodeify",
    "clone",
    "PromisifiedCallable",
    "PromisifyError",
    "CallbackError",
    "ClassificationRecord",
]
