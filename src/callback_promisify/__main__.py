"""Command-line interface for callback-promisify.

Subcommands:
1.  `scan`: classify every callable reachable from a module (non-mutating) and
    print which ones would be promisified.
2.  `call`: promisify a module (non-mutating), call one of its callables and
    print the value its deferred result settles to.
3.  `callbacks`: print the recognized callback parameter names in effect.
"""
from __future__ import annotations

import fnmatch
import json
import logging
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, List, Optional

import typer

from .callbacks import effective_callback_names
from .config import get_settings
from .models.report import ClassificationReport
from .promisifier import promisify, scan
from .resolver import lookup_path, split_target
from .walking.detection import Predicate

app = typer.Typer(help="Convert callback-style Python APIs into future-returning APIs")
logger = logging.getLogger(__name__)


def _match_predicate(patterns: List[str]) -> Optional[Predicate]:
    """Build a predicate accepting candidates whose key name matches any glob."""
    if not patterns:
        return None

    def predicate(candidate: Any, key_name: Optional[str], parent_label: Optional[str]) -> bool:
        name = key_name or getattr(candidate, "__name__", "") or ""
        return any(fnmatch.fnmatchcase(name, p) for p in patterns)

    return predicate


def _parse_arg(raw: str) -> Any:
    """Decode a CLI argument as JSON, keeping it as a string when that fails."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """callback-promisify CLI.

    Use a subcommand like 'scan' to inspect a module.
    """
    pass


@app.command(name="scan", help="Classify the callables reachable from MODULE without modifying it.")
def scan_module(
    module: str = typer.Argument(..., help="Importable module name, e.g. 'mypkg.client'"),
    match: List[str] = typer.Option(
        [],
        "--match",
        "-m",
        help=(
            "Glob over member names marking them asynchronous regardless of their "
            "parameters (repeatable). Members of records that match none are skipped."
        ),
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    only_async: bool = typer.Option(
        False, "--only-async", help="List asynchronous callables only"
    ),
) -> None:
    _configure_logging()
    try:
        report = scan(module, _match_predicate(match))
    except ImportError as e:
        typer.echo(f"Cannot import {module}: {e}", err=True)
        raise typer.Exit(code=2)
    if only_async:
        report = [r for r in report if r.asynchronous]
    if as_json:
        typer.echo(ClassificationReport.dump_json(report, indent=2).decode("utf-8"))
        return
    for record in report:
        marker = "async" if record.asynchronous else "plain"
        detail = record.callback_name or record.via
        typer.echo(f"{marker:<5}  {record.path}  [{detail}]")
    typer.echo(
        f"{sum(1 for r in report if r.asynchronous)} of {len(report)} callable(s) asynchronous"
    )


@app.command(help="Call TARGET ('module:attr.path') through its promisified form.")
def call(
    target: str = typer.Argument(..., help="Target as 'module:attr.path'"),
    args: Optional[List[str]] = typer.Argument(
        None, help="Positional arguments (JSON-decoded where possible)"
    ),
    timeout: Optional[float] = typer.Option(
        None, help="Seconds to wait for the result (defaults to CALL_TIMEOUT_SECONDS)"
    ),
) -> None:
    _configure_logging()
    settings = get_settings()
    try:
        module_name, attrs = split_target(target)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)
    if not attrs:
        typer.echo("Target must name an attribute, e.g. 'mypkg.client:fetch'", err=True)
        raise typer.Exit(code=2)
    try:
        promisified = promisify(module_name)
        fn = lookup_path(promisified, attrs)
    except (ImportError, AttributeError, KeyError) as e:
        typer.echo(f"Cannot resolve {target}: {e}", err=True)
        raise typer.Exit(code=2)
    result = fn(*[_parse_arg(a) for a in (args or [])])
    if not isinstance(result, Future):
        typer.echo(f"{target} is not asynchronous; returned {result!r}")
        return
    wait = timeout if timeout is not None else settings.CALL_TIMEOUT_SECONDS
    try:
        value = result.result(timeout=wait)
    except FutureTimeoutError:
        typer.echo(f"{target} did not settle within {wait}s", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        logger.debug("Deferred value for %s rejected", target, exc_info=True)
        typer.echo(f"Rejected: {e!r}", err=True)
        raise typer.Exit(code=1)
    try:
        typer.echo(json.dumps(value))
    except (TypeError, ValueError):
        typer.echo(repr(value))


@app.command(name="callbacks", help="Print the recognized callback parameter names.")
def show_callbacks() -> None:
    settings = get_settings()
    for name in effective_callback_names(settings.CALLBACK_NAMES_EXTRA):
        typer.echo(name)


if __name__ == "__main__":  # pragma: no cover
    app()
