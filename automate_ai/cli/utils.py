"""Shared CLI helpers."""

import asyncio
import logging
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from automate_ai.exceptions import AutomateError

logger = logging.getLogger(__name__)

console = Console()

T = TypeVar("T")


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn application errors raised in the block into exit code 1."""
    try:
        yield
    except AutomateError as e:
        logger.error("%s: %s (correlation_id=%s)", type(e).__name__, e, e.correlation_id)
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def run_or_exit(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning application errors into exit code 1."""
    with exit_on_error():
        return asyncio.run(coro)
