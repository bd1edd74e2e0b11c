"""CLI entry point and base commands.

Provides the main CLI application with commands for:
- create: Natural language → Home Assistant automation
- cleanup: Remove orphaned automations from Home Assistant
- delete: Remove a single automation by id
"""

from typing import Annotated, Optional

import typer
from rich.panel import Panel

from automate_ai import __version__
from automate_ai.cli.commands.cleanup import cleanup
from automate_ai.cli.commands.create import create
from automate_ai.cli.commands.delete import delete
from automate_ai.cli.utils import console, exit_on_error
from automate_ai.logging_config import configure_logging

app = typer.Typer(
    name="automate-ai",
    help="Create and clean up Home Assistant automations from natural language",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[str],  # noqa: UP007
        typer.Option("--log-level", "-l", help="DEBUG, INFO, WARNING or ERROR"),
    ] = None,
) -> None:
    """Configure logging before any command runs."""
    level = log_level.upper() if log_level else None
    if level is not None and level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    # Commands that reconfigure logging read the level back from here
    ctx.ensure_object(dict)["log_level"] = level
    with exit_on_error():
        configure_logging(level=level)  # type: ignore[arg-type]


app.command()(create)
app.command()(cleanup)
app.command()(delete)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold]automate-ai[/bold] v{__version__}\n"
            "Natural-language automations for Home Assistant",
            title="🏠 Version",
            border_style="blue",
        )
    )


# Entry point for: python -m automate_ai.cli.main
if __name__ == "__main__":
    app()
