"""Create command: natural language → automation."""

from typing import TYPE_CHECKING, Annotated, Optional

import typer
from rich.panel import Panel
from rich.syntax import Syntax

from automate_ai.cli.utils import console, run_or_exit

if TYPE_CHECKING:
    from automate_ai.llm import GeneratedAutomation
    from automate_ai.services import CreationResult


def create(
    command: Annotated[
        Optional[list[str]],  # noqa: UP007
        typer.Argument(help="What the automation should do, in plain words"),
    ] = None,
) -> None:
    """Create a Home Assistant automation from a natural-language command.

    Prompts for the command when none is given.
    """
    user_command = " ".join(command or []).strip()
    if user_command:
        console.print(f"[dim]Using command line parameter: {user_command}[/dim]")
    else:
        user_command = typer.prompt(
            "Please enter your automation command", default="", show_default=False
        ).strip()

    if not user_command:
        console.print("[yellow]No command entered. Exiting.[/yellow]")
        return

    result = run_or_exit(_create(user_command))

    if result.reloaded is False:
        console.print("[yellow]Automation saved, but Home Assistant did not reload.[/yellow]")
    if result.automation.temporary:
        console.print(
            "[cyan]Temporary automation created. It will delete itself after it runs.[/cyan]"
        )
    console.print(
        f"[green]✅ Automation {result.automation.automation_id} created.[/green]"
    )


async def _create(user_command: str) -> "CreationResult":
    """Build the pipeline from settings and run it."""
    from automate_ai.automations import AutomationsFile
    from automate_ai.exceptions import AutomationValidationError
    from automate_ai.ha import get_ha_client
    from automate_ai.services import AutomationCreator, build_generator
    from automate_ai.settings import get_settings

    settings = get_settings()
    automations_file = AutomationsFile(settings.require_automations_path())
    generator = await build_generator(settings)
    ha_client = get_ha_client(settings) if settings.ha_configured else None

    def show(generated: "GeneratedAutomation") -> None:
        console.print(
            Panel(
                Syntax(generated.yaml, "yaml", theme="ansi_dark"),
                title="Generated automation",
                border_style="blue",
            )
        )

    try:
        return await AutomationCreator(generator, automations_file, ha_client).create(
            user_command, on_generated=show
        )
    except AutomationValidationError as e:
        for error in e.errors:
            console.print(f"[red]  • {error}[/red]")
        raise
    finally:
        if ha_client is not None:
            await ha_client.close()
