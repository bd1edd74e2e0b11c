"""Delete command: remove a single automation by id.

Intended to be called over SSH by a temporary automation, e.g. a
``shell_command`` running ``automate-ai delete {{ automation_id }}``.
Everything is also logged to DELETE_LOG_FILE since nobody watches the
terminal on that path.
"""

from typing import TYPE_CHECKING, Annotated

import typer

from automate_ai.cli.utils import console, exit_on_error, run_or_exit
from automate_ai.exceptions import ConfigurationError

if TYPE_CHECKING:
    from automate_ai.services import DeletionOutcome


def delete(
    ctx: typer.Context,
    automation_id: Annotated[str, typer.Argument(help="ID of the automation to delete")],
) -> None:
    """Delete one automation via the REST API, or from automations.yaml as a fallback."""
    level = (ctx.obj or {}).get("log_level")
    with exit_on_error():
        _log_to_file(level)

    outcome = run_or_exit(_delete(automation_id))

    if not outcome.succeeded:
        console.print(f"[red]Automation '{automation_id}' was not found or not deleted.[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[green]✅ Automation '{outcome.automation_id}' deleted ({outcome.method.value}).[/green]"
    )


def _log_to_file(level: str | None) -> None:
    """Add DELETE_LOG_FILE to the logging setup, keeping the --log-level choice."""
    from automate_ai.logging_config import configure_logging
    from automate_ai.settings import get_settings

    log_file = get_settings().delete_log_file
    try:
        configure_logging(level=level, log_file=log_file)  # type: ignore[arg-type]
    except OSError as e:
        raise ConfigurationError(f"Cannot open DELETE_LOG_FILE {log_file}: {e}") from e


async def _delete(automation_id: str) -> "DeletionOutcome":
    """Run the deleter against the configured file and HA instance."""
    from automate_ai.automations import AutomationsFile
    from automate_ai.ha import get_ha_client
    from automate_ai.services import AutomationDeleter
    from automate_ai.settings import get_settings

    settings = get_settings()
    # Only the file fallback needs AUTOMATIONS_YAML
    path = settings.automations_path
    automations_file = AutomationsFile(path) if path is not None else None
    ha_client = get_ha_client(settings) if settings.ha_configured else None

    try:
        return await AutomationDeleter(automations_file, ha_client).delete(automation_id)
    finally:
        if ha_client is not None:
            await ha_client.close()
