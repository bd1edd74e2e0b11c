"""Cleanup command: remove orphaned automations from Home Assistant."""

from typing import TYPE_CHECKING

import typer
from rich.panel import Panel
from rich.table import Table

from automate_ai.cli.utils import console, run_or_exit

if TYPE_CHECKING:
    from automate_ai.ha import RemoteAutomationRecord
    from automate_ai.services import ReconcileReport


def cleanup() -> None:
    """Remove automations that Home Assistant knows but automations.yaml no longer has.

    These appear greyed out in the Home Assistant UI. Every deletion is
    confirmed interactively.
    """
    console.print(
        Panel(
            "[bold blue]Cleaning up orphaned automations[/bold blue]",
            title="🧹 Cleanup",
            border_style="blue",
        )
    )
    report = run_or_exit(_cleanup())

    if report.orphan_count == 0:
        console.print("[green]✅ No orphaned automations found.[/green]")
        return

    table = Table(title=f"Orphaned automations ({report.orphan_count})", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Entity ID")
    table.add_column("Alias")
    table.add_column("Result", justify="center")

    outcomes = {id(r): "[green]deleted[/green]" for r in report.deleted}
    outcomes.update({id(r): "[dim]skipped[/dim]" for r in report.skipped})
    outcomes.update({id(r): "[red]failed[/red]" for r in report.failed})
    for record in report.orphans:
        table.add_row(
            record.id or "-",
            record.entity_id or "-",
            record.alias or "-",
            outcomes.get(id(record), "-"),
        )
    console.print(table)
    console.print(
        f"Found {report.orphan_count} orphaned automations, deleted {report.deleted_count}."
    )


def _confirm(record: "RemoteAutomationRecord") -> bool:
    return typer.confirm(
        f"Delete orphaned automation (id='{record.id}' entity_id='{record.entity_id}')?",
        default=False,
    )


async def _cleanup() -> "ReconcileReport":
    """Run the reconciler against the configured file and HA instance."""
    from automate_ai.automations import AutomationsFile
    from automate_ai.ha import get_ha_client
    from automate_ai.services import Reconciler
    from automate_ai.settings import get_settings

    settings = get_settings()
    automations_file = AutomationsFile(settings.require_automations_path())
    settings.require_ha()

    async with get_ha_client(settings) as ha_client:
        return await Reconciler(ha_client, automations_file).run(_confirm)
