"""Orphan automation reconciliation.

An orphan is an automation the HA registry still knows about while no
automation in the local automations.yaml carries a matching id. These
show up greyed out in the HA UI after their YAML was removed by hand.

A registry record is matched when any of its ``id``, ``unique_id`` or
``entity_id`` equals a local id. The loose comparison tolerates registry
schema differences between HA versions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from automate_ai.automations import AutomationsFile
from automate_ai.ha import (
    ORPHAN_DELETE_STRATEGIES,
    DeleteStrategy,
    HAClient,
    RemoteAutomationRecord,
)

logger = logging.getLogger(__name__)

ConfirmDeletion = Callable[[RemoteAutomationRecord], bool]


def find_orphans(
    local_ids: Iterable[str],
    remote_records: Iterable[RemoteAutomationRecord],
) -> list[RemoteAutomationRecord]:
    """Return the remote records that match no local id, in remote order.

    Empty identifiers never match.
    """
    known = {local_id for local_id in local_ids if local_id}
    return [
        record
        for record in remote_records
        if not any(identifier in known for identifier in record.identifiers())
    ]


@dataclass
class ReconcileReport:
    """Outcome of one reconciliation run."""

    orphans: list[RemoteAutomationRecord] = field(default_factory=list)
    deleted: list[RemoteAutomationRecord] = field(default_factory=list)
    skipped: list[RemoteAutomationRecord] = field(default_factory=list)
    failed: list[RemoteAutomationRecord] = field(default_factory=list)
    reload_failures: int = 0

    @property
    def orphan_count(self) -> int:
        return len(self.orphans)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)


class Reconciler:
    """Finds orphaned automations and deletes the ones the operator confirms."""

    def __init__(
        self,
        ha_client: HAClient,
        automations_file: AutomationsFile,
        strategies: tuple[DeleteStrategy, ...] = ORPHAN_DELETE_STRATEGIES,
    ):
        self.ha = ha_client
        self.automations_file = automations_file
        self.strategies = strategies

    async def find_orphans(self) -> list[RemoteAutomationRecord]:
        """Compare the local file with the registry.

        The local file is read first so a missing file aborts before any
        remote call.

        Raises:
            AutomationFileError: If the automations file is missing or unreadable
            HAClientError: If the registry listing yields no usable data
        """
        logger.info("Reading automation IDs from YAML file...")
        local_ids = self.automations_file.local_ids()

        logger.info("Reading automation records from Home Assistant...")
        remote_records = await self.ha.list_automation_records()

        orphans = find_orphans(local_ids, remote_records)
        logger.debug(
            "%d local ids, %d remote records, %d orphans",
            len(local_ids),
            len(remote_records),
            len(orphans),
        )
        return orphans

    async def run(self, confirm: ConfirmDeletion) -> ReconcileReport:
        """Offer each orphan for deletion.

        Deletion of one orphan failing does not stop the others. A reload
        follows every successful deletion; a failed reload is logged and
        the deletion stands.

        Args:
            confirm: Asked once per orphan; deletion only happens on True

        Returns:
            Counts and records for found, deleted, skipped and failed orphans
        """
        logger.info("Starting cleanup of orphaned automations...")
        report = ReconcileReport(orphans=await self.find_orphans())

        for orphan in report.orphans:
            logger.info("Orphaned automation found: %s", orphan.describe())

            if not confirm(orphan):
                logger.info("Skipped deletion of automation (user chose no).")
                report.skipped.append(orphan)
                continue

            strategy = await self.ha.delete_automation(orphan, self.strategies)
            if strategy is None:
                logger.error(
                    "Could not delete automation %s (tried %s).",
                    orphan.describe(),
                    " and ".join(s.label for s in self.strategies),
                )
                report.failed.append(orphan)
                continue

            report.deleted.append(orphan)
            if not await self.ha.reload_automations():
                report.reload_failures += 1

        if report.orphan_count == 0:
            logger.info("No orphaned automations found.")
        else:
            logger.info(
                "Found %d orphaned automations, deleted %d.",
                report.orphan_count,
                report.deleted_count,
            )
        return report
