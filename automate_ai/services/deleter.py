"""Single automation deletion.

Used by temporary automations, which call back over SSH with their own
id once they have run. The REST API is tried first; when it refuses,
the automation is cut out of automations.yaml and HA is asked to reload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from automate_ai.automations import AutomationsFile
from automate_ai.exceptions import ConfigurationError
from automate_ai.ha import (
    SINGLE_ID_DELETE_STRATEGIES,
    DeleteStrategy,
    HAClient,
    RemoteAutomationRecord,
)

logger = logging.getLogger(__name__)


class DeletionMethod(str, Enum):
    """How an automation ended up deleted."""

    API = "api"
    FILE = "file"
    NONE = "none"


@dataclass
class DeletionOutcome:
    """Result of deleting one automation."""

    automation_id: str
    method: DeletionMethod
    strategy: DeleteStrategy | None = None
    removed_from_file: int = 0
    reloaded: bool | None = None

    @property
    def succeeded(self) -> bool:
        return self.method is not DeletionMethod.NONE


class AutomationDeleter:
    """Deletes one automation by id, via the API or by editing the file."""

    def __init__(
        self,
        automations_file: AutomationsFile | None,
        ha_client: HAClient | None,
        strategies: tuple[DeleteStrategy, ...] = SINGLE_ID_DELETE_STRATEGIES,
    ):
        """Initialize deleter.

        Args:
            automations_file: Local automations.yaml, or None when AUTOMATIONS_YAML is unset
                (remote deletion only)
            ha_client: HA client, or None when HA is not configured (file removal only)
            strategies: Ordered remote deletion strategies
        """
        self.automations_file = automations_file
        self.ha = ha_client
        self.strategies = strategies

    async def delete(self, automation_id: str) -> DeletionOutcome:
        """Delete the automation with the given id.

        Raises:
            ConfigurationError: If no id is given, or the file fallback is reached
                without an automations file
            AutomationFileError: If the file fallback cannot read or rewrite the file
        """
        automation_id = automation_id.strip()
        if not automation_id:
            raise ConfigurationError("No automation ID provided.")

        logger.info("Received automation ID to delete: %s", automation_id)

        if self.ha is None:
            logger.info("HA_URL or HA_TOKEN not configured. Skipping API deletion.")
        else:
            logger.info("Deleting automation '%s' via REST API...", automation_id)
            record = RemoteAutomationRecord(id=automation_id)
            strategy = await self.ha.delete_automation(record, self.strategies)
            if strategy is not None:
                logger.info("Automation deleted successfully via REST API.")
                return DeletionOutcome(automation_id, DeletionMethod.API, strategy=strategy)
            logger.warning("Failed to delete automation via API. Falling back to YAML removal.")

        if self.automations_file is None:
            raise ConfigurationError("AUTOMATIONS_YAML is not set correctly.")
        removed = self.automations_file.remove(automation_id)
        if not removed:
            return DeletionOutcome(automation_id, DeletionMethod.NONE)

        reloaded = None
        if self.ha is None:
            logger.info("HA_URL or HA_TOKEN not configured. Skipping reload.")
        else:
            reloaded = await self.ha.reload_automations()

        return DeletionOutcome(
            automation_id,
            DeletionMethod.FILE,
            removed_from_file=removed,
            reloaded=reloaded,
        )
