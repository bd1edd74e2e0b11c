"""Home Assistant REST client for automation registry operations."""

from automate_ai.ha.automations import (
    BY_CONFIG_ID,
    BY_ENTITY_ID,
    BY_LEGACY_CONFIG_ID,
    ORPHAN_DELETE_STRATEGIES,
    SINGLE_ID_DELETE_STRATEGIES,
    DeleteStrategy,
    RemoteAutomationRecord,
)
from automate_ai.ha.base import SUCCESS_CODES, HAClientConfig
from automate_ai.ha.client import HAClient, get_ha_client

__all__ = [
    "BY_CONFIG_ID",
    "BY_ENTITY_ID",
    "BY_LEGACY_CONFIG_ID",
    "ORPHAN_DELETE_STRATEGIES",
    "SINGLE_ID_DELETE_STRATEGIES",
    "SUCCESS_CODES",
    "DeleteStrategy",
    "HAClient",
    "HAClientConfig",
    "RemoteAutomationRecord",
    "get_ha_client",
]
