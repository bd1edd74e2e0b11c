"""Automation registry operations.

Provides listing, deletion, and reload of automations over the
Home Assistant REST API.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, field_validator

from automate_ai.exceptions import HAClientError
from automate_ai.ha.base import SUCCESS_CODES

logger = logging.getLogger(__name__)

# Tried in order until one returns a non-empty list
LISTING_SOURCES = (
    "/api/automations",
    "/api/config/automation/config",
    "/api/states",
)

RELOAD_PATH = "/api/services/automation/reload"


class RemoteAutomationRecord(BaseModel):
    """One automation as reported by the HA registry.

    Any identifying field may be missing depending on the HA version;
    missing values are normalized to empty strings.
    """

    id: str = ""
    entity_id: str = ""
    unique_id: str = ""
    alias: str = ""

    @field_validator("id", "entity_id", "unique_id", "alias", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def identifiers(self) -> tuple[str, ...]:
        """Non-empty identifiers that can match a local automation id."""
        return tuple(v for v in (self.id, self.unique_id, self.entity_id) if v)

    def describe(self) -> str:
        return (
            f"id='{self.id}' entity_id='{self.entity_id}' "
            f"unique_id='{self.unique_id}' alias='{self.alias}'"
        )


@dataclass(frozen=True)
class DeleteStrategy:
    """A record field paired with the endpoint that deletes by it."""

    field: str
    path_template: str
    label: str

    def path_for(self, record: RemoteAutomationRecord) -> str | None:
        value = getattr(record, self.field)
        if not value:
            return None
        return self.path_template.format(value)


BY_CONFIG_ID = DeleteStrategy("id", "/api/config/automation/config/{}", "config id")
BY_ENTITY_ID = DeleteStrategy("entity_id", "/api/automations/{}", "entity_id")
BY_LEGACY_CONFIG_ID = DeleteStrategy("id", "/api/config/automation/{}", "legacy config id")

# Orphans carry both ids; a single self-deleting automation only knows its config id
ORPHAN_DELETE_STRATEGIES: tuple[DeleteStrategy, ...] = (BY_CONFIG_ID, BY_ENTITY_ID)
SINGLE_ID_DELETE_STRATEGIES: tuple[DeleteStrategy, ...] = (BY_CONFIG_ID, BY_LEGACY_CONFIG_ID)


def _records_from_states(states: list[Any]) -> list[RemoteAutomationRecord]:
    """Build records from /api/states, keeping only automation entities."""
    records = []
    for state in states:
        if not isinstance(state, dict):
            continue
        entity_id = state.get("entity_id") or ""
        if not entity_id.startswith("automation."):
            continue
        attrs = state.get("attributes") or {}
        records.append(
            RemoteAutomationRecord(
                id=attrs.get("id"),
                entity_id=entity_id,
                alias=attrs.get("friendly_name"),
            )
        )
    return records


def parse_automation_records(path: str, data: Any) -> list[RemoteAutomationRecord]:
    """Turn a listing payload into records.

    Args:
        path: Listing endpoint the payload came from
        data: Decoded JSON payload

    Returns:
        Parsed records (empty when the payload is unusable)
    """
    if not isinstance(data, list):
        return []
    if path == "/api/states":
        return _records_from_states(data)
    return [RemoteAutomationRecord.model_validate(item) for item in data if isinstance(item, dict)]


class AutomationMixin:
    """Mixin providing automation registry operations."""

    async def list_automation_records(self) -> list[RemoteAutomationRecord]:
        """List automations known to the HA registry.

        Returns:
            Non-empty list of records

        Raises:
            HAClientError: If no listing source returns usable data
        """
        for path in LISTING_SOURCES:
            try:
                data = await self._request("GET", path)
            except HAClientError as e:
                logger.warning("Listing via %s failed: %s", path, e)
                continue

            records = parse_automation_records(path, data)
            if records:
                logger.debug("Read %d automation records from %s", len(records), path)
                return records
            logger.info("%s returned no automations, trying next source", path)

        raise HAClientError("No automation list returned from HA.", "list_automations")

    async def delete_path(self, path: str) -> int | None:
        """Issue a DELETE and return its status code (None on transport failure)."""
        try:
            response = await self._send("DELETE", path)
        except HAClientError as e:
            logger.warning("DELETE %s failed: %s", path, e)
            return None
        logger.debug("DELETE %s -> %s %s", path, response.status_code, response.text)
        return response.status_code

    async def delete_automation(
        self,
        record: RemoteAutomationRecord,
        strategies: tuple[DeleteStrategy, ...] = ORPHAN_DELETE_STRATEGIES,
    ) -> DeleteStrategy | None:
        """Delete an automation, trying each strategy in order.

        Strategies whose field is empty on the record are skipped. The
        first strategy reporting success stops the sequence.

        Args:
            record: Automation to delete
            strategies: Ordered (field, endpoint) strategies

        Returns:
            The strategy that succeeded, or None if all failed
        """
        for strategy in strategies:
            path = strategy.path_for(record)
            if path is None:
                continue
            logger.info("Attempting delete via %s", path)
            status = await self.delete_path(path)
            if status in SUCCESS_CODES:
                logger.info("Deleted by %s.", strategy.label)
                return strategy
            logger.warning("Delete by %s failed. Status: %s", strategy.label, status)
        return None

    async def reload_automations(self) -> bool:
        """Ask HA to re-read its automation definitions.

        Returns:
            True if HA acknowledged the reload
        """
        logger.info("Reloading Home Assistant automations...")
        try:
            response = await self._send("POST", RELOAD_PATH)
        except HAClientError as e:
            logger.error("Failed to reload automations: %s", e)
            return False
        if response.status_code in SUCCESS_CODES:
            logger.info("Home Assistant automations reloaded.")
            return True
        logger.error("Failed to reload automations. Status: %s", response.status_code)
        return False
