"""HA client facade.

Combines the base HTTP client with the automation registry mixin.
"""

from automate_ai.ha.automations import AutomationMixin
from automate_ai.ha.base import BaseHAClient, HAClientConfig
from automate_ai.settings import Settings, get_settings

__all__ = ["HAClient", "HAClientConfig", "get_ha_client"]


class HAClient(BaseHAClient, AutomationMixin):
    """Client for the Home Assistant REST API.

    Usage:
        async with get_ha_client() as client:
            records = await client.list_automation_records()
            await client.reload_automations()
    """

    pass


def get_ha_client(settings: Settings | None = None) -> HAClient:
    """Create an HA client from settings.

    Args:
        settings: Settings to read the connection from (defaults to get_settings())

    Returns:
        New HAClient instance
    """
    return HAClient(config=HAClientConfig.from_settings(settings or get_settings()))
