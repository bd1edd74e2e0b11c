"""Shared test fixtures for automate-ai.

Provides settings, a sample automations.yaml, and an HA client wired to
an httpx.MockTransport so no test reaches a real Home Assistant.
"""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from pydantic import SecretStr

from automate_ai.ha import HAClient, HAClientConfig
from automate_ai.settings import Settings

# =============================================================================
# SAMPLE DATA
# =============================================================================

FIRST_BLOCK = """- id: '1718000000001'
  alias: Porch light at sunset
  description: ''
  triggers:
  - trigger: sun
    event: sunset
  conditions: []
  actions:
  - action: light.turn_on
    target:
      entity_id: light.porch
  mode: single
"""

SECOND_BLOCK = """- id: '1718000000002'
  alias: Kitchen light off
  description: Turn the kitchen light off at 23:00
  triggers:
  - trigger: time
    at: '23:00:00'
  conditions: []
  actions:
  - action: light.turn_off
    target:
      entity_id: light.kitchen
  mode: single
"""

THIRD_BLOCK = """- id: '1718000000003'
  alias: Hallway motion
  description: ''
  triggers:
  - trigger: state
    entity_id: binary_sensor.hallway_motion
    to: 'on'
  conditions: []
  actions:
  - action: light.turn_on
    target:
      entity_id: light.hallway
  mode: single
"""

SAMPLE_AUTOMATIONS = f"{FIRST_BLOCK}\n{SECOND_BLOCK}\n{THIRD_BLOCK}"


@pytest.fixture
def automation_blocks() -> tuple[str, str, str]:
    """The three automation blocks making up the sample file, in order."""
    return FIRST_BLOCK, SECOND_BLOCK, THIRD_BLOCK


@pytest.fixture
def sample_automations() -> str:
    """Full text of the sample automations.yaml."""
    return SAMPLE_AUTOMATIONS


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def automations_yaml(tmp_path: Path) -> Path:
    """A temporary automations.yaml holding three automations."""
    path = tmp_path / "automations.yaml"
    path.write_text(SAMPLE_AUTOMATIONS, encoding="utf-8")
    return path


@pytest.fixture
def test_settings(automations_yaml: Path) -> Settings:
    """Provide test settings with safe defaults."""
    return Settings(
        _env_file=None,
        ha_url="http://ha.local:8123",
        ha_token=SecretStr("test-token"),
        google_api_key=SecretStr("test-api-key"),
        llm_model="gemini-2.5-flash",
        automations_yaml=str(automations_yaml),
        delete_log_file=str(automations_yaml.parent / "delete_automation.log"),
    )


@pytest.fixture
def mock_settings(test_settings: Settings, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Mock get_settings() to return test settings."""
    from automate_ai import settings

    monkeypatch.setattr(settings, "get_settings", lambda: test_settings)
    return test_settings


# =============================================================================
# HOME ASSISTANT
# =============================================================================


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_ha_client() -> Callable[[Handler], HAClient]:
    """Build an HAClient whose requests go to the given handler."""

    def _make(handler: Handler) -> HAClient:
        config = HAClientConfig(ha_url="http://ha.local:8123", ha_token="test-token")
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HAClient(config=config, http_client=http_client)

    return _make
