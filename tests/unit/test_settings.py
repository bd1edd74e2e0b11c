"""Unit tests for application settings."""

from pathlib import Path

import pytest
from pydantic import SecretStr

from automate_ai.exceptions import ConfigurationError
from automate_ai.settings import (
    PLACEHOLDER_API_KEY,
    PLACEHOLDER_AUTOMATIONS_YAML,
    PLACEHOLDER_HA_URL,
    Settings,
    get_settings,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove settings variables that may leak in from the host."""
    for name in (
        "HA_URL",
        "HASS_URL",
        "HA_TOKEN",
        "HASS_TOKEN",
        "GOOGLE_API_KEY",
        "GEMINI_API_KEY",
        "AUTOMATIONS_YAML",
        "LLM_MODEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsFromEnvironment:
    """Tests for environment loading."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.ha_url == ""
        assert settings.llm_model == "gemini-2.5-flash"
        assert settings.llm_auto_select_model is True
        assert settings.delete_log_file == "delete_automation.log"
        assert settings.log_level == "INFO"

    def test_gemini_api_key_alias(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "from-env")

        settings = Settings(_env_file=None)

        assert settings.require_google_api_key() == "from-env"

    def test_hass_aliases(self, clean_env):
        clean_env.setenv("HASS_URL", "http://ha:8123")
        clean_env.setenv("HASS_TOKEN", "tok")

        settings = Settings(_env_file=None)

        assert settings.ha_configured

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "HA_URL=http://ha:8123\nHA_TOKEN=tok\nAUTOMATIONS_YAML=/config/automations.yaml\n",
            encoding="utf-8",
        )

        settings = Settings(_env_file=env_file)

        assert settings.ha_url == "http://ha:8123"
        assert settings.automations_path == Path("/config/automations.yaml")

    def test_token_not_shown_in_repr(self, test_settings):
        assert "test-token" not in repr(test_settings)


class TestRequirements:
    """Tests for the require_* helpers."""

    def test_automations_path(self, test_settings, automations_yaml):
        assert test_settings.require_automations_path() == automations_yaml

    @pytest.mark.parametrize("value", ["", "   ", PLACEHOLDER_AUTOMATIONS_YAML])
    def test_automations_path_unset(self, test_settings, value):
        settings = test_settings.model_copy(update={"automations_yaml": value})

        with pytest.raises(ConfigurationError, match="AUTOMATIONS_YAML"):
            settings.require_automations_path()

    @pytest.mark.parametrize("value", ["", PLACEHOLDER_API_KEY])
    def test_api_key_unset(self, test_settings, value):
        settings = test_settings.model_copy(update={"google_api_key": SecretStr(value)})

        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            settings.require_google_api_key()

    def test_ha_configured(self, test_settings):
        test_settings.require_ha()

        assert test_settings.ha_configured

    @pytest.mark.parametrize(
        ("url", "token"),
        [("", "tok"), ("http://ha:8123", ""), (PLACEHOLDER_HA_URL, "tok")],
    )
    def test_ha_not_configured(self, test_settings, url, token):
        settings = test_settings.model_copy(
            update={"ha_url": url, "ha_token": SecretStr(token)}
        )

        assert not settings.ha_configured
        with pytest.raises(ConfigurationError, match="HA_URL or HA_TOKEN"):
            settings.require_ha()


class TestGetSettings:
    """Tests for get_settings caching."""

    def test_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_invalid_value_is_a_configuration_error(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "chatty")
        get_settings.cache_clear()
        try:
            with pytest.raises(ConfigurationError, match="Invalid configuration"):
                get_settings()
        finally:
            get_settings.cache_clear()
