"""automate-ai configuration.

Read from environment variables or a .env file in the working directory.
Values copied from .env.example that were never filled in count as unset.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from automate_ai.exceptions import ConfigurationError

# Values shipped in the example configuration; treated as unset.
PLACEHOLDER_API_KEY = "YOUR_GEMINI_API_KEY"
PLACEHOLDER_AUTOMATIONS_YAML = "/path/to/your/automations.yaml"
PLACEHOLDER_HA_URL = "http://your-home-assistant.local:8123"


class Settings(BaseSettings):
    """Connection details, Gemini options and file locations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,  # Allow both field name and alias
    )

    # Home Assistant
    ha_url: str = Field(
        default="",
        description="Home Assistant instance URL",
        validation_alias=AliasChoices("ha_url", "hass_url"),
    )
    ha_token: SecretStr = Field(
        default=SecretStr(""),
        description="Home Assistant long-lived access token",
        validation_alias=AliasChoices("ha_token", "hass_token"),
    )
    ha_timeout: int = Field(
        default=30,
        ge=1,
        description="Request timeout in seconds for Home Assistant calls",
    )

    # Google Gemini
    google_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google API key for Gemini",
        validation_alias=AliasChoices("google_api_key", "gemini_api_key"),
    )
    llm_model: str = Field(
        default="gemini-2.5-flash",
        description="Preferred Gemini model name",
    )
    llm_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="LLM temperature for generation",
    )
    llm_auto_select_model: bool = Field(
        default=True,
        description="Pick another available Gemini model if the preferred one is missing",
    )

    # Local files
    automations_yaml: str = Field(
        default="",
        description="Path to the Home Assistant automations.yaml file",
    )
    delete_log_file: str = Field(
        default="delete_automation.log",
        description="Log file written by the self-deletion command",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )

    @property
    def ha_configured(self) -> bool:
        """Whether enough HA connection details are set to call the API."""
        url = self.ha_url.strip()
        return bool(url and self.ha_token.get_secret_value() and url != PLACEHOLDER_HA_URL)

    @property
    def automations_path(self) -> Path | None:
        """Path to automations.yaml, or None while unset or still the placeholder."""
        raw = self.automations_yaml.strip()
        if not raw or raw == PLACEHOLDER_AUTOMATIONS_YAML:
            return None
        return Path(raw).expanduser()

    def require_automations_path(self) -> Path:
        """Return the automations file path or raise ConfigurationError."""
        path = self.automations_path
        if path is None:
            raise ConfigurationError("AUTOMATIONS_YAML is not set correctly.")
        return path

    def require_google_api_key(self) -> str:
        """Return the Gemini API key or raise ConfigurationError."""
        key = self.google_api_key.get_secret_value().strip()
        if not key or key == PLACEHOLDER_API_KEY:
            raise ConfigurationError("GEMINI_API_KEY is not set correctly.")
        return key

    def require_ha(self) -> None:
        """Raise ConfigurationError unless HA URL and token are configured."""
        if not self.ha_configured:
            raise ConfigurationError("HA_URL or HA_TOKEN not configured.")


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read once.

    Raises:
        ConfigurationError: If an environment or .env value is invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
