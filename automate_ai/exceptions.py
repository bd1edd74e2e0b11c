"""automate-ai exception hierarchy.

Everything the CLI treats as a clean failure (exit code 1, red message)
derives from AutomateError. Each instance gets a correlation id that is
also logged, so a terminal message can be matched to the delete log.

Usage:
    from automate_ai.exceptions import HAClientError

    try:
        records = await client.list_automation_records()
    except HAClientError as e:
        logger.error("Listing failed (%s): %s", e.correlation_id, e)
"""

import uuid
from pathlib import Path
from typing import Any


class AutomateError(Exception):
    """Base class for automate-ai failures."""

    def __init__(self, message: str, *, correlation_id: str | None = None):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        super().__init__(message)


class ConfigurationError(AutomateError):
    """A required setting is missing or still the example placeholder."""

    pass


class AutomationFileError(AutomateError):
    """automations.yaml is missing, unreadable, malformed, or cannot be rewritten."""

    def __init__(self, message: str, *, path: Path | str | None = None, **kwargs):
        self.path = Path(path) if path is not None else None
        super().__init__(message, **kwargs)


class HAClientError(AutomateError):
    """A Home Assistant REST call failed or returned nothing usable.

    ``tool`` names the client operation, ``details`` carries request context.
    """

    def __init__(
        self,
        message: str,
        tool: str | None = None,
        details: dict[str, Any] | None = None,
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ):
        self.tool = tool
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message, correlation_id=correlation_id)


class LLMError(AutomateError):
    """Gemini could not be reached, picked, or returned no answer."""

    def __init__(self, message: str, *, provider: str | None = None, **kwargs):
        self.provider = provider
        super().__init__(message, **kwargs)


class AmbiguousCommandError(LLMError):
    """The model could not turn the command into a single automation."""

    pass


class AutomationValidationError(AutomateError):
    """Generated automation YAML failed the syntax or structure check."""

    def __init__(self, message: str, *, errors: list[str] | None = None, **kwargs):
        self.errors = errors or []
        super().__init__(message, **kwargs)
