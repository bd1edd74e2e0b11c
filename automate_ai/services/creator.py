"""Automation creation from natural language.

Generates YAML with Gemini, validates it, appends it to automations.yaml
and asks HA to reload.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from automate_ai.automations import AutomationsFile
from automate_ai.exceptions import AutomationValidationError
from automate_ai.ha import HAClient
from automate_ai.llm import AutomationGenerator, GeneratedAutomation, get_llm, resolve_model
from automate_ai.schema import validate_automation_yaml
from automate_ai.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class CreationResult:
    """Outcome of creating one automation."""

    automation: GeneratedAutomation
    reloaded: bool | None = None


async def build_generator(settings: Settings) -> AutomationGenerator:
    """Create a generator bound to the configured (or an available) Gemini model.

    Raises:
        ConfigurationError: If GEMINI_API_KEY is not set
        LLMError: If no Gemini model can be selected
    """
    api_key = settings.require_google_api_key()
    model = settings.llm_model
    if settings.llm_auto_select_model:
        model = await resolve_model(api_key, model)
    logger.debug("Using Gemini model %s", model)
    return AutomationGenerator(get_llm(model=model, settings=settings))


class AutomationCreator:
    """Runs the command → YAML → file → reload pipeline."""

    def __init__(
        self,
        generator: AutomationGenerator,
        automations_file: AutomationsFile,
        ha_client: HAClient | None = None,
    ):
        """Initialize creator.

        Args:
            generator: Produces the automation YAML
            automations_file: File the automation is appended to
            ha_client: HA client for the reload, or None to skip it
        """
        self.generator = generator
        self.automations_file = automations_file
        self.ha = ha_client

    async def create(
        self,
        command: str,
        on_generated: Callable[[GeneratedAutomation], None] | None = None,
    ) -> CreationResult:
        """Create an automation from a natural-language command.

        Args:
            command: What the automation should do
            on_generated: Called with the cleaned YAML before validation

        Returns:
            The generated automation and whether HA reloaded

        Raises:
            AmbiguousCommandError: If the model could not produce a single automation
            AutomationValidationError: If the generated YAML is invalid
            AutomationFileError: If the automations file is missing
            LLMError: If a Gemini call fails
        """
        generated = await self.generator.generate(command)
        if on_generated is not None:
            on_generated(generated)

        result = validate_automation_yaml(generated.yaml)
        if not result.valid:
            errors = [str(e) for e in result.errors]
            for error in errors:
                logger.error("Generated YAML: %s", error)
            raise AutomationValidationError(
                "Generated YAML has syntax errors. Aborting.", errors=errors
            )
        logger.info("Generated YAML syntax is valid.")

        self.automations_file.append(generated.yaml)

        reloaded = None
        if self.ha is None:
            logger.info("HA_URL or HA_TOKEN not configured. Skipping automation reload.")
        else:
            reloaded = await self.ha.reload_automations()

        if generated.temporary:
            logger.info(
                "Temporary automation created. "
                "The automation will trigger its own deletion upon completion."
            )
        return CreationResult(automation=generated, reloaded=reloaded)
