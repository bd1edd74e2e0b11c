"""Natural-language to automation YAML generation.

Two Gemini calls per command: one classifies the intent (temporary or
standard), the second writes the automation using the matching prompt.
The raw model output is then cleaned into appendable YAML.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from automate_ai.exceptions import AmbiguousCommandError, LLMError
from automate_ai.prompts import (
    AUTOMATION,
    INTENT_DETECTION,
    TEMPORARY_AUTOMATION,
    load_prompt,
)

logger = logging.getLogger(__name__)

TIMESTAMP_PLACEHOLDER = "TIMESTAMP_PLACEHOLDER"
AMBIGUOUS = "AMBIGUOUS"

_FENCE = re.compile(r"^```(?:yaml)?")
_COMMA_NO_SPACE = re.compile(r",([^ ])")


class Intent(str, Enum):
    """What kind of automation the user asked for."""

    TEMPORARY = "TEMPORARY"
    STANDARD = "STANDARD"


@dataclass
class GeneratedAutomation:
    """Cleaned automation YAML ready to append."""

    yaml: str
    intent: Intent
    automation_id: str

    @property
    def temporary(self) -> bool:
        return self.intent is Intent.TEMPORARY


def current_timestamp_ms() -> str:
    """Epoch milliseconds, the id format HA's UI editor uses."""
    return str(int(time.time() * 1000))


def clean_generated_yaml(text: str, timestamp: str) -> str:
    """Turn raw model output into appendable YAML.

    Strips Markdown code fences, fills in the id placeholder, adds a space
    after commas that lack one, trims trailing whitespace, and drops blank
    lines.

    Args:
        text: Raw model output
        timestamp: Value substituted for TIMESTAMP_PLACEHOLDER

    Returns:
        Cleaned YAML text without a trailing newline
    """
    lines = []
    for line in text.splitlines():
        line = _FENCE.sub("", line)
        line = line.replace(TIMESTAMP_PLACEHOLDER, timestamp)
        line = _COMMA_NO_SPACE.sub(r", \1", line).rstrip()
        if line.strip():
            lines.append(line)
    return "\n".join(lines)


def _message_text(content: Any) -> str:
    """Flatten a chat message's content into plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return str(content)


class AutomationGenerator:
    """Generates automation YAML from a natural-language command."""

    def __init__(
        self,
        llm: BaseChatModel,
        clock: Callable[[], str] = current_timestamp_ms,
    ):
        """Initialize generator.

        Args:
            llm: Chat model used for both calls
            clock: Produces the id substituted for TIMESTAMP_PLACEHOLDER
        """
        self.llm = llm
        self._clock = clock

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise LLMError(f"Failed to call Gemini API: {e}", provider="google") from e

        content = response.content if hasattr(response, "content") else response
        text = _message_text(content).strip()
        if not text:
            raise LLMError(
                "Received an empty or invalid response from the Gemini API.", provider="google"
            )
        return text

    async def detect_intent(self, command: str) -> Intent:
        """Classify a command as a temporary or a standard automation."""
        answer = await self._complete(load_prompt(INTENT_DETECTION, command))
        words = answer.strip("`*").split()
        is_temporary = bool(words) and words[0].upper() == Intent.TEMPORARY.value
        intent = Intent.TEMPORARY if is_temporary else Intent.STANDARD
        logger.info("Detected intent: %s", answer)
        return intent

    async def generate(self, command: str, intent: Intent | None = None) -> GeneratedAutomation:
        """Generate cleaned automation YAML for a command.

        Args:
            command: Natural-language request
            intent: Skip detection when already known

        Returns:
            The generated automation

        Raises:
            AmbiguousCommandError: If the model could not produce a single automation
            LLMError: If a Gemini call fails or returns nothing
        """
        if intent is None:
            logger.info("Detecting user intent...")
            intent = await self.detect_intent(command)

        prompt_name = TEMPORARY_AUTOMATION if intent is Intent.TEMPORARY else AUTOMATION
        if intent is Intent.TEMPORARY:
            logger.info("Detected temporary automation intent. Creating temporary automation.")

        logger.info("Generating automation YAML...")
        raw = await self._complete(load_prompt(prompt_name, command))

        automation_id = self._clock()
        cleaned = clean_generated_yaml(raw, automation_id)
        if cleaned.strip() == AMBIGUOUS:
            raise AmbiguousCommandError(
                "The command was ambiguous. Please be more specific.", provider="google"
            )
        if not cleaned:
            raise LLMError("Gemini returned no automation YAML.", provider="google")

        return GeneratedAutomation(yaml=cleaned, intent=intent, automation_id=automation_id)
