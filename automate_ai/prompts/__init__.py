"""Prompt templates for the two Gemini calls.

Each template is a markdown file in this package; ``{user_command}`` marks
where the operator's request goes.
"""

from functools import lru_cache
from pathlib import Path

PROMPT_DIR = Path(__file__).parent

INTENT_DETECTION = "intent_detection"
AUTOMATION = "automation"
TEMPORARY_AUTOMATION = "temporary_automation"

# Templates contain Jinja and YAML braces, so str.format() is not usable
USER_COMMAND_MARKER = "{user_command}"


@lru_cache(maxsize=8)
def _template(name: str) -> str:
    path = PROMPT_DIR / f"{name}.md"
    if not path.is_file():
        raise FileNotFoundError(f"No prompt named '{name}' in {PROMPT_DIR}")
    return path.read_text(encoding="utf-8")


def load_prompt(name: str, user_command: str) -> str:
    """Render a prompt for a request.

    Args:
        name: One of INTENT_DETECTION, AUTOMATION, TEMPORARY_AUTOMATION
        user_command: The natural-language request

    Raises:
        FileNotFoundError: For an unknown prompt name
    """
    return _template(name).replace(USER_COMMAND_MARKER, user_command)
