"""Gemini access and automation generation.

Re-exports the public API.
"""

from automate_ai.llm.factory import choose_model, get_llm, list_models, resolve_model
from automate_ai.llm.generator import (
    AutomationGenerator,
    GeneratedAutomation,
    Intent,
    clean_generated_yaml,
)

__all__ = [
    "AutomationGenerator",
    "GeneratedAutomation",
    "Intent",
    "choose_model",
    "clean_generated_yaml",
    "get_llm",
    "list_models",
    "resolve_model",
]
