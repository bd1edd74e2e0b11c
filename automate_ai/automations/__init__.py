"""Local automations.yaml store."""

from automate_ai.automations.store import (
    AutomationsFile,
    extract_local_ids,
    find_automation_spans,
    remove_automation_text,
)

__all__ = [
    "AutomationsFile",
    "extract_local_ids",
    "find_automation_spans",
    "remove_automation_text",
]
