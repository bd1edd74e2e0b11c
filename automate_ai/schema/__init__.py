"""Structural validation of generated automation YAML.

Usage::

    from automate_ai.schema import validate_automation_yaml

    result = validate_automation_yaml(yaml_string)
    if not result.valid:
        for error in result.errors:
            print(error)
"""

from __future__ import annotations

from automate_ai.schema.automation import HAAutomation, Mode
from automate_ai.schema.core import (
    ValidationError,
    ValidationResult,
    validate_automation_yaml,
)

__all__ = [
    "HAAutomation",
    "Mode",
    "ValidationError",
    "ValidationResult",
    "validate_automation_yaml",
]
