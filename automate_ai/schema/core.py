"""Checks generated automation YAML before it reaches automations.yaml.

Two passes: PyYAML must parse the text, then every automation in it
must satisfy the JSON Schema of :class:`HAAutomation` (checked with
jsonschema so all problems are reported at once, with their location).
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import Any

import jsonschema  # type: ignore[import-untyped,unused-ignore]
import yaml
from pydantic import BaseModel, Field

from automate_ai.schema.automation import HAAutomation

# HA 2024.1 renamed the block keys; the schema uses the old names
_PLURAL_KEYS = {
    "triggers": "trigger",
    "conditions": "condition",
    "actions": "action",
}


class ValidationError(BaseModel):
    """One problem found in the generated YAML.

    ``path`` locates it, e.g. ``[0].mode``; empty for document-level problems.
    """

    path: str = ""
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class ValidationResult(BaseModel):
    """Outcome of :func:`validate_automation_yaml`."""

    valid: bool
    errors: list[ValidationError] = Field(default_factory=list)
    # Parsed automations with plural keys mapped to singular ones
    automations: list[dict[str, Any]] = Field(default_factory=list)


def _failed(message: str) -> ValidationResult:
    return ValidationResult(valid=False, errors=[ValidationError(message=message)])


@lru_cache
def get_automation_json_schema() -> dict[str, Any]:
    """JSON Schema for a single automation, compiled once."""
    schema = HAAutomation.model_json_schema()
    schema.setdefault("additionalProperties", True)
    return schema


def validate_automation_yaml(content: str) -> ValidationResult:
    """Validate YAML holding one automation mapping or a list of them.

    Args:
        content: Cleaned model output

    Returns:
        Result listing every problem found; ``valid`` only when there are none
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        return _failed(f"Invalid YAML syntax: {exc}")

    if isinstance(data, dict):
        entries = [("", data)]
    elif isinstance(data, list) and data:
        entries = [(f"[{i}]", item) for i, item in enumerate(data)]
    else:
        return _failed(f"Expected an automation mapping or list, got {type(data).__name__}")

    schema = get_automation_json_schema()
    validator = jsonschema.validators.validator_for(schema)(schema)

    result = ValidationResult(valid=True)
    for prefix, item in entries:
        if not isinstance(item, dict):
            message = f"Expected a mapping, got {type(item).__name__}"
            result.errors.append(ValidationError(path=prefix, message=message))
            continue
        automation = _singular_keys(item)
        result.automations.append(automation)
        for error in validator.iter_errors(automation):
            location = ".".join(p for p in (prefix, _json_path(error.absolute_path)) if p)
            result.errors.append(ValidationError(path=location, message=error.message))

    result.valid = not result.errors
    return result


def _json_path(segments: Iterable[Any]) -> str:
    """``["action", 0, "target"]`` -> ``action[0].target``."""
    path = ""
    for segment in segments:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _singular_keys(automation: dict[str, Any]) -> dict[str, Any]:
    """Copy of the automation using trigger/condition/action keys."""
    normalized = dict(automation)
    for plural, singular in _PLURAL_KEYS.items():
        if plural in normalized and singular not in normalized:
            normalized[singular] = normalized.pop(plural)
    return normalized
