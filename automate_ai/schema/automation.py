"""Pydantic model of one entry in automations.yaml.

The model is compiled to JSON Schema and used to check what Gemini
generates before it is appended to the file. Trigger, condition and
action blocks stay loosely typed: each may be one mapping or a list of
them, and their inner keys vary per integration.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# One block or a list of blocks
Blocks = list[dict[str, Any]] | dict[str, Any]


class Mode(str, Enum):
    """What HA does when an automation fires while it is still running."""

    SINGLE = "single"
    RESTART = "restart"
    QUEUED = "queued"
    PARALLEL = "parallel"


class HAAutomation(BaseModel):
    """A single automation as written to automations.yaml.

    Expects singular block keys; plural 2024.1+ keys are mapped first
    by the validator.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int | None = Field(default=None, description="Unique id, epoch ms for generated ones")
    alias: str | None = Field(default=None, description="Name shown in the HA UI")
    description: str | None = None
    trigger: Blocks = Field(..., description="What starts the automation")
    condition: Blocks | None = Field(default=None, description="Checks that must pass")
    action: Blocks = Field(..., description="What the automation does")
    mode: Mode = Field(default=Mode.SINGLE)
    max: int | None = Field(default=None, ge=1, description="Run limit for queued/parallel")
    max_exceeded: str | None = None
    variables: dict[str, Any] | None = None
    initial_state: bool | None = None
