"""Automation creation, reconciliation and deletion services."""

from automate_ai.services.creator import AutomationCreator, CreationResult, build_generator
from automate_ai.services.deleter import AutomationDeleter, DeletionMethod, DeletionOutcome
from automate_ai.services.reconciler import (
    ConfirmDeletion,
    Reconciler,
    ReconcileReport,
    find_orphans,
)

__all__ = [
    "AutomationCreator",
    "AutomationDeleter",
    "ConfirmDeletion",
    "CreationResult",
    "DeletionMethod",
    "DeletionOutcome",
    "ReconcileReport",
    "Reconciler",
    "build_generator",
    "find_orphans",
]
