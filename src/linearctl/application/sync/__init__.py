"""
Sync module - Folder-to-project reconciliation.
"""

from .reconciler import (
    DESCRIPTION_TEMPLATE,
    FailedCreation,
    MatchedEntry,
    PushResult,
    ReconciliationResult,
    Reconciler,
    reconcile,
)


__all__ = [
    "DESCRIPTION_TEMPLATE",
    "FailedCreation",
    "MatchedEntry",
    "PushResult",
    "ReconciliationResult",
    "Reconciler",
    "reconcile",
]
