"""
Application Layer - Use cases and orchestration.

This layer contains:
- sync/: Local folder to Linear project reconciliation
"""

from .sync import PushResult, ReconciliationResult, Reconciler, reconcile


__all__ = ["PushResult", "ReconciliationResult", "Reconciler", "reconcile"]
