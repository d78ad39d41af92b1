"""
Domain layer - Entities and enums for local-to-Linear reconciliation.
"""

from .entities import LocalFolder, RemoteProject, Team
from .enums import EntryState, MatchMode, SyncMode


__all__ = [
    "EntryState",
    "LocalFolder",
    "MatchMode",
    "RemoteProject",
    "SyncMode",
    "Team",
]
