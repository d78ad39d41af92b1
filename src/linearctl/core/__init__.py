"""
Core layer - Domain model, ports and exceptions.

Nothing in here performs I/O; adapters implement the ports.
"""

from .domain import EntryState, LocalFolder, MatchMode, RemoteProject, SyncMode, Team
from .exceptions import LinearCtlError


__all__ = [
    "EntryState",
    "LinearCtlError",
    "LocalFolder",
    "MatchMode",
    "RemoteProject",
    "SyncMode",
    "Team",
]
