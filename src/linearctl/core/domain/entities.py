"""
Domain Entities - Local folders, remote projects and teams.

LocalFolder is recomputed from the filesystem on every run.
RemoteProject and Team are read-only snapshots of Linear state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LocalFolder:
    """
    An immediate subdirectory of the sync root.

    The name is the directory basename and is what gets matched
    against remote project names.
    """

    name: str
    path: str
    has_git: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "path": self.path, "has_git": self.has_git}


@dataclass(frozen=True)
class RemoteProject:
    """A Linear project as returned by the API."""

    id: str
    name: str
    team_id: str | None = None
    url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any], team_id: str | None = None) -> RemoteProject:
        """Build from a GraphQL project node."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            team_id=team_id,
            url=data.get("url"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"id": self.id, "name": self.name, "team_id": self.team_id, "url": self.url}


@dataclass(frozen=True)
class Team:
    """A Linear team."""

    id: str
    key: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Team:
        """Build from a GraphQL team node."""
        return cls(id=data.get("id", ""), key=data.get("key", ""), name=data.get("name", ""))

    def matches(self, ref: str) -> bool:
        """
        Check whether a user-supplied reference names this team.

        The id and key are compared exactly (keys case-insensitively),
        the display name case-insensitively.
        """
        ref = ref.strip()
        return (
            ref == self.id
            or ref.upper() == self.key.upper()
            or ref.casefold() == self.name.casefold()
        )
