"""
Project Tracker Port - Abstract interface for the remote project service.

The reconciler only needs two capabilities, listing and creating
projects, so they are separate ports. ProjectTrackerPort bundles them
with the team lookups the CLI needs.

Implementations:
- LinearAdapter: Linear GraphQL API
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from linearctl.core.domain.entities import RemoteProject, Team
from linearctl.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    RateLimitError,
    ResourceNotFoundError,
    TeamNotFoundError,
    TrackerError,
    TransientError,
)


__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ProjectCreatorPort",
    "ProjectListerPort",
    "ProjectTrackerPort",
    "RateLimitError",
    "ResourceNotFoundError",
    "TeamNotFoundError",
    "TrackerError",
    "TransientError",
]


class ProjectListerPort(ABC):
    """Read access to remote projects."""

    @abstractmethod
    def list_projects(self, team_id: str | None = None) -> list[RemoteProject]:
        """
        List remote projects in listing order.

        Args:
            team_id: Restrict to projects of this team. None lists the
                whole workspace.

        Raises:
            TrackerError: If the listing fails.
        """
        ...


class ProjectCreatorPort(ABC):
    """Write access to remote projects. Calls are not idempotent."""

    @abstractmethod
    def create_project(
        self,
        name: str,
        team_id: str,
        description: str | None = None,
    ) -> RemoteProject:
        """
        Create one remote project.

        Raises:
            TrackerError: If the service rejects or fails the request.
        """
        ...


class ProjectTrackerPort(ProjectListerPort, ProjectCreatorPort):
    """Full remote surface used by the CLI."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'Linear')."""
        ...

    @abstractmethod
    def list_teams(self) -> list[Team]:
        """List teams visible to the API key."""
        ...

    @abstractmethod
    def resolve_team(self, ref: str) -> Team:
        """
        Resolve a team id, key or name to a Team.

        Raises:
            TeamNotFoundError: If nothing matches.
        """
        ...

    @abstractmethod
    def test_connection(self) -> bool:
        """Check that the API key is accepted."""
        ...
