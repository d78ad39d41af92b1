"""
Linear Adapter - Implements ProjectTrackerPort for Linear.

Translates between Linear's GraphQL shapes and the domain entities.
"""

import logging
from typing import Any

from linearctl.core.domain.entities import RemoteProject, Team
from linearctl.core.ports.config_provider import LinearConfig
from linearctl.core.ports.project_tracker import ProjectTrackerPort
from linearctl.core.exceptions import TeamNotFoundError, TrackerError

from .client import LinearApiClient


TEAMS_QUERY = """
query Teams($after: String) {
  teams(first: 100, after: $after) {
    nodes { id key name }
    pageInfo { hasNextPage endCursor }
  }
}
"""

TEAM_PROJECTS_QUERY = """
query TeamProjects($teamId: String!, $after: String) {
  team(id: $teamId) {
    id
    projects(first: 100, after: $after) {
      nodes { id name url }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

PROJECTS_QUERY = """
query Projects($after: String) {
  projects(first: 100, after: $after) {
    nodes { id name url }
    pageInfo { hasNextPage endCursor }
  }
}
"""

PROJECT_CREATE_MUTATION = """
mutation ProjectCreate($input: ProjectCreateInput!) {
  projectCreate(input: $input) {
    success
    project { id name url }
  }
}
"""


class LinearAdapter(ProjectTrackerPort):
    """
    Linear implementation of the ProjectTrackerPort.

    Listing follows the GraphQL cursor until exhausted so large
    workspaces are reconciled against their full project set.
    """

    MAX_PAGES = 50

    def __init__(
        self,
        config: LinearConfig,
        dry_run: bool = True,
        client: LinearApiClient | None = None,
    ):
        """
        Initialize the Linear adapter.

        Args:
            config: Linear connection settings
            dry_run: If True, creation calls are not sent
            client: Pre-built client (mainly for tests)
        """
        self.config = config
        self._dry_run = dry_run
        self.logger = logging.getLogger("LinearAdapter")
        self._client = client or LinearApiClient(
            api_key=config.api_key,
            api_url=config.api_url,
            dry_run=dry_run,
        )
        self._teams: list[Team] | None = None

    # -------------------------------------------------------------------------
    # ProjectTrackerPort Implementation - Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Linear"

    @property
    def client(self) -> LinearApiClient:
        return self._client

    def test_connection(self) -> bool:
        return self._client.test_connection()

    # -------------------------------------------------------------------------
    # Teams
    # -------------------------------------------------------------------------

    def list_teams(self) -> list[Team]:
        if self._teams is None:
            nodes = self._paginate(TEAMS_QUERY, {}, lambda data: data.get("teams"))
            self._teams = [Team.from_api(node) for node in nodes]
        return list(self._teams)

    def resolve_team(self, ref: str) -> Team:
        """
        Resolve a team reference.

        Ids win over keys, keys over display names, so a team named
        like another team's key still resolves predictably.
        """
        ref = ref.strip()
        teams = self.list_teams()

        for team in teams:
            if team.id == ref:
                return team
        for team in teams:
            if team.key.upper() == ref.upper():
                return team
        for team in teams:
            if team.name.casefold() == ref.casefold():
                return team

        available = ", ".join(t.key for t in teams) or "none"
        raise TeamNotFoundError(f"Team not found: {ref} (available: {available})", team=ref)

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def list_projects(self, team_id: str | None = None) -> list[RemoteProject]:
        if team_id is None:
            nodes = self._paginate(PROJECTS_QUERY, {}, lambda data: data.get("projects"))
        else:

            def team_projects(data: dict[str, Any]) -> dict[str, Any] | None:
                team = data.get("team")
                if team is None:
                    raise TeamNotFoundError(f"Team not found: {team_id}", team=team_id)
                return team.get("projects")

            nodes = self._paginate(TEAM_PROJECTS_QUERY, {"teamId": team_id}, team_projects)

        projects = [RemoteProject.from_api(node, team_id=team_id) for node in nodes]
        self.logger.debug(f"Listed {len(projects)} projects (team={team_id or 'all'})")
        return projects

    def create_project(
        self,
        name: str,
        team_id: str,
        description: str | None = None,
    ) -> RemoteProject:
        project_input: dict[str, Any] = {"name": name, "teamIds": [team_id]}
        if description:
            project_input["description"] = description

        if self._dry_run:
            self.logger.info(f"[DRY-RUN] Would create project '{name}' in team {team_id}")
            return RemoteProject(id="", name=name, team_id=team_id)

        data = self._client.mutate(PROJECT_CREATE_MUTATION, {"input": project_input})
        result = data.get("projectCreate") or {}

        if not result.get("success"):
            raise TrackerError(f"Linear did not create project '{name}'", issue_key=name)

        project = RemoteProject.from_api(result.get("project") or {}, team_id=team_id)
        self.logger.info(f"Created project '{project.name}' ({project.id})")
        return project

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _paginate(self, query: str, variables: dict[str, Any], extract) -> list[dict[str, Any]]:
        """Collect ``nodes`` across pages of a connection."""
        nodes: list[dict[str, Any]] = []
        cursor: str | None = None

        for _ in range(self.MAX_PAGES):
            data = self._client.query(query, {**variables, "after": cursor})
            connection = extract(data) or {}
            nodes.extend(connection.get("nodes") or [])

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                return nodes
            cursor = page_info.get("endCursor")
            if not cursor:
                return nodes

        self.logger.warning(f"Stopped paging after {self.MAX_PAGES} pages")
        return nodes

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LinearAdapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
