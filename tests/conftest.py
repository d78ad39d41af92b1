"""
Shared pytest fixtures for the linearctl test suite.

Fixture Categories:
- Fakes: in-memory project lister/creator
- Filesystem: sample folder trees under tmp_path
- Configuration: config files and a clean environment
- CLI: Console
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from linearctl.cli.output import Console
from linearctl.core.domain.entities import LocalFolder, RemoteProject, Team
from linearctl.core.exceptions import TrackerError
from linearctl.core.ports.project_tracker import ProjectTrackerPort


# =============================================================================
# Fakes
# =============================================================================


class FakeTracker(ProjectTrackerPort):
    """
    In-memory Linear stand-in.

    ``fail_on`` names make create_project raise; ``fail_listing`` makes
    list_projects raise. Every create call is recorded in ``created``.
    """

    def __init__(
        self,
        projects: list[str] | None = None,
        team_id: str = "team-1",
        fail_on: set[str] | None = None,
        fail_listing: bool = False,
    ) -> None:
        self.team = Team(id=team_id, key="ENG", name="Engineering")
        self.projects = [
            RemoteProject(id=f"p-{i}", name=name, team_id=team_id)
            for i, name in enumerate(projects or [])
        ]
        self.fail_on = fail_on or set()
        self.fail_listing = fail_listing
        self.created: list[tuple[str, str, str | None]] = []
        self.list_calls = 0

    @property
    def name(self) -> str:
        return "Fake"

    def list_teams(self) -> list[Team]:
        return [self.team]

    def resolve_team(self, ref: str) -> Team:
        return self.team

    def test_connection(self) -> bool:
        return True

    def list_projects(self, team_id: str | None = None) -> list[RemoteProject]:
        self.list_calls += 1
        if self.fail_listing:
            raise TrackerError("listing exploded")
        return [p for p in self.projects if team_id is None or p.team_id == team_id]

    def create_project(
        self, name: str, team_id: str, description: str | None = None
    ) -> RemoteProject:
        self.created.append((name, team_id, description))
        if name in self.fail_on:
            raise TrackerError(f"cannot create {name}")
        project = RemoteProject(id=f"new-{name}", name=name, team_id=team_id)
        self.projects.append(project)
        return project

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeTracker:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


@pytest.fixture
def fake_tracker() -> FakeTracker:
    return FakeTracker()


def folders(*names: str, root: str = "/work") -> list[LocalFolder]:
    """Build LocalFolder values in the given order."""
    return [LocalFolder(name=n, path=f"{root}/{n}") for n in names]


# =============================================================================
# Filesystem
# =============================================================================


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """
    A sync root with three project folders plus things the scanner skips.

    Layout:
        alpha/ (with .git)
        beta/
        gamma/
        .hidden/
        notes.txt
    """
    root = tmp_path / "code"
    root.mkdir()
    (root / "alpha" / ".git").mkdir(parents=True)
    (root / "beta").mkdir()
    (root / "gamma").mkdir()
    (root / ".hidden").mkdir()
    (root / "notes.txt").write_text("not a project")
    return root


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Remove linearctl env vars and point the default config into tmp_path."""
    for var in (
        "LINEAR_API_KEY",
        "LINEAR_API_URL",
        "LINEARCTL_SYNC_DIR",
        "LINEARCTL_MATCH",
        "LINEARCTL_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "linearctl" / "config.yaml"


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config file with two workspaces, ``work`` current."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "current": "work",
                "workspaces": {
                    "work": {"api_key": "lin_api_work_0123456789", "default_team": "ENG"},
                    "home": {"api_key": "lin_api_home_9876543210"},
                },
                "sync": {"match": "exact", "ignore": ["node_modules"]},
            }
        )
    )
    return path


# =============================================================================
# CLI
# =============================================================================


@pytest.fixture
def console() -> Console:
    return Console(color=False)
