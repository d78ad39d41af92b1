"""
Reconciler - Classifies local folders against remote projects and acts on the gaps.

Data flows one way: scanned folders and a remote listing go in, a
three-way classification comes out, and in push mode one create call
is issued per local-only folder.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from linearctl.core.domain.entities import LocalFolder, RemoteProject
from linearctl.core.domain.enums import EntryState, MatchMode, SyncMode
from linearctl.core.exceptions import RemoteCreateError, RemoteFetchError, TrackerError
from linearctl.core.ports.project_tracker import ProjectCreatorPort, ProjectListerPort


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]

DESCRIPTION_TEMPLATE = "Local project synced from: {path}"


@dataclass(frozen=True)
class MatchedEntry:
    """A local folder paired with the remote project of the same name."""

    local: LocalFolder
    remote: RemoteProject

    @property
    def name(self) -> str:
        return self.local.name


@dataclass
class ReconciliationResult:
    """
    Three-way classification of local folders and remote projects.

    ``matched`` and ``local_only`` follow scan order; ``remote_only``
    follows remote listing order.
    """

    matched: list[MatchedEntry] = field(default_factory=list)
    local_only: list[LocalFolder] = field(default_factory=list)
    remote_only: list[RemoteProject] = field(default_factory=list)
    team_id: str | None = None
    match_mode: MatchMode = MatchMode.EXACT

    @property
    def counts(self) -> dict[EntryState, int]:
        return {
            EntryState.MATCHED: len(self.matched),
            EntryState.LOCAL_ONLY: len(self.local_only),
            EntryState.REMOTE_ONLY: len(self.remote_only),
        }

    @property
    def in_sync(self) -> bool:
        """True when every local folder has a remote project."""
        return not self.local_only

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "team_id": self.team_id,
            "match_mode": self.match_mode.value,
            "matched": [
                {"local": m.local.to_dict(), "remote": m.remote.to_dict()} for m in self.matched
            ],
            "local_only": [f.to_dict() for f in self.local_only],
            "remote_only": [p.to_dict() for p in self.remote_only],
            "summary": {state.value: count for state, count in self.counts.items()},
        }


@dataclass
class FailedCreation:
    """A create call that failed during push."""

    folder: LocalFolder
    error: str

    def __str__(self) -> str:
        return f"[create_project] {self.folder.name}: {self.error}"


@dataclass
class PushResult:
    """
    Outcome of a push (or dry-run push).

    Supports partial success: failed creations are recorded and the
    remaining folders are still processed.

    Attributes:
        dry_run: Whether creation calls were suppressed.
        reconciliation: The classification the push was planned from.
        planned: Local-only folders selected for creation, in order.
        created: (folder, project) pairs for successful creations.
        failed: Failed creations with their error messages.
        skipped: Local-only folders excluded by the ``only`` filter.
        unknown_only: Names given to ``only`` that are not local-only folders.
    """

    dry_run: bool
    reconciliation: ReconciliationResult
    planned: list[LocalFolder] = field(default_factory=list)
    created: list[tuple[LocalFolder, RemoteProject]] = field(default_factory=list)
    failed: list[FailedCreation] = field(default_factory=list)
    skipped: list[LocalFolder] = field(default_factory=list)
    unknown_only: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    @property
    def partial_success(self) -> bool:
        """Both successes and failures occurred."""
        return bool(self.created) and bool(self.failed)

    @property
    def errors(self) -> list[str]:
        return [str(f) for f in self.failed]

    def add_failure(self, folder: LocalFolder, error: str) -> None:
        self.failed.append(FailedCreation(folder=folder, error=error))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "dry_run": self.dry_run,
            "team_id": self.reconciliation.team_id,
            "planned": [f.name for f in self.planned],
            "created": [
                {"name": folder.name, "id": project.id, "url": project.url}
                for folder, project in self.created
            ],
            "failed": [{"name": f.folder.name, "error": f.error} for f in self.failed],
            "skipped": [f.name for f in self.skipped],
            "unknown_only": self.unknown_only,
        }


def reconcile(
    local: Sequence[LocalFolder],
    remote: Sequence[RemoteProject],
    match_mode: MatchMode = MatchMode.EXACT,
    team_id: str | None = None,
) -> ReconciliationResult:
    """
    Classify folders and projects by name.

    The first remote project with a given key claims it; later duplicates
    are never matched and so end up remote-only. Each remote project is
    matched by at most one folder.
    """
    by_key: dict[str, int] = {}
    for index, project in enumerate(remote):
        by_key.setdefault(match_mode.key(project.name), index)

    result = ReconciliationResult(team_id=team_id, match_mode=match_mode)
    consumed: set[int] = set()

    for folder in local:
        index = by_key.get(match_mode.key(folder.name))
        if index is not None and index not in consumed:
            consumed.add(index)
            result.matched.append(MatchedEntry(local=folder, remote=remote[index]))
        else:
            result.local_only.append(folder)

    result.remote_only = [p for i, p in enumerate(remote) if i not in consumed]
    return result


class Reconciler:
    """
    Runs status, dry-run and push passes.

    The lister and creator are injected so tests can use in-memory fakes.
    """

    def __init__(
        self,
        lister: ProjectListerPort,
        creator: ProjectCreatorPort | None = None,
        match_mode: MatchMode = MatchMode.EXACT,
        description_template: str = DESCRIPTION_TEMPLATE,
    ) -> None:
        self.lister = lister
        self.creator = creator
        self.match_mode = match_mode
        self.description_template = description_template

    def fetch_remote(self, team_id: str | None) -> list[RemoteProject]:
        """
        List remote projects for the team scope.

        Raises:
            RemoteFetchError: Wrapping any listing failure.
        """
        try:
            projects = self.lister.list_projects(team_id)
        except TrackerError as e:
            raise RemoteFetchError(
                f"Could not list projects for team {team_id or '(all)'}", team_id=team_id, cause=e
            ) from e
        logger.debug(f"Fetched {len(projects)} remote projects")
        return projects

    def status(
        self,
        folders: Sequence[LocalFolder],
        team_id: str | None = None,
    ) -> ReconciliationResult:
        """Classify without side effects."""
        remote = self.fetch_remote(team_id)
        return reconcile(folders, remote, self.match_mode, team_id=team_id)

    def push(
        self,
        folders: Sequence[LocalFolder],
        team_id: str,
        mode: SyncMode = SyncMode.PUSH,
        only: Iterable[str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> PushResult:
        """
        Create remote projects for local-only folders.

        In DRY_RUN mode the creator is never called. Creation failures are
        recorded per folder and processing continues; nothing is retried.

        Raises:
            RemoteFetchError: If the remote listing fails (before any creation).
            ValueError: If called with STATUS mode.
        """
        if mode is SyncMode.STATUS:
            raise ValueError("push() requires DRY_RUN or PUSH mode; use status() instead")
        if mode.creates and self.creator is None:
            raise ValueError("push() in PUSH mode requires a project creator")

        reconciliation = self.status(folders, team_id)
        result = PushResult(dry_run=not mode.creates, reconciliation=reconciliation)
        self._select(result, only)

        total = len(result.planned)
        for index, folder in enumerate(result.planned, start=1):
            if on_progress:
                on_progress(folder.name, index, total)

            if not mode.creates:
                logger.info(f"[DRY-RUN] Would create project '{folder.name}'")
                continue

            try:
                project = self._create(folder, team_id)
            except RemoteCreateError as e:
                logger.warning(f"Failed to create project '{folder.name}': {e}")
                result.add_failure(folder, str(e.cause or e))
                continue
            result.created.append((folder, project))

        logger.info(
            f"Push finished: {len(result.created)} created, {len(result.failed)} failed, "
            f"{len(result.planned)} planned"
        )
        return result

    def _select(self, result: PushResult, only: Iterable[str] | None) -> None:
        candidates = result.reconciliation.local_only
        if only is None:
            result.planned = list(candidates)
            return

        wanted = {self.match_mode.key(name.strip()): name.strip() for name in only if name.strip()}
        found: set[str] = set()
        for folder in candidates:
            key = self.match_mode.key(folder.name)
            if key in wanted:
                result.planned.append(folder)
                found.add(key)
            else:
                result.skipped.append(folder)
        result.unknown_only = [name for key, name in wanted.items() if key not in found]

    def _create(self, folder: LocalFolder, team_id: str) -> RemoteProject:
        if self.creator is None:
            raise ValueError("No project creator configured")
        description = self.description_template.format(path=folder.path, name=folder.name)
        try:
            return self.creator.create_project(folder.name, team_id, description)
        except TrackerError as e:
            raise RemoteCreateError(
                f"Could not create project '{folder.name}'", project_name=folder.name, cause=e
            ) from e
