"""
Config Store - YAML-backed workspace and settings file.

File layout::

    current: work
    workspaces:
      work:
        api_key: lin_api_xxx
        default_team: ENG
    sync:
      directory: ~/code
      match: exact

A legacy top-level ``api_key`` is migrated into a ``default`` workspace
the first time the file is loaded.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from linearctl.core.exceptions import ConfigFileError, MissingConfigError, WorkspaceError


logger = logging.getLogger(__name__)

APP_NAME = "linearctl"
CONFIG_FILENAME = "config.yaml"
DEFAULT_WORKSPACE = "default"


def default_config_path() -> Path:
    """
    Location of the config file.

    ``$LINEARCTL_CONFIG`` wins, then ``$XDG_CONFIG_HOME/linearctl``,
    then ``~/.config/linearctl``.
    """
    override = os.environ.get("LINEARCTL_CONFIG")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base).expanduser() / APP_NAME / CONFIG_FILENAME


class ConfigStore:
    """
    Reads and writes the linearctl config file.

    Every mutating method persists immediately.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path).expanduser() if path else default_config_path()
        self._data: dict[str, Any] = self._load()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"current": None, "workspaces": {}}

        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigFileError(
                f"Invalid YAML in config file: {self.path}", path=str(self.path), cause=e
            ) from e
        except OSError as e:
            raise ConfigFileError(
                f"Cannot read config file: {self.path}", path=str(self.path), cause=e
            ) from e

        data = raw or {}
        if not isinstance(data, dict):
            raise ConfigFileError(
                f"Config file must contain a mapping: {self.path}", path=str(self.path)
            )

        data.setdefault("current", None)
        if not isinstance(data.get("workspaces"), dict):
            data["workspaces"] = {}

        if self._migrate_legacy_key(data):
            self._data = data
            self.save()
        return data

    @staticmethod
    def _migrate_legacy_key(data: dict[str, Any]) -> bool:
        legacy_key = data.pop("api_key", None)
        if not legacy_key:
            return False
        if DEFAULT_WORKSPACE in data["workspaces"]:
            return True
        data["workspaces"][DEFAULT_WORKSPACE] = {"api_key": legacy_key}
        if not data.get("current"):
            data["current"] = DEFAULT_WORKSPACE
        logger.info("Migrated legacy api_key into workspace 'default'")
        return True

    def save(self) -> None:
        """Write the config file, creating its directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(self._data, default_flow_style=False, sort_keys=False),
                encoding="utf-8",
            )
            # The file holds API keys
            self.path.chmod(0o600)
        except OSError as e:
            raise ConfigFileError(
                f"Cannot write config file: {self.path}", path=str(self.path), cause=e
            ) from e

    # -------------------------------------------------------------------------
    # Generic access
    # -------------------------------------------------------------------------

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-separated key (e.g. ``sync.directory``)."""
        value: Any = self._data
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    # -------------------------------------------------------------------------
    # Workspaces
    # -------------------------------------------------------------------------

    @property
    def current(self) -> str | None:
        return self._data.get("current")

    @property
    def workspaces(self) -> dict[str, dict[str, Any]]:
        return self._data["workspaces"]

    def get_workspace(self, name: str | None = None) -> dict[str, Any]:
        """
        Return the named workspace, or the current one.

        Raises:
            MissingConfigError: If no workspace is selected.
            WorkspaceError: If the workspace does not exist.
        """
        name = name or self.current
        if not name:
            raise MissingConfigError(
                "No workspace selected. Run: linearctl config workspace-add <name> <key>",
                setting="current",
            )
        if name not in self.workspaces:
            raise WorkspaceError(
                f"Workspace '{name}' not found. Run: linearctl config workspace-add <name> <key>",
                workspace=name,
            )
        return self.workspaces[name]

    def set_api_key(self, key: str) -> str:
        """Store the key in the current workspace (``default`` if none). Returns its name."""
        name = self.current or DEFAULT_WORKSPACE
        workspace = self.workspaces.setdefault(name, {})
        workspace["api_key"] = key
        if not self.current:
            self._data["current"] = name
        self.save()
        return name

    def add_workspace(self, name: str, api_key: str, default_team: str | None = None) -> bool:
        """
        Add a workspace. The first workspace becomes current.

        Returns:
            True if the new workspace was made current.

        Raises:
            WorkspaceError: If the name is already taken.
        """
        if name in self.workspaces:
            raise WorkspaceError(
                f"Workspace '{name}' already exists. Use 'workspace-remove' first to replace it.",
                workspace=name,
            )
        workspace: dict[str, Any] = {"api_key": api_key}
        if default_team:
            workspace["default_team"] = default_team
        self.workspaces[name] = workspace

        became_current = not self.current
        if became_current:
            self._data["current"] = name
        self.save()
        return became_current

    def switch_workspace(self, name: str) -> None:
        if name not in self.workspaces:
            raise WorkspaceError(
                f"Workspace '{name}' not found. Use 'workspace-list' to see available workspaces.",
                workspace=name,
            )
        self._data["current"] = name
        self.save()

    def remove_workspace(self, name: str) -> str | None:
        """
        Remove a workspace.

        Removing the current workspace switches to the first remaining one.

        Returns:
            The new current workspace if it changed, else None.
        """
        if name not in self.workspaces:
            raise WorkspaceError(f"Workspace '{name}' not found.", workspace=name)

        del self.workspaces[name]

        switched_to = None
        if self.current == name:
            switched_to = next(iter(self.workspaces), None)
            self._data["current"] = switched_to
        self.save()
        return switched_to
