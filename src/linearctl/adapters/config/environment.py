"""
Environment Config Provider - Layered configuration loading.

Precedence, highest first:
1. CLI overrides (parsed arguments)
2. Environment variables (LINEAR_API_KEY, LINEAR_API_URL, LINEARCTL_*)
3. Config file (selected workspace, ``sync`` section)
4. Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

from linearctl.core.domain.enums import MatchMode
from linearctl.core.exceptions import ConfigError, LinearCtlError, WorkspaceError
from linearctl.core.ports.config_provider import (
    DEFAULT_API_URL,
    AppConfig,
    ConfigProviderPort,
    LinearConfig,
    SyncConfig,
)

from .store import ConfigStore


logger = logging.getLogger(__name__)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Builds an AppConfig from the config file, the environment and CLI flags.

    The resulting AppConfig is passed explicitly into the adapters and
    the reconciler; nothing downstream reads the environment.
    """

    def __init__(
        self,
        config_file: Path | str | None = None,
        cli_overrides: dict[str, Any] | None = None,
        env: dict[str, str] | None = None,
        store: ConfigStore | None = None,
    ) -> None:
        """
        Args:
            config_file: Explicit config file path (default location otherwise)
            cli_overrides: Parsed CLI arguments (``vars(args)``); None values are ignored
            env: Environment mapping (defaults to ``os.environ``)
            store: Pre-loaded ConfigStore (mainly for tests)
        """
        self._store = store or ConfigStore(config_file)
        self._overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
        self._env = os.environ if env is None else env
        self._config: AppConfig | None = None

    @property
    def name(self) -> str:
        return f"Environment ({self._store.path})"

    @property
    def config_file_path(self) -> Path:
        return self._store.path

    @property
    def store(self) -> ConfigStore:
        return self._store

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def load(self) -> AppConfig:
        """
        Resolve the full configuration.

        Raises:
            ConfigError: If a value is malformed (e.g. an unknown match mode).
        """
        if self._config is None:
            self._config = AppConfig(tracker=self._load_tracker(), sync=self._load_sync())
        return self._config

    def validate(self) -> list[str]:
        try:
            config = self.load()
        except LinearCtlError as e:
            return [str(e)]
        return config.validate()

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _load_tracker(self) -> LinearConfig:
        env_key = self._env.get("LINEAR_API_KEY", "")
        explicit = self._overrides.get("workspace")
        workspace_name = explicit or self._store.current
        workspace: dict[str, Any] = {}
        if workspace_name:
            try:
                workspace = self._store.get_workspace(workspace_name)
            except WorkspaceError:
                # A stale 'current' is harmless when the env supplies the key
                if explicit or not env_key:
                    raise

        api_key = env_key or workspace.get("api_key", "")
        if env_key:
            logger.debug("Using API key from LINEAR_API_KEY")

        return LinearConfig(
            api_key=api_key,
            api_url=self._env.get("LINEAR_API_URL") or DEFAULT_API_URL,
            workspace=workspace_name,
            default_team=workspace.get("default_team"),
        )

    def _load_sync(self) -> SyncConfig:
        section = self._store.get("sync", {}) or {}

        directory = (
            self._overrides.get("directory")
            or self._env.get("LINEARCTL_SYNC_DIR")
            or section.get("directory")
        )

        match_value = (
            self._overrides.get("match")
            or self._env.get("LINEARCTL_MATCH")
            or section.get("match")
            or MatchMode.EXACT.value
        )
        try:
            match_mode = MatchMode.from_string(str(match_value))
        except ValueError as e:
            raise ConfigError(str(e), cause=e) from e

        ignore = section.get("ignore") or []
        if isinstance(ignore, str):
            ignore = [ignore]

        return SyncConfig(
            directory=str(directory) if directory else None,
            team=self._overrides.get("team"),
            match_mode=match_mode,
            ignore_prefix=str(section.get("ignore_prefix", ".")),
            ignore=[str(name) for name in ignore],
            dry_run=bool(self._overrides.get("dry_run", False)),
            strict=bool(self._overrides.get("strict", False)),
        )
