"""
Configuration Provider Port - Abstract interface for configuration.

Implementations:
- EnvironmentConfigProvider: config file + LINEAR_* env vars + CLI overrides
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from linearctl.core.domain.enums import MatchMode


DEFAULT_API_URL = "https://api.linear.app/graphql"


@dataclass
class LinearConfig:
    """Connection settings for the Linear API."""

    api_key: str
    api_url: str = DEFAULT_API_URL
    workspace: str | None = None  # Name of the workspace the key came from
    default_team: str | None = None  # Team id, key or name

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return bool(self.api_key and self.api_url)

    @property
    def masked_key(self) -> str:
        """API key with the middle elided, safe to print."""
        return mask_api_key(self.api_key)


@dataclass
class SyncConfig:
    """Configuration for folder-to-project reconciliation."""

    directory: str | None = None  # Root folder to scan (None = cwd)
    team: str | None = None  # Team scope for listing and creation
    match_mode: MatchMode = MatchMode.EXACT
    ignore_prefix: str = "."  # Folders starting with this are skipped
    ignore: list[str] = field(default_factory=list)  # Exact folder names to skip

    # Execution
    dry_run: bool = False
    strict: bool = False  # Partial push failure -> non-zero exit


@dataclass
class AppConfig:
    """Complete application configuration."""

    tracker: LinearConfig
    sync: SyncConfig

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.tracker.api_key:
            errors.append("Missing API key (LINEAR_API_KEY or 'linearctl config set-key')")
        if not self.tracker.api_url:
            errors.append("Missing API URL (LINEAR_API_URL)")

        return errors


class ConfigProviderPort(ABC):
    """
    Abstract interface for configuration providers.

    Configuration can come from various sources:
    - Environment variables
    - YAML config file (workspaces, sync defaults)
    - Command line arguments
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """
        Load configuration from source.

        Returns:
            Complete application configuration
        """
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a specific configuration value.

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if not found
        """
        ...

    @abstractmethod
    def validate(self) -> list[str]:
        """
        Validate loaded configuration.

        Returns:
            List of validation errors
        """
        ...


def mask_api_key(key: str) -> str:
    """Show the first 8 and last 4 characters of keys longer than 12."""
    if len(key) > 12:
        return f"{key[:8]}...{key[-4:]}"
    return key
