"""
Exceptions - Centralized exception hierarchy for linearctl.

All errors raised by the core, the adapters and the CLI derive from
LinearCtlError so callers can catch one base class.

Hierarchy:
    LinearCtlError
    ├── TrackerError                  (remote API failures)
    │   ├── AuthenticationError
    │   ├── AccessDeniedError
    │   ├── ResourceNotFoundError
    │   │   └── TeamNotFoundError
    │   ├── RateLimitError
    │   ├── TransientError
    │   └── ConnectionError
    ├── SyncError                     (reconciliation failures)
    │   ├── LocalScanError
    │   ├── RemoteFetchError
    │   └── RemoteCreateError
    └── ConfigError                   (configuration problems)
        ├── ConfigFileError
        ├── MissingConfigError
        └── WorkspaceError
"""

from __future__ import annotations


__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ConfigError",
    "ConfigFileError",
    "ConnectionError",
    "LinearCtlError",
    "LocalScanError",
    "MissingConfigError",
    "RateLimitError",
    "RemoteCreateError",
    "RemoteFetchError",
    "ResourceNotFoundError",
    "SyncError",
    "TeamNotFoundError",
    "TrackerError",
    "TransientError",
    "WorkspaceError",
]


class LinearCtlError(Exception):
    """
    Base exception for all linearctl errors.

    Attributes:
        message: Human-readable description of the error.
        cause: The underlying exception, if any.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        if self.cause is not None:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


# =============================================================================
# Tracker (remote API) errors
# =============================================================================


class TrackerError(LinearCtlError):
    """An error reported by, or while talking to, the Linear API."""

    def __init__(
        self,
        message: str,
        issue_key: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.issue_key = issue_key
        super().__init__(message, cause=cause)


class AuthenticationError(TrackerError):
    """The API key was rejected (401)."""


class AccessDeniedError(TrackerError):
    """The API key lacks permission for the operation (403)."""


class ResourceNotFoundError(TrackerError):
    """The requested resource does not exist (404 or empty GraphQL node)."""


class TeamNotFoundError(ResourceNotFoundError):
    """No team matches the given id, key or name."""

    def __init__(self, message: str, team: str | None = None, **kwargs) -> None:
        self.team = team
        super().__init__(message, **kwargs)


class RateLimitError(TrackerError):
    """The API rate limit was exceeded (429)."""

    def __init__(self, message: str, retry_after: float | None = None, **kwargs) -> None:
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class TransientError(TrackerError):
    """A server-side failure that may succeed on a later attempt (5xx)."""


class ConnectionError(TrackerError):  # noqa: A001
    """The API could not be reached (DNS, refused connection, timeout)."""


# =============================================================================
# Sync errors
# =============================================================================


class SyncError(LinearCtlError):
    """Base class for reconciliation failures."""


class LocalScanError(SyncError):
    """The local root directory is missing, not a directory, or unreadable."""

    def __init__(self, message: str, path: str | None = None, **kwargs) -> None:
        self.path = path
        super().__init__(message, **kwargs)


class RemoteFetchError(SyncError):
    """Listing remote projects failed; reconciliation cannot proceed."""

    def __init__(self, message: str, team_id: str | None = None, **kwargs) -> None:
        self.team_id = team_id
        super().__init__(message, **kwargs)


class RemoteCreateError(SyncError):
    """Creating one remote project failed."""

    def __init__(self, message: str, project_name: str | None = None, **kwargs) -> None:
        self.project_name = project_name
        super().__init__(message, **kwargs)


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(LinearCtlError):
    """Base class for configuration problems."""


class ConfigFileError(ConfigError):
    """The config file could not be read, parsed or written."""

    def __init__(self, message: str, path: str | None = None, **kwargs) -> None:
        self.path = path
        super().__init__(message, **kwargs)


class MissingConfigError(ConfigError):
    """A required setting (API key, team) is not configured."""

    def __init__(self, message: str, setting: str | None = None, **kwargs) -> None:
        self.setting = setting
        super().__init__(message, **kwargs)


class WorkspaceError(ConfigError):
    """A workspace operation referenced an unknown or duplicate workspace."""

    def __init__(self, message: str, workspace: str | None = None, **kwargs) -> None:
        self.workspace = workspace
        super().__init__(message, **kwargs)
