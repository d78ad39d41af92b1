"""
Exit Codes - Process exit statuses for the linearctl CLI.

Scripts can rely on these values:

    0    success (including push runs where some creations failed)
    1    unexpected error
    2    configuration error (missing key, bad config file, unknown workspace)
    3    partial failure (only with --strict)
    4    local directory missing or unreadable
    5    could not reach or list from Linear
    6    authentication or permission failure
    130  interrupted (Ctrl+C)
"""

from enum import IntEnum

from linearctl.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConfigError,
    LocalScanError,
    RemoteFetchError,
    TeamNotFoundError,
    TrackerError,
)


class ExitCode(IntEnum):
    """Exit codes returned by ``main()``."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    PARTIAL_FAILURE = 3
    FILE_NOT_FOUND = 4
    CONNECTION_ERROR = 5
    AUTH_ERROR = 6
    SIGINT = 130

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExitCode":
        """Map an exception to the exit code a caller should see."""
        if isinstance(exc, KeyboardInterrupt):
            return cls.SIGINT
        if isinstance(exc, ConfigError):
            return cls.CONFIG_ERROR
        if isinstance(exc, (LocalScanError, FileNotFoundError, NotADirectoryError)):
            return cls.FILE_NOT_FOUND

        # Listing failures carry the tracker error that caused them
        if isinstance(exc, RemoteFetchError) and exc.cause is not None:
            exc = exc.cause
        if isinstance(exc, (AuthenticationError, AccessDeniedError)):
            return cls.AUTH_ERROR
        if isinstance(exc, TeamNotFoundError):
            return cls.CONFIG_ERROR
        if isinstance(exc, (TrackerError, RemoteFetchError)):
            return cls.CONNECTION_ERROR
        return cls.ERROR
