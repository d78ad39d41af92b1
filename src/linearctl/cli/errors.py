"""
Errors - Rich error formatting with actionable suggestions.

Turns exceptions into a titled message, an error code, and a short
"How to fix" list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from linearctl.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConfigError,
    ConfigFileError,
    ConnectionError,
    LinearCtlError,
    LocalScanError,
    MissingConfigError,
    RateLimitError,
    RemoteCreateError,
    RemoteFetchError,
    ResourceNotFoundError,
    TeamNotFoundError,
    TrackerError,
    TransientError,
    WorkspaceError,
)

from .output import Colors, Symbols


class ErrorCode(Enum):
    """Stable identifiers printed with every formatted error."""

    AUTH_INVALID_CREDENTIALS = "LCTL-100"
    AUTH_PERMISSION_DENIED = "LCTL-101"

    RESOURCE_NOT_FOUND = "LCTL-200"
    RESOURCE_TEAM_NOT_FOUND = "LCTL-201"

    CONN_FAILED = "LCTL-300"
    CONN_RATE_LIMITED = "LCTL-301"
    CONN_TRANSIENT = "LCTL-302"
    TRACKER_ERROR = "LCTL-303"

    SYNC_SCAN_FAILED = "LCTL-400"
    SYNC_FETCH_FAILED = "LCTL-401"
    SYNC_CREATE_FAILED = "LCTL-402"

    CONFIG_MISSING_KEY = "LCTL-500"
    CONFIG_MISSING_TEAM = "LCTL-501"
    CONFIG_INVALID_FILE = "LCTL-502"
    CONFIG_WORKSPACE = "LCTL-503"
    CONFIG_INVALID = "LCTL-504"

    UNKNOWN = "LCTL-999"


@dataclass
class FormattedError:
    """A user-facing error with title, message and suggestions."""

    code: ErrorCode
    title: str
    message: str
    suggestions: list[str] = field(default_factory=list)
    details: str | None = None

    def format(self, color: bool = True) -> str:
        """Render as a multi-line block."""

        def c(text: str, *codes: str) -> str:
            return "".join(codes) + text + Colors.RESET if color else text

        lines = [
            "",
            c(f"{Symbols.CROSS} {self.title}", Colors.BOLD, Colors.RED)
            + c(f" [{self.code.value}]", Colors.DIM),
            f"  {self.message}",
        ]

        if self.details:
            lines.append("")
            lines.append(c("  Details:", Colors.DIM))
            lines.extend(f"    {line}" for line in self.details.splitlines())

        if self.suggestions:
            lines.append("")
            lines.append(c("  How to fix:", Colors.BOLD))
            lines.extend(f"    {Symbols.DOT} {s}" for s in self.suggestions)

        lines.append("")
        return "\n".join(lines)


class ErrorFormatter:
    """Maps exceptions to FormattedError."""

    def __init__(self, color: bool = True, verbose: bool = False) -> None:
        self.color = color
        self.verbose = verbose

    def format(self, exc: BaseException) -> FormattedError:
        formatted = self._classify(exc)
        if self.verbose and formatted.details is None:
            cause = getattr(exc, "cause", None) or exc.__cause__
            if cause is not None:
                formatted.details = f"{type(cause).__name__}: {cause}"
        return formatted

    def _classify(self, exc: BaseException) -> FormattedError:
        if isinstance(exc, RemoteFetchError):
            cause = exc.cause
            # Report auth and team lookup failures as themselves
            if isinstance(cause, (AuthenticationError, AccessDeniedError, TeamNotFoundError)):
                return self._classify(cause)
            suggestions = ["Check your network connection and retry the command"]
            if isinstance(cause, RateLimitError):
                suggestions.append("Linear is rate limiting this key; wait a minute and retry")
            return FormattedError(
                code=ErrorCode.SYNC_FETCH_FAILED,
                title="Could Not List Linear Projects",
                message=exc.message,
                suggestions=suggestions,
                details=str(cause) if cause else None,
            )

        if isinstance(exc, LocalScanError):
            return FormattedError(
                code=ErrorCode.SYNC_SCAN_FAILED,
                title="Cannot Scan Directory",
                message=exc.message,
                suggestions=[
                    "Check that the directory exists and is readable",
                    "Pass a different root with --directory",
                    "Or set sync.directory in the config file",
                ],
            )

        if isinstance(exc, RemoteCreateError):
            return FormattedError(
                code=ErrorCode.SYNC_CREATE_FAILED,
                title="Project Creation Failed",
                message=exc.message,
                suggestions=["Re-run 'linearctl sync push'; created projects will show as synced"],
            )

        if isinstance(exc, AuthenticationError):
            return FormattedError(
                code=ErrorCode.AUTH_INVALID_CREDENTIALS,
                title="Authentication Failed",
                message=exc.message,
                suggestions=[
                    "Check your API key at https://linear.app/settings/api",
                    "Store a new key with: linearctl config set-key <KEY>",
                    "Or export LINEAR_API_KEY",
                ],
            )

        if isinstance(exc, AccessDeniedError):
            return FormattedError(
                code=ErrorCode.AUTH_PERMISSION_DENIED,
                title="Permission Denied",
                message=exc.message,
                suggestions=[
                    "Verify the key's user has permission to manage projects in this team",
                    "Switch workspace with: linearctl config workspace-switch <name>",
                ],
            )

        if isinstance(exc, TeamNotFoundError):
            return FormattedError(
                code=ErrorCode.RESOURCE_TEAM_NOT_FOUND,
                title="Team Not Found",
                message=exc.message,
                suggestions=[
                    "Pass the team key (e.g. ENG), name or id with --team",
                    "Check the active workspace with: linearctl config workspace-current",
                ],
            )

        if isinstance(exc, ResourceNotFoundError):
            return FormattedError(
                code=ErrorCode.RESOURCE_NOT_FOUND,
                title="Resource Not Found",
                message=exc.message,
                suggestions=["Check the identifier and the active workspace"],
            )

        if isinstance(exc, RateLimitError):
            wait = f"{exc.retry_after:g} seconds" if exc.retry_after else "a minute"
            return FormattedError(
                code=ErrorCode.CONN_RATE_LIMITED,
                title="Rate Limit Exceeded",
                message=exc.message,
                suggestions=[f"Wait {wait} and retry"],
            )

        if isinstance(exc, TransientError):
            return FormattedError(
                code=ErrorCode.CONN_TRANSIENT,
                title="Temporary Server Error",
                message=exc.message,
                suggestions=["Linear returned a server error; retry in a few moments"],
            )

        if isinstance(exc, ConnectionError):
            return FormattedError(
                code=ErrorCode.CONN_FAILED,
                title="Connection Failed",
                message=exc.message,
                suggestions=[
                    "Check your internet connection",
                    "Check LINEAR_API_URL if you use a proxy",
                ],
            )

        if isinstance(exc, TrackerError):
            return FormattedError(
                code=ErrorCode.TRACKER_ERROR,
                title="Linear API Error",
                message=exc.message,
                suggestions=["Retry with --verbose for more detail"],
                details=f"Resource: {exc.issue_key}" if exc.issue_key else None,
            )

        if isinstance(exc, ConfigFileError):
            return FormattedError(
                code=ErrorCode.CONFIG_INVALID_FILE,
                title="Invalid Config File",
                message=exc.message,
                suggestions=["Fix or delete the file, then run: linearctl config set-key <KEY>"],
                details=f"File: {exc.path}" if exc.path else None,
            )

        if isinstance(exc, WorkspaceError):
            return FormattedError(
                code=ErrorCode.CONFIG_WORKSPACE,
                title="Workspace Error",
                message=exc.message,
                suggestions=["List workspaces with: linearctl config workspace-list"],
            )

        if isinstance(exc, MissingConfigError):
            if exc.setting == "team":
                return FormattedError(
                    code=ErrorCode.CONFIG_MISSING_TEAM,
                    title="No Team Given",
                    message=exc.message,
                    suggestions=[
                        "Pass --team <KEY>",
                        "Or set default_team on the workspace in the config file",
                    ],
                )
            return FormattedError(
                code=ErrorCode.CONFIG_MISSING_KEY,
                title="Missing Configuration",
                message=exc.message,
                suggestions=[
                    "Run: linearctl config set-key <KEY>",
                    "Or export LINEAR_API_KEY",
                ],
            )

        if isinstance(exc, ConfigError):
            return FormattedError(
                code=ErrorCode.CONFIG_INVALID,
                title="Configuration Error",
                message=exc.message,
                suggestions=["Check the config file and command-line flags"],
            )

        if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
            filename = getattr(exc, "filename", None) or str(exc)
            return FormattedError(
                code=ErrorCode.SYNC_SCAN_FAILED,
                title="File Not Found",
                message=f"Not found: {filename}",
                suggestions=["Check the path"],
            )

        if isinstance(exc, LinearCtlError):
            return FormattedError(
                code=ErrorCode.UNKNOWN,
                title="Error",
                message=exc.message,
                suggestions=["Retry with --verbose for more detail"],
            )

        return FormattedError(
            code=ErrorCode.UNKNOWN,
            title="Unexpected Error",
            message=str(exc) or type(exc).__name__,
            suggestions=[
                "Retry with --verbose to see the traceback",
                "If it persists, please report it with the traceback attached",
            ],
        )


def format_error(exc: BaseException, color: bool = True, verbose: bool = False) -> str:
    """Format an exception as a printable block."""
    return ErrorFormatter(color=color, verbose=verbose).format(exc).format(color=color)


def format_config_errors(errors: list[str], color: bool = True) -> str:
    """Format a list of configuration validation errors."""
    formatted = FormattedError(
        code=ErrorCode.CONFIG_MISSING_KEY,
        title="Configuration Incomplete",
        message=f"{len(errors)} problem(s) found:",
        details="\n".join(errors),
        suggestions=[
            "Run: linearctl config set-key <KEY>",
            "Or export LINEAR_API_KEY",
            "Show the active configuration with: linearctl config show",
        ],
    )
    return formatted.format(color=color)
