"""
Tests for the exception hierarchy.
"""

import pytest

from linearctl.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConfigError,
    ConfigFileError,
    LinearCtlError,
    LocalScanError,
    MissingConfigError,
    RateLimitError,
    RemoteCreateError,
    RemoteFetchError,
    ResourceNotFoundError,
    SyncError,
    TeamNotFoundError,
    TrackerError,
    TransientError,
    WorkspaceError,
)


class TestLinearCtlError:
    """Tests for the base exception."""

    def test_message(self):
        err = LinearCtlError("something broke")
        assert err.message == "something broke"
        assert err.cause is None
        assert str(err) == "something broke"

    def test_cause_is_appended(self):
        cause = OSError("disk on fire")
        err = LinearCtlError("scan failed", cause=cause)
        assert err.cause is cause
        assert str(err) == "scan failed (caused by: disk on fire)"


class TestHierarchy:
    """Every error is catchable as LinearCtlError."""

    @pytest.mark.parametrize(
        "exc_class,parent",
        [
            (AuthenticationError, TrackerError),
            (AccessDeniedError, TrackerError),
            (ResourceNotFoundError, TrackerError),
            (TeamNotFoundError, ResourceNotFoundError),
            (RateLimitError, TrackerError),
            (TransientError, TrackerError),
            (LocalScanError, SyncError),
            (RemoteFetchError, SyncError),
            (RemoteCreateError, SyncError),
            (ConfigFileError, ConfigError),
            (MissingConfigError, ConfigError),
            (WorkspaceError, ConfigError),
        ],
    )
    def test_parent(self, exc_class, parent):
        assert issubclass(exc_class, parent)
        assert issubclass(exc_class, LinearCtlError)

    def test_sync_errors_are_not_tracker_errors(self):
        assert not issubclass(RemoteFetchError, TrackerError)
        assert not issubclass(LocalScanError, TrackerError)


class TestErrorAttributes:
    """Subclass-specific attributes."""

    def test_tracker_error_issue_key(self):
        err = TrackerError("nope", issue_key="api")
        assert err.issue_key == "api"

    def test_rate_limit_retry_after(self):
        err = RateLimitError("slow down", retry_after=12.5)
        assert err.retry_after == 12.5
        assert err.issue_key is None

    def test_team_not_found_keeps_cause(self):
        cause = ValueError("x")
        err = TeamNotFoundError("no team", team="XYZ", cause=cause)
        assert err.team == "XYZ"
        assert err.cause is cause

    def test_local_scan_error_path(self):
        err = LocalScanError("missing", path="/nowhere")
        assert err.path == "/nowhere"

    def test_remote_fetch_error_team(self):
        err = RemoteFetchError("listing failed", team_id="t1", cause=TransientError("502"))
        assert err.team_id == "t1"
        assert "caused by: 502" in str(err)

    def test_remote_create_error_project(self):
        err = RemoteCreateError("create failed", project_name="gamma")
        assert err.project_name == "gamma"

    def test_config_errors(self):
        assert ConfigFileError("bad", path="/c.yaml").path == "/c.yaml"
        assert MissingConfigError("no key", setting="api_key").setting == "api_key"
        assert WorkspaceError("gone", workspace="w").workspace == "w"
