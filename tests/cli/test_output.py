"""
Tests for Console output.
"""

import json

import pytest

from conftest import folders
from linearctl.application.sync import PushResult, reconcile
from linearctl.cli.output import Console
from linearctl.core.domain.entities import LocalFolder, RemoteProject


@pytest.fixture
def reconciliation():
    local = [
        LocalFolder(name="alpha", path="/w/alpha", has_git=True),
        LocalFolder(name="beta", path="/w/beta"),
        LocalFolder(name="gamma", path="/w/gamma"),
    ]
    remote = [
        RemoteProject(id="p1", name="alpha", team_id="t1"),
        RemoteProject(id="p2", name="delta", team_id="t1"),
    ]
    return reconcile(local, remote, team_id="t1")


def push_result(reconciliation, dry_run=False):
    result = PushResult(dry_run=dry_run, reconciliation=reconciliation)
    result.planned = list(reconciliation.local_only)
    if not dry_run:
        beta, gamma = result.planned
        result.created.append((beta, RemoteProject(id="n1", name="beta", url="https://l/n1")))
        result.add_failure(gamma, "HTTP 500")
    return result


class TestConsoleBasics:
    """Tests for the message helpers."""

    def test_quiet_suppresses_messages(self, capsys):
        console = Console(color=False, quiet=True)

        console.info("info")
        console.success("ok")
        console.header("Header")

        assert capsys.readouterr().out == ""

    def test_errors_print_in_quiet_mode(self, capsys):
        Console(color=False, quiet=True).error("broken")

        assert "broken" in capsys.readouterr().err

    def test_debug_only_when_verbose(self, capsys):
        Console(color=False).debug("hidden")
        Console(color=False, verbose=True).debug("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "[DEBUG] shown" in out

    def test_json_mode_is_quiet(self):
        console = Console(json_mode=True)

        assert console.quiet
        assert not console.color

    def test_table(self, capsys):
        Console(color=False).table(["Name", "Count"], [["alpha", "1"], ["longer-name", "22"]])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["Name", "Count"]
        assert lines[2].split() == ["alpha", "1"]

    def test_item_status(self, capsys):
        console = Console(color=False)

        console.item("alpha", "ok")
        console.item("beta", "new")
        console.item("gamma", "fail")

        out = capsys.readouterr().out
        assert "alpha [✓]" in out
        assert "beta [+]" in out
        assert "gamma [✗]" in out

    def test_dry_run_banner(self, capsys):
        Console(color=False).dry_run_banner()

        assert "DRY-RUN" in capsys.readouterr().out

    def test_error_rich_json(self, capsys):
        from linearctl.core.exceptions import AuthenticationError

        Console(json_mode=True).error_rich(AuthenticationError("bad key"))

        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is False
        assert payload["error"]["code"] == "LCTL-100"

    def test_error_rich_text(self, capsys):
        from linearctl.core.exceptions import AuthenticationError

        Console(color=False).error_rich(AuthenticationError("bad key"))

        assert "Authentication Failed" in capsys.readouterr().err


class TestReconciliationReport:
    """Tests for the sync status report."""

    def test_text_lists_all_three_states(self, capsys, reconciliation):
        Console(color=False).reconciliation_report(reconciliation)

        out = capsys.readouterr().out
        assert "Synced (1)" in out
        assert "Local only (2)" in out
        assert "Linear only (1)" in out
        assert "alpha (git) [✓]" in out
        assert "delta" in out
        assert "create 2 project(s)" in out

    def test_missing_only(self, capsys, reconciliation):
        Console(color=False).reconciliation_report(reconciliation, missing_only=True)

        out = capsys.readouterr().out
        assert "Missing in Linear (2)" in out
        assert "beta" in out
        assert "delta" not in out

    def test_in_sync(self, capsys):
        result = reconcile(folders("alpha"), [RemoteProject(id="p", name="alpha")])

        Console(color=False).reconciliation_report(result)

        assert "All local folders are synced" in capsys.readouterr().out

    def test_quiet_summary_line(self, capsys, reconciliation):
        Console(color=False, quiet=True).reconciliation_report(reconciliation)

        assert capsys.readouterr().out.strip() == "synced=1 local_only=2 remote_only=1"

    def test_json(self, capsys, reconciliation):
        Console(json_mode=True).reconciliation_report(reconciliation)

        payload = json.loads(capsys.readouterr().out)
        assert [m["local"]["name"] for m in payload["matched"]] == ["alpha"]
        assert [f["name"] for f in payload["local_only"]] == ["beta", "gamma"]
        assert [p["name"] for p in payload["remote_only"]] == ["delta"]

    def test_json_missing_only(self, capsys, reconciliation):
        Console(json_mode=True).reconciliation_report(reconciliation, missing_only=True)

        payload = json.loads(capsys.readouterr().out)
        assert set(payload) == {"team_id", "match_mode", "local_only"}


class TestPushReport:
    """Tests for the sync push report."""

    def test_text_reports_successes_and_failures(self, capsys, reconciliation):
        Console(color=False).push_report(push_result(reconciliation))

        captured = capsys.readouterr()
        assert "beta [✓]" in captured.out
        assert "https://l/n1" in captured.out
        assert "gamma [✗]" in captured.out
        assert "HTTP 500" in captured.out
        assert "1 of 2 creation(s) failed" in captured.err

    def test_dry_run_lists_planned(self, capsys, reconciliation):
        Console(color=False).push_report(push_result(reconciliation, dry_run=True))

        out = capsys.readouterr().out
        assert "Would create 2 project(s)" in out
        assert "/w/beta" in out

    def test_nothing_to_do(self, capsys, reconciliation):
        result = PushResult(dry_run=False, reconciliation=reconciliation)

        Console(color=False).push_report(result)

        assert "Nothing to create" in capsys.readouterr().out

    def test_unknown_only_warning(self, capsys, reconciliation):
        result = PushResult(dry_run=False, reconciliation=reconciliation, unknown_only=["zeta"])

        Console(color=False).push_report(result)

        assert "'zeta' is not a local-only folder" in capsys.readouterr().out

    def test_quiet_prints_summary_and_failures(self, capsys, reconciliation):
        Console(color=False, quiet=True).push_report(push_result(reconciliation))

        captured = capsys.readouterr()
        assert captured.out.strip() == "status=PARTIAL mode=executed created=1 failed=1 synced=1"
        assert "ERROR: [create_project] gamma: HTTP 500" in captured.err

    def test_json(self, capsys, reconciliation):
        Console(json_mode=True).push_report(push_result(reconciliation))

        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is False
        assert payload["created"][0]["name"] == "beta"
        assert payload["failed"] == [{"name": "gamma", "error": "HTTP 500"}]
        assert payload["errors"] == ["[create_project] gamma: HTTP 500"]
