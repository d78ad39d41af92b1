"""
Tests for LocalFolderScanner.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from linearctl.adapters.filesystem import LocalFolderScanner
from linearctl.core.exceptions import LocalScanError


class TestScan:
    """Tests for scanning a sync root."""

    def test_lists_immediate_subdirectories(self, project_tree):
        result = LocalFolderScanner().scan(project_tree)

        assert [f.name for f in result] == ["alpha", "beta", "gamma"]
        assert result[0].path == str(project_tree / "alpha")

    def test_detects_git_checkouts(self, project_tree):
        result = {f.name: f for f in LocalFolderScanner().scan(project_tree)}

        assert result["alpha"].has_git is True
        assert result["beta"].has_git is False

    def test_is_not_recursive(self, project_tree):
        (project_tree / "beta" / "nested").mkdir()

        names = [f.name for f in LocalFolderScanner().scan(project_tree)]

        assert "nested" not in names

    def test_empty_directory(self, tmp_path):
        assert LocalFolderScanner().scan(tmp_path) == []

    def test_order_is_case_insensitive_with_stable_ties(self, tmp_path):
        for name in ["beta", "Alpha", "alpha", "Gamma", "delta"]:
            (tmp_path / name).mkdir()

        names = [f.name for f in LocalFolderScanner().scan(tmp_path)]

        assert names == ["Alpha", "alpha", "beta", "delta", "Gamma"]

    def test_repeated_scans_are_identical(self, project_tree):
        scanner = LocalFolderScanner()
        assert scanner.scan(project_tree) == scanner.scan(project_tree)

    def test_accepts_string_path(self, project_tree):
        assert len(LocalFolderScanner().scan(str(project_tree))) == 3


class TestFiltering:
    """Tests for ignore rules."""

    def test_skips_hidden_and_files(self, project_tree):
        names = [f.name for f in LocalFolderScanner().scan(project_tree)]

        assert ".hidden" not in names
        assert "notes.txt" not in names

    def test_custom_prefix(self, tmp_path):
        (tmp_path / "_archive").mkdir()
        (tmp_path / ".config").mkdir()
        (tmp_path / "app").mkdir()

        names = [f.name for f in LocalFolderScanner(ignore_prefix="_").scan(tmp_path)]

        assert names == [".config", "app"]

    def test_empty_prefix_disables_prefix_filter(self, project_tree):
        names = [f.name for f in LocalFolderScanner(ignore_prefix="").scan(project_tree)]

        assert ".hidden" in names

    def test_ignore_names(self, project_tree):
        names = [f.name for f in LocalFolderScanner(ignore=["beta"]).scan(project_tree)]

        assert names == ["alpha", "gamma"]


class TestScanErrors:
    """Tests for unreadable roots."""

    def test_missing_root(self, tmp_path):
        missing = tmp_path / "nope"

        with pytest.raises(LocalScanError, match="does not exist") as exc_info:
            LocalFolderScanner().scan(missing)

        assert exc_info.value.path == str(missing)

    def test_root_is_a_file(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")

        with pytest.raises(LocalScanError, match="not a directory"):
            LocalFolderScanner().scan(path)

    def test_unreadable_root_chains_os_error(self, tmp_path):
        with patch(
            "linearctl.adapters.filesystem.scanner.os.scandir",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(LocalScanError) as exc_info:
                LocalFolderScanner().scan(tmp_path)

        assert isinstance(exc_info.value.cause, PermissionError)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_unreadable_subfolder_is_still_listed(self, tmp_path):
        (tmp_path / "locked").mkdir()
        (tmp_path / "ok" / ".git").mkdir(parents=True)
        real_exists = Path.exists

        def exists(path, *args, **kwargs):
            if path.parent.name == "locked" and path.name == ".git":
                raise PermissionError(13, "Permission denied", str(path))
            return real_exists(path, *args, **kwargs)

        with patch.object(Path, "exists", exists):
            result = LocalFolderScanner().scan(tmp_path)

        assert [(f.name, f.has_git) for f in result] == [("locked", False), ("ok", True)]

    @pytest.mark.skipif(os.name == "nt", reason="HOME-based expansion")
    def test_tilde_is_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "proj").mkdir()

        names = [f.name for f in LocalFolderScanner().scan("~")]

        assert names == ["proj"]
