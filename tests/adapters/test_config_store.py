"""
Tests for the YAML config store and the layered config provider.
"""

import os
import stat

import pytest
import yaml

from linearctl.adapters.config import ConfigStore, EnvironmentConfigProvider, default_config_path
from linearctl.core.domain.enums import MatchMode
from linearctl.core.exceptions import ConfigError, ConfigFileError, MissingConfigError, WorkspaceError


# =============================================================================
# ConfigStore
# =============================================================================


class TestDefaultPath:
    def test_env_override(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("LINEARCTL_CONFIG", str(tmp_path / "custom.yaml"))
        assert default_config_path() == tmp_path / "custom.yaml"

    def test_xdg_config_home(self, clean_env):
        assert default_config_path() == clean_env


class TestConfigStoreLoad:
    """Tests for reading the config file."""

    def test_missing_file_is_empty(self, tmp_path):
        store = ConfigStore(tmp_path / "none.yaml")

        assert store.current is None
        assert store.workspaces == {}
        assert not (tmp_path / "none.yaml").exists()

    def test_reads_workspaces(self, config_file):
        store = ConfigStore(config_file)

        assert store.current == "work"
        assert set(store.workspaces) == {"work", "home"}
        assert store.get("sync.match") == "exact"
        assert store.get("sync.missing", "dflt") == "dflt"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("current: [unclosed")

        with pytest.raises(ConfigFileError) as exc_info:
            ConfigStore(path)

        assert exc_info.value.path == str(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigFileError, match="mapping"):
            ConfigStore(path)

    def test_legacy_key_is_migrated(self, tmp_path):
        path = tmp_path / "legacy.yaml"
        path.write_text("api_key: lin_api_old\n")

        store = ConfigStore(path)

        assert store.current == "default"
        assert store.get_workspace()["api_key"] == "lin_api_old"
        saved = yaml.safe_load(path.read_text())
        assert "api_key" not in saved
        assert saved["workspaces"]["default"]["api_key"] == "lin_api_old"


class TestConfigStoreWorkspaces:
    """Tests for workspace operations."""

    def test_set_api_key_creates_default_workspace(self, tmp_path):
        path = tmp_path / "sub" / "config.yaml"
        store = ConfigStore(path)

        name = store.set_api_key("lin_api_new")

        assert name == "default"
        assert ConfigStore(path).get_workspace("default")["api_key"] == "lin_api_new"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_saved_file_is_private(self, tmp_path):
        path = tmp_path / "config.yaml"
        ConfigStore(path).set_api_key("lin_api_new")

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_set_api_key_updates_current(self, config_file):
        store = ConfigStore(config_file)

        assert store.set_api_key("lin_api_rotated") == "work"
        assert store.get_workspace("work")["api_key"] == "lin_api_rotated"
        assert store.get_workspace("work")["default_team"] == "ENG"

    def test_first_workspace_becomes_current(self, tmp_path):
        store = ConfigStore(tmp_path / "config.yaml")

        assert store.add_workspace("acme", "lin_api_a", default_team="OPS") is True
        assert store.add_workspace("other", "lin_api_b") is False
        assert store.current == "acme"
        assert store.get_workspace("acme")["default_team"] == "OPS"

    def test_add_duplicate(self, config_file):
        with pytest.raises(WorkspaceError, match="already exists"):
            ConfigStore(config_file).add_workspace("work", "lin_api_x")

    def test_switch(self, config_file):
        ConfigStore(config_file).switch_workspace("home")
        assert ConfigStore(config_file).current == "home"

    def test_switch_unknown(self, config_file):
        with pytest.raises(WorkspaceError):
            ConfigStore(config_file).switch_workspace("nope")

    def test_remove_current_switches_to_remaining(self, config_file):
        store = ConfigStore(config_file)

        assert store.remove_workspace("work") == "home"
        assert store.current == "home"

    def test_remove_last(self, tmp_path):
        store = ConfigStore(tmp_path / "config.yaml")
        store.add_workspace("only", "lin_api_a")

        assert store.remove_workspace("only") is None
        assert store.current is None

    def test_remove_other_keeps_current(self, config_file):
        store = ConfigStore(config_file)

        assert store.remove_workspace("home") is None
        assert store.current == "work"

    def test_get_workspace_without_selection(self, tmp_path):
        with pytest.raises(MissingConfigError):
            ConfigStore(tmp_path / "config.yaml").get_workspace()


# =============================================================================
# EnvironmentConfigProvider
# =============================================================================


class TestEnvironmentConfigProvider:
    """Tests for layered config resolution."""

    def test_key_from_current_workspace(self, config_file):
        provider = EnvironmentConfigProvider(config_file=config_file, env={})

        config = provider.load()

        assert config.tracker.api_key == "lin_api_work_0123456789"
        assert config.tracker.workspace == "work"
        assert config.tracker.default_team == "ENG"
        assert config.tracker.api_url == "https://api.linear.app/graphql"

    def test_env_key_wins(self, config_file):
        provider = EnvironmentConfigProvider(
            config_file=config_file, env={"LINEAR_API_KEY": "lin_api_env"}
        )

        assert provider.load().tracker.api_key == "lin_api_env"

    def test_workspace_flag(self, config_file):
        provider = EnvironmentConfigProvider(
            config_file=config_file, cli_overrides={"workspace": "home"}, env={}
        )

        assert provider.load().tracker.api_key == "lin_api_home_9876543210"

    def test_unknown_workspace_flag(self, config_file):
        provider = EnvironmentConfigProvider(
            config_file=config_file, cli_overrides={"workspace": "ghost"}, env={}
        )

        with pytest.raises(WorkspaceError):
            provider.load()

    def test_stale_current_tolerated_with_env_key(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"current": "gone", "workspaces": {}}))
        provider = EnvironmentConfigProvider(
            config_file=path, env={"LINEAR_API_KEY": "lin_api_env"}
        )

        assert provider.load().tracker.api_key == "lin_api_env"

    def test_no_key_fails_validation(self, tmp_path):
        provider = EnvironmentConfigProvider(config_file=tmp_path / "none.yaml", env={})

        errors = provider.validate()

        assert len(errors) == 1
        assert "API key" in errors[0]

    def test_api_url_from_env(self, config_file):
        provider = EnvironmentConfigProvider(
            config_file=config_file, env={"LINEAR_API_URL": "http://localhost:9999/graphql"}
        )

        assert provider.load().tracker.api_url == "http://localhost:9999/graphql"

    def test_sync_section_defaults(self, tmp_path):
        provider = EnvironmentConfigProvider(
            config_file=tmp_path / "none.yaml", env={"LINEAR_API_KEY": "k"}
        )

        sync = provider.load().sync

        assert sync.directory is None
        assert sync.match_mode is MatchMode.EXACT
        assert sync.ignore_prefix == "."
        assert sync.ignore == []
        assert sync.dry_run is False
        assert sync.strict is False

    def test_sync_section_from_file(self, config_file):
        provider = EnvironmentConfigProvider(config_file=config_file, env={})

        assert provider.load().sync.ignore == ["node_modules"]

    def test_precedence_cli_over_env_over_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump({"sync": {"directory": "/from/file", "match": "exact"}})
        )
        env = {
            "LINEAR_API_KEY": "k",
            "LINEARCTL_SYNC_DIR": "/from/env",
            "LINEARCTL_MATCH": "ignore-case",
        }

        from_env = EnvironmentConfigProvider(config_file=path, env=env).load().sync
        from_cli = (
            EnvironmentConfigProvider(
                config_file=path,
                env=env,
                cli_overrides={"directory": "/from/cli", "match": "normalized", "team": None},
            )
            .load()
            .sync
        )

        assert from_env.directory == "/from/env"
        assert from_env.match_mode is MatchMode.IGNORE_CASE
        assert from_cli.directory == "/from/cli"
        assert from_cli.match_mode is MatchMode.NORMALIZED
        assert from_cli.team is None

    def test_invalid_match_mode(self, tmp_path):
        provider = EnvironmentConfigProvider(
            config_file=tmp_path / "none.yaml", env={"LINEAR_API_KEY": "k", "LINEARCTL_MATCH": "fuzzy"}
        )

        with pytest.raises(ConfigError, match="fuzzy"):
            provider.load()

        assert provider.validate() != []

    def test_cli_flags_for_push(self, tmp_path):
        provider = EnvironmentConfigProvider(
            config_file=tmp_path / "none.yaml",
            env={"LINEAR_API_KEY": "k"},
            cli_overrides={"team": "ENG", "dry_run": True, "strict": True},
        )

        sync = provider.load().sync

        assert sync.team == "ENG"
        assert sync.dry_run is True
        assert sync.strict is True

    def test_masked_key(self, config_file):
        provider = EnvironmentConfigProvider(config_file=config_file, env={})

        assert provider.load().tracker.masked_key == "lin_api_...6789"
