"""
Sync command handlers.

This module contains handlers for the folder sync commands:
- run_sync_status: Classify local folders against Linear projects
- run_sync_push: Create Linear projects for local-only folders
"""

import os
from argparse import Namespace
from pathlib import Path

from linearctl.adapters import EnvironmentConfigProvider, LinearAdapter, LocalFolderScanner
from linearctl.application.sync import Reconciler
from linearctl.core.domain.entities import LocalFolder, Team
from linearctl.core.domain.enums import SyncMode
from linearctl.core.exceptions import MissingConfigError
from linearctl.core.ports.config_provider import AppConfig

from ..exit_codes import ExitCode
from ..logging import get_logger
from ..output import Console


__all__ = ["run_sync_status", "run_sync_push"]

logger = get_logger(__name__)


def _load_config(console: Console, args: Namespace) -> AppConfig | None:
    """Load and validate configuration, printing problems. None means invalid."""
    config_file = Path(args.config) if getattr(args, "config", None) else None
    provider = EnvironmentConfigProvider(config_file=config_file, cli_overrides=vars(args))
    logger.debug(f"Using config file {provider.config_file_path}")

    errors = provider.validate()
    if errors:
        console.config_errors(errors)
        return None
    return provider.load()


def _scan(console: Console, config: AppConfig) -> list[LocalFolder]:
    root = Path(config.sync.directory or os.getcwd()).expanduser()
    scanner = LocalFolderScanner(
        ignore_prefix=config.sync.ignore_prefix,
        ignore=config.sync.ignore,
    )
    folders = scanner.scan(root)
    console.info(f"Directory: {root} ({len(folders)} folder(s))")
    return folders


def _resolve_team(console: Console, tracker: LinearAdapter, ref: str | None) -> Team | None:
    if not ref:
        return None
    team = tracker.resolve_team(ref)
    console.info(f"Team: {team.key} ({team.name})")
    return team


def run_sync_status(console: Console, args: Namespace) -> int:
    """
    Show which local folders have a Linear project.

    Args:
        console: Console for output.
        args: Parsed command-line arguments.

    Returns:
        Exit code.
    """
    config = _load_config(console, args)
    if config is None:
        return ExitCode.CONFIG_ERROR

    console.header("linearctl sync status")
    folders = _scan(console, config)

    with LinearAdapter(config=config.tracker, dry_run=True) as tracker:
        team = _resolve_team(console, tracker, config.sync.team or config.tracker.default_team)
        reconciler = Reconciler(lister=tracker, match_mode=config.sync.match_mode)
        result = reconciler.status(folders, team_id=team.id if team else None)

    console.reconciliation_report(result, missing_only=getattr(args, "missing_only", False))
    return ExitCode.SUCCESS


def run_sync_push(console: Console, args: Namespace) -> int:
    """
    Create a Linear project for every local-only folder.

    Creation failures are reported per folder and do not change the exit
    code unless ``--strict`` is given.

    Args:
        console: Console for output.
        args: Parsed command-line arguments.

    Returns:
        Exit code.
    """
    config = _load_config(console, args)
    if config is None:
        return ExitCode.CONFIG_ERROR

    dry_run = config.sync.dry_run
    team_ref = config.sync.team or config.tracker.default_team
    if not team_ref:
        raise MissingConfigError(
            "sync push needs a team: pass --team or set default_team on the workspace",
            setting="team",
        )

    only = None
    if getattr(args, "only", None):
        only = [name for name in args.only.split(",") if name.strip()]

    console.header("linearctl sync push")
    if dry_run:
        console.dry_run_banner()
    folders = _scan(console, config)

    def on_progress(name: str, current: int, total: int) -> None:
        console.debug(f"[{current}/{total}] {name}")

    with LinearAdapter(config=config.tracker, dry_run=dry_run) as tracker:
        team = _resolve_team(console, tracker, team_ref)
        log = logger.bind(team=team.key, dry_run=dry_run)
        reconciler = Reconciler(
            lister=tracker,
            creator=tracker,
            match_mode=config.sync.match_mode,
        )
        result = reconciler.push(
            folders,
            team_id=team.id,
            mode=SyncMode.DRY_RUN if dry_run else SyncMode.PUSH,
            only=only,
            on_progress=on_progress,
        )

    log.info(
        "sync push finished",
        extra={"created_count": len(result.created), "failed_count": len(result.failed)},
    )
    console.push_report(result)

    if result.failed and config.sync.strict:
        return ExitCode.PARTIAL_FAILURE
    return ExitCode.SUCCESS
