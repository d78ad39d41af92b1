"""
CLI App - Main entry point for the linearctl command line tool.
"""

import argparse
import logging
import sys

from linearctl import __version__
from linearctl.core.domain.enums import MatchMode

from .commands import run_config, run_sync_push, run_sync_status
from .exit_codes import ExitCode
from .logging import setup_logging
from .output import Console


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for linearctl.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="linearctl",
        description="Keep a folder of local projects in sync with Linear projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Store your API key (https://linear.app/settings/api)
  linearctl config set-key lin_api_xxx

  # Which folders in ~/code have a Linear project?
  linearctl sync status --directory ~/code --team ENG

  # Only the folders that are missing
  linearctl sync status --team ENG --missing-only

  # Preview, then create the missing projects
  linearctl sync push --team ENG --dry-run
  linearctl sync push --team ENG

  # Create just two of them
  linearctl sync push --team ENG --only api,web

  # Machine-readable report
  linearctl --output json sync status --team ENG
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--output", "-o", choices=["text", "json"], default="text", help="Output format"
    )
    output_group.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    output_group.add_argument(
        "--quiet", "-q", action="store_true", help="Only print errors and a one-line summary"
    )
    output_group.add_argument("--no-color", action="store_true", help="Disable colored output")
    output_group.add_argument(
        "--log-format", choices=["text", "json"], default="text", help="Log format (stderr)"
    )
    output_group.add_argument("--log-file", metavar="PATH", help="Also write logs to this file")

    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument("--config", "-c", metavar="PATH", help="Config file path")
    config_group.add_argument("--workspace", "-w", metavar="NAME", help="Workspace to use")
    config_group.add_argument(
        "--match",
        choices=[m.value for m in MatchMode],
        help="How folder names are compared to project names (default: exact)",
    )
    config_group.add_argument(
        "--strict",
        action="store_true",
        help="Exit with code 3 when some project creations fail",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # sync
    sync_parser = subparsers.add_parser("sync", help="Reconcile local folders with Linear projects")
    sync_sub = sync_parser.add_subparsers(dest="sync_command", metavar="ACTION")

    def add_scope(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--directory", "-d", metavar="DIR", help="Folder to scan (default: current directory)"
        )
        p.add_argument("--team", "-t", metavar="TEAM", help="Team id, key or name")

    status_parser = sync_sub.add_parser("status", help="Show synced, local-only and Linear-only")
    add_scope(status_parser)
    status_parser.add_argument(
        "--missing-only", action="store_true", help="Only list folders with no Linear project"
    )

    push_parser = sync_sub.add_parser("push", help="Create Linear projects for local-only folders")
    add_scope(push_parser)
    push_parser.add_argument("--only", metavar="A,B", help="Comma-separated folder names to create")
    push_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be created without creating it"
    )

    # config
    config_parser = subparsers.add_parser("config", help="Manage API keys and workspaces")
    config_sub = config_parser.add_subparsers(dest="config_command", metavar="ACTION")

    set_key = config_sub.add_parser("set-key", help="Store an API key in the current workspace")
    set_key.add_argument("key", help="Linear API key")

    config_sub.add_parser("show", help="Show the active configuration")

    ws_add = config_sub.add_parser("workspace-add", help="Add a named workspace")
    ws_add.add_argument("name", help="Workspace name")
    ws_add.add_argument("key", help="Linear API key")
    ws_add.add_argument("--team", dest="default_team", metavar="TEAM", help="Default team")

    config_sub.add_parser("workspace-list", help="List workspaces")

    ws_switch = config_sub.add_parser("workspace-switch", help="Make a workspace current")
    ws_switch.add_argument("name", help="Workspace name")

    config_sub.add_parser("workspace-current", help="Print the current workspace")

    ws_remove = config_sub.add_parser("workspace-remove", help="Remove a workspace")
    ws_remove.add_argument("name", help="Workspace name")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the linearctl CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "sync" and not args.sync_command:
        parser.error("sync requires an action: status or push")
    if args.command == "config" and not args.config_command:
        parser.error("config requires an action (see 'linearctl config --help')")
    if not args.command:
        parser.print_help()
        return ExitCode.CONFIG_ERROR

    console = Console(
        color=not args.no_color,
        verbose=args.verbose,
        quiet=args.quiet,
        json_mode=args.output == "json",
    )

    log_level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO

    try:
        setup_logging(level=log_level, log_format=args.log_format, log_file=args.log_file)

        if args.command == "config":
            return run_config(console, args)
        if args.sync_command == "push":
            return run_sync_push(console, args)
        return run_sync_status(console, args)

    except KeyboardInterrupt:
        console.print()
        console.warning("Interrupted by user")
        return ExitCode.SIGINT

    except Exception as e:
        console.error_rich(e)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return ExitCode.from_exception(e)


def run() -> None:
    """
    Entry point for the console script.

    Calls main() and exits with its return code.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
