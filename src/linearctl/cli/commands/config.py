"""
Config command handlers.

Manage the API key and named workspaces stored in the config file:
- set-key: store a key in the current workspace
- show: print the active configuration with the key masked
- workspace-add / workspace-list / workspace-switch / workspace-current / workspace-remove
"""

import os
from argparse import Namespace

from linearctl.adapters.config import ConfigStore, EnvironmentConfigProvider
from linearctl.core.exceptions import ConfigError
from linearctl.core.ports.config_provider import mask_api_key

from ..exit_codes import ExitCode
from ..output import Console


__all__ = ["run_config"]


def _store(args: Namespace) -> ConfigStore:
    return ConfigStore(getattr(args, "config", None))


def run_config(console: Console, args: Namespace) -> int:
    """
    Dispatch a ``config`` subcommand.

    Returns:
        Exit code.
    """
    handlers = {
        "set-key": _set_key,
        "show": _show,
        "workspace-add": _workspace_add,
        "workspace-list": _workspace_list,
        "workspace-switch": _workspace_switch,
        "workspace-current": _workspace_current,
        "workspace-remove": _workspace_remove,
    }
    handler = handlers.get(getattr(args, "config_command", None) or "")
    if handler is None:
        raise ConfigError("Missing config subcommand (see 'linearctl config --help')")
    return handler(console, args)


def _set_key(console: Console, args: Namespace) -> int:
    store = _store(args)
    workspace = store.set_api_key(args.key)
    console.success(f"API key saved to workspace '{workspace}' in {store.path}")
    return ExitCode.SUCCESS


def _show(console: Console, args: Namespace) -> int:
    provider = EnvironmentConfigProvider(
        config_file=getattr(args, "config", None), cli_overrides=vars(args)
    )
    config = provider.load()
    key_source = "LINEAR_API_KEY" if os.environ.get("LINEAR_API_KEY") else "config file"

    if console.json_mode:
        console.json(
            {
                "config_file": str(provider.config_file_path),
                "workspace": config.tracker.workspace,
                "api_key": config.tracker.masked_key or None,
                "api_key_source": key_source if config.tracker.api_key else None,
                "api_url": config.tracker.api_url,
                "default_team": config.tracker.default_team,
                "sync": {
                    "directory": config.sync.directory,
                    "match": config.sync.match_mode.value,
                    "ignore_prefix": config.sync.ignore_prefix,
                    "ignore": config.sync.ignore,
                },
            }
        )
        return ExitCode.SUCCESS

    key = f"{config.tracker.masked_key} (from {key_source})" if config.tracker.api_key else "(not set)"
    console.print(f"Config file:   {provider.config_file_path}", force=True)
    console.print(f"Workspace:     {config.tracker.workspace or '(none)'}", force=True)
    console.print(f"API key:       {key}", force=True)
    console.print(f"API URL:       {config.tracker.api_url}", force=True)
    console.print(f"Default team:  {config.tracker.default_team or '(none)'}", force=True)
    console.print(f"Sync dir:      {config.sync.directory or '(current directory)'}", force=True)
    console.print(f"Match mode:    {config.sync.match_mode.value}", force=True)
    if config.sync.ignore:
        console.print(f"Ignored:       {', '.join(config.sync.ignore)}", force=True)
    return ExitCode.SUCCESS


def _workspace_add(console: Console, args: Namespace) -> int:
    store = _store(args)
    became_current = store.add_workspace(args.name, args.key, getattr(args, "default_team", None))
    console.success(f"Added workspace '{args.name}'")
    if became_current:
        console.info(f"'{args.name}' is now the current workspace")
    return ExitCode.SUCCESS


def _workspace_list(console: Console, args: Namespace) -> int:
    store = _store(args)
    workspaces = store.workspaces

    if console.json_mode:
        console.json(
            {
                "current": store.current,
                "workspaces": [
                    {
                        "name": name,
                        "current": name == store.current,
                        "api_key": mask_api_key(str(ws.get("api_key", ""))),
                        "default_team": ws.get("default_team"),
                    }
                    for name, ws in workspaces.items()
                ],
            }
        )
        return ExitCode.SUCCESS

    if not workspaces:
        console.print("No workspaces configured.", force=True)
        console.print("Add one with: linearctl config workspace-add <name> <key>", force=True)
        return ExitCode.SUCCESS

    for name, ws in workspaces.items():
        marker = "*" if name == store.current else " "
        team = f"  team={ws['default_team']}" if ws.get("default_team") else ""
        console.print(f"{marker} {name}  {mask_api_key(str(ws.get('api_key', '')))}{team}", force=True)
    return ExitCode.SUCCESS


def _workspace_switch(console: Console, args: Namespace) -> int:
    store = _store(args)
    store.switch_workspace(args.name)
    console.success(f"Switched to workspace '{args.name}'")
    return ExitCode.SUCCESS


def _workspace_current(console: Console, args: Namespace) -> int:
    current = _store(args).current
    if console.json_mode:
        console.json({"current": current})
    elif current:
        console.print(current, force=True)
    else:
        console.print("No workspace selected.", force=True)
    return ExitCode.SUCCESS


def _workspace_remove(console: Console, args: Namespace) -> int:
    store = _store(args)
    was_current = store.current == args.name
    switched_to = store.remove_workspace(args.name)
    console.success(f"Removed workspace '{args.name}'")
    if switched_to:
        console.info(f"Switched to workspace '{switched_to}'")
    elif was_current:
        console.warning("No workspaces left; add one with 'linearctl config workspace-add'")
    return ExitCode.SUCCESS
