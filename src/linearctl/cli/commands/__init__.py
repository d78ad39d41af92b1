"""
CLI Commands Package - Command handlers for the linearctl CLI.
"""

from .config import run_config
from .sync import run_sync_push, run_sync_status


__all__ = [
    # Sync commands
    "run_sync_status",
    "run_sync_push",
    # Config commands
    "run_config",
]
