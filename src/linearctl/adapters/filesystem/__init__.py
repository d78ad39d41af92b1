"""
Filesystem Adapter - Local directory scanning.
"""

from linearctl.adapters.filesystem.scanner import LocalFolderScanner


__all__ = ["LocalFolderScanner"]
