"""
Local Tree Scanner - Enumerate candidate project folders under a root.

Only immediate subdirectories are considered. The scan is read-only.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from linearctl.core.domain.entities import LocalFolder
from linearctl.core.exceptions import LocalScanError


logger = logging.getLogger(__name__)


class LocalFolderScanner:
    """
    Scans a root directory for project folders.

    Attributes:
        ignore_prefix: Folders whose name starts with this are skipped.
            An empty string disables prefix filtering.
        ignore: Exact folder names to skip.
    """

    def __init__(self, ignore_prefix: str = ".", ignore: Iterable[str] = ()) -> None:
        self.ignore_prefix = ignore_prefix
        self.ignore = frozenset(ignore)

    def scan(self, root: str | Path) -> list[LocalFolder]:
        """
        Scan ``root`` for immediate subdirectories.

        Results are sorted by name case-insensitively, with a case-sensitive
        tiebreak, so repeated scans of an unchanged tree yield the same order.

        Raises:
            LocalScanError: If root does not exist, is not a directory,
                or cannot be listed.
        """
        root_path = Path(root).expanduser()

        if not root_path.exists():
            raise LocalScanError(f"Directory does not exist: {root_path}", path=str(root_path))
        if not root_path.is_dir():
            raise LocalScanError(f"Path is not a directory: {root_path}", path=str(root_path))

        folders: list[LocalFolder] = []
        try:
            with os.scandir(root_path) as entries:
                for entry in entries:
                    if not self._is_candidate(entry):
                        continue
                    entry_path = Path(entry.path)
                    folders.append(
                        LocalFolder(
                            name=entry.name,
                            path=str(entry_path),
                            has_git=self._has_git(entry_path),
                        )
                    )
        except OSError as e:
            raise LocalScanError(
                f"Cannot read directory: {root_path}", path=str(root_path), cause=e
            ) from e

        folders.sort(key=lambda f: (f.name.casefold(), f.name))
        logger.debug(f"Scanned {root_path}: {len(folders)} folders")
        return folders

    def _is_candidate(self, entry: os.DirEntry) -> bool:
        if self.ignore_prefix and entry.name.startswith(self.ignore_prefix):
            return False
        if entry.name in self.ignore:
            return False
        try:
            return entry.is_dir()
        except OSError:
            logger.debug(f"Skipping unreadable entry: {entry.path}")
            return False

    @staticmethod
    def _has_git(path: Path) -> bool:
        try:
            return (path / ".git").exists()
        except OSError:
            logger.debug(f"Cannot check for .git in {path}")
            return False
