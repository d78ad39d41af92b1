"""
Domain enums - Match policies, sync modes and entry states.
"""

from __future__ import annotations

import re
from enum import Enum


_SEPARATORS = re.compile(r"[\s_\-]+")


class MatchMode(Enum):
    """How a local folder name is compared to a remote project name."""

    EXACT = "exact"
    IGNORE_CASE = "ignore-case"
    NORMALIZED = "normalized"

    @classmethod
    def from_string(cls, value: str) -> MatchMode:
        """
        Parse a match mode from config or CLI input.

        Accepts the canonical values plus a few spellings
        (``ignore_case``, ``case-insensitive``, ``normalize``).
        """
        value = value.strip().lower().replace("_", "-")
        aliases = {
            "exact": cls.EXACT,
            "case-sensitive": cls.EXACT,
            "ignore-case": cls.IGNORE_CASE,
            "case-insensitive": cls.IGNORE_CASE,
            "normalized": cls.NORMALIZED,
            "normalize": cls.NORMALIZED,
        }
        if value not in aliases:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown match mode '{value}' (expected one of: {valid})")
        return aliases[value]

    def key(self, name: str) -> str:
        """
        Return the comparison key for a name under this policy.

        Two names match exactly when their keys are equal.
        """
        if self is MatchMode.EXACT:
            return name
        if self is MatchMode.IGNORE_CASE:
            return name.casefold()
        return _SEPARATORS.sub("-", name.strip()).casefold()


class SyncMode(Enum):
    """What a reconciliation pass is allowed to do."""

    STATUS = "status"
    DRY_RUN = "dry-run"
    PUSH = "push"

    @property
    def creates(self) -> bool:
        """Whether this mode issues create calls."""
        return self is SyncMode.PUSH


class EntryState(Enum):
    """Classification of a single reconciled entry."""

    MATCHED = "matched"
    LOCAL_ONLY = "local_only"
    REMOTE_ONLY = "remote_only"

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return {
            EntryState.MATCHED: "Synced",
            EntryState.LOCAL_ONLY: "Local only",
            EntryState.REMOTE_ONLY: "Linear only",
        }[self]
