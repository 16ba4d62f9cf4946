"""
Symlink maintenance for the multi-call dispatcher.

Every registered action name is installed as a symlink in one directory,
each pointing back at the dispatcher executable. The maintenance pass
creates missing links and verifies existing ones; it never overwrites an
ordinary file or repoints a symlink somebody else owns.
"""

import logging
import os
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class SymlinkState(str, Enum):
    """Outcome of the maintenance step for one name."""
    VERIFIED = "verified"        # symlink already points at the target
    CREATED = "created"          # symlink was missing and has been made
    CONFLICT = "conflict"        # a non-symlink occupies the link path
    BROKEN_LINK = "broken_link"  # symlink exists but points elsewhere
    FAILED = "failed"            # OS error or unregistered name


class SymlinkEntry(BaseModel):
    """Status of one action name after a maintenance pass."""
    name: str
    target_path: Path
    link_path: Path
    state: SymlinkState
    error: Optional[str] = None


class SymlinkManager:
    """
    Creates and verifies action symlinks.

    Each name is handled independently: a failure on one entry is recorded
    on that entry and the pass moves on to the next name.
    """

    def __init__(self, registered: Optional[Iterable[str]] = None):
        """
        Args:
            registered: Names allowed to have a link. When given, any other
                name is reported as failed instead of being linked.
        """
        self.registered = set(registered) if registered is not None else None

    def ensure_symlinks(self, names: Iterable[str], target: Path, link_dir: Path) -> List[SymlinkEntry]:
        # The link text is resolved against link_dir, not the working directory
        target = Path(target).absolute()
        link_dir = Path(link_dir)
        return [self._ensure_one(name, target, link_dir) for name in names]

    def _ensure_one(self, name: str, target: Path, link_dir: Path) -> SymlinkEntry:
        link_path = link_dir / name
        if self.registered is not None and name not in self.registered:
            return self._entry(name, target, link_path, SymlinkState.FAILED,
                               error=f"'{name}' is not a registered action")
        try:
            link_dir.mkdir(parents=True, exist_ok=True)
            state = self.classify(link_path, target)
            if state is None:
                try:
                    link_path.symlink_to(target)
                    state = SymlinkState.CREATED
                except FileExistsError:
                    # Another pass created it between the check and the symlink call
                    state = self.classify(link_path, target) or SymlinkState.CONFLICT
        except OSError as e:
            logger.debug("Symlink maintenance failed for %s: %s", link_path, e)
            return self._entry(name, target, link_path, SymlinkState.FAILED, error=str(e))
        return self._entry(name, target, link_path, state)

    @staticmethod
    def classify(link_path: Path, target: Path) -> Optional[SymlinkState]:
        """
        Inspect ``link_path`` without changing anything.

        Returns None when nothing exists there and a link may be created.
        """
        if link_path.is_symlink():
            if points_to(link_path, target):
                return SymlinkState.VERIFIED
            return SymlinkState.BROKEN_LINK
        if link_path.exists():
            return SymlinkState.CONFLICT
        return None

    @staticmethod
    def _entry(name, target, link_path, state, error=None) -> SymlinkEntry:
        return SymlinkEntry(name=name, target_path=target, link_path=link_path, state=state, error=error)


def points_to(link_path: Path, target: Path) -> bool:
    """True when the symlink resolves to the same place as ``target``."""
    return os.path.realpath(link_path) == os.path.realpath(target)


def summarize(entries: Iterable[SymlinkEntry]) -> Dict[SymlinkState, int]:
    """Count the entries of a pass per state."""
    counts = Counter(entry.state for entry in entries)
    return {state: counts.get(state, 0) for state in SymlinkState}
