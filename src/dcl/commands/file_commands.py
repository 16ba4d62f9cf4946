# src/dcl/commands/file_commands.py
"""
DCL file commands mapped onto local file operations.

Every handler has the same shape::

    handler(sources, destination, options, confirm=None, log=None) -> FileOpResult

``sources`` is the list of file specs before the last one and
``destination`` the last spec (or None). Commands that do not have a
destination (DELETE, CREATE, PURGE, SHOW) treat it as one more file spec.

``confirm`` asks the user about one step when /CONFIRM is in effect and
``log`` receives each step as it is carried out when /LOG is in effect.
Under --noop the steps are reported but nothing on disk changes.
"""

import getpass
import logging
import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from dcl.core.errors import DestinationNotDirectoryError, HandlerError
from dcl.dispatch.options import EffectiveOptions

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
Log = Callable[[str], None]

# Numbered backups first: "name.~3~" also ends in "~"
BACKUP_PATTERNS = (
    re.compile(r"^(?P<base>.+)\.~\d+~$"),      # name.~3~
    re.compile(r"^(?P<base>.+)\.bak$"),        # name.bak
    re.compile(r"^(?P<base>.+)~$"),            # name~
)


class FileOpResult(BaseModel):
    """What a file command did, and anything it has to show."""
    output: Optional[str] = None
    actions: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class _Steps:
    """Runs the individual steps of a command under the effective options."""

    def __init__(self, options: EffectiveOptions, confirm: Optional[Confirm], log: Optional[Log]):
        self.options = options
        self.confirm = confirm
        self.log = log
        self.result = FileOpResult()

    def approved(self, question: str, item: str) -> bool:
        if self.options.confirm and self.confirm is not None and not self.confirm(question):
            self.result.skipped.append(item)
            return False
        return True

    def run(self, description: str, operation: Callable[[], object]) -> None:
        self.result.actions.append(description)
        if self.options.verbose and self.log is not None:
            self.log(description)
        if self.options.noop:
            logger.debug("noop: %s", description)
            return
        operation()


def _all_specs(sources: List[str], destination: Optional[str]) -> List[str]:
    specs = list(sources)
    if destination is not None:
        specs.append(destination)
    return specs


def _require_pair(command: str, sources: List[str], destination: Optional[str]) -> Path:
    if not sources or destination is None:
        raise HandlerError(f"{command} needs at least one source and a destination")
    dest = Path(destination)
    if len(sources) > 1 and not dest.is_dir():
        raise DestinationNotDirectoryError(destination)
    return dest


def copy(sources: List[str], destination: Optional[str], options: EffectiveOptions,
         confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    _require_pair("copy", sources, destination)
    steps = _Steps(options, confirm, log)
    copier = shutil.copy2 if options.preserve else shutil.copy
    verb = "cp -p" if options.preserve else "cp"
    for src in sources:
        if steps.approved(f"Copy {src} to {destination}?", src):
            steps.run(f"{verb} {src} {destination}", lambda src=src: copier(src, destination))
    return steps.result


def rename(sources: List[str], destination: Optional[str], options: EffectiveOptions,
           confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    _require_pair("rename", sources, destination)
    steps = _Steps(options, confirm, log)
    for src in sources:
        if steps.approved(f"Rename {src} to {destination}?", src):
            steps.run(f"mv {src} {destination}", lambda src=src: shutil.move(src, destination))
    return steps.result


def delete(sources: List[str], destination: Optional[str], options: EffectiveOptions,
           confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    specs = _all_specs(sources, destination)
    if not specs:
        raise HandlerError("delete needs at least one file spec")
    steps = _Steps(options, confirm, log)
    for spec in specs:
        if steps.approved(f"Delete {spec}?", spec):
            steps.run(f"rm {spec}", lambda spec=spec: os.remove(spec))
    return steps.result


def create(sources: List[str], destination: Optional[str], options: EffectiveOptions,
           confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    specs = _all_specs(sources, destination)
    if not specs:
        raise HandlerError("create needs at least one file spec")
    steps = _Steps(options, confirm, log)
    for spec in specs:
        if steps.approved(f"Create {spec}?", spec):
            steps.run(f"touch {spec}", lambda spec=spec: Path(spec).touch(exist_ok=True))
    return steps.result


def backup_base(name: str) -> Optional[str]:
    """The file a backup name belongs to, or None if ``name`` is not a backup."""
    for pattern in BACKUP_PATTERNS:
        match = pattern.match(name)
        if match:
            return match.group("base")
    return None


def find_backups(spec: str) -> List[Path]:
    """Backup versions of a file, or every backup inside a directory."""
    path = Path(spec)
    if path.is_dir():
        candidates = sorted(p for p in path.iterdir() if backup_base(p.name) is not None)
    else:
        parent = path.parent
        if not parent.is_dir():
            return []
        candidates = sorted(p for p in parent.iterdir() if backup_base(p.name) == path.name)
    return [p for p in candidates if p.is_file() and not p.is_symlink()]


def purge(sources: List[str], destination: Optional[str], options: EffectiveOptions,
          confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    """Remove backup versions, keeping the current file."""
    specs = _all_specs(sources, destination) or ["."]
    steps = _Steps(options, confirm, log)
    for spec in specs:
        for backup in find_backups(spec):
            if steps.approved(f"Purge {backup}?", str(backup)):
                steps.run(f"rm {backup}", lambda backup=backup: backup.unlink())
    if not steps.result.actions and not steps.result.skipped:
        steps.result.output = "no backup versions found"
    return steps.result


def search(sources: List[str], destination: Optional[str], options: EffectiveOptions,
           confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    """
    SEARCH file[,...] pattern

    The pattern is a case-insensitive regular expression rather than a DCL
    wildcard string. Matching lines are reported as ``line`` for a single
    file or ``file:lineno:line`` for several.
    """
    if not sources or destination is None:
        raise HandlerError("search needs at least one file and a pattern")
    try:
        pattern = re.compile(destination, re.IGNORECASE)
    except re.error as e:
        raise HandlerError(f"bad search pattern '{destination}': {e}") from e

    several = len(sources) > 1
    lines = []
    for src in sources:
        with open(src, "r", encoding="utf-8", errors="replace") as fh:
            for lineno, line in enumerate(fh, start=1):
                line = line.rstrip("\n")
                if pattern.search(line):
                    lines.append(f"{src}:{lineno}:{line}" if several else line)
    return FileOpResult(output="\n".join(lines) if lines else None)


def _show_default(args: List[str]) -> str:
    return os.getcwd() + os.sep


def _show_time(args: List[str]) -> str:
    return "  " + datetime.now().strftime("%d-%b-%Y %H:%M:%S").upper()


def _show_user(args: List[str]) -> str:
    return getpass.getuser()


def _show_symbol(args: List[str]) -> str:
    if not args:
        raise HandlerError("show symbol needs a symbol name")
    lines = []
    for name in args:
        value = os.environ.get(name)
        if value is None:
            raise HandlerError(f"undefined symbol {name}")
        lines.append(f'  {name} = "{value}"')
    return "\n".join(lines)


SHOW_TOPICS: Dict[str, Callable[[List[str]], str]] = {
    "default": _show_default,
    "symbol": _show_symbol,
    "time": _show_time,
    "user": _show_user,
}


def show(sources: List[str], destination: Optional[str], options: EffectiveOptions,
         confirm: Optional[Confirm] = None, log: Optional[Log] = None) -> FileOpResult:
    words = _all_specs(sources, destination)
    if not words:
        raise HandlerError(f"show what? choose from {', '.join(SHOW_TOPICS)}")
    topic = words[0].lower()
    # DCL accepts any unambiguous abbreviation, e.g. SHOW DEF
    matches = [name for name in SHOW_TOPICS if name.startswith(topic)]
    if len(matches) != 1:
        raise HandlerError(f"unknown show topic '{words[0]}'; choose from {', '.join(SHOW_TOPICS)}")
    return FileOpResult(output=SHOW_TOPICS[matches[0]](words[1:]))
