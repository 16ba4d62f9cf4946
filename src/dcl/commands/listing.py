"""
DIRECTORY: a VMS-style file listing.
"""

import stat
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from dcl.commands.file_commands import FileOpResult
from dcl.core.errors import HandlerError
from dcl.dispatch.options import EffectiveOptions

ONEKILO = 2 ** 10
ONEMEGA = 2 ** 20
ONEGIGA = 2 ** 30
ONETERA = 2 ** 40
ONEPETA = 2 ** 50
ONEEXA = 2 ** 60

DATETIME_FORMAT = "%a %d-%b-%Y %H:%M:%S"


def size_human_readable(size: int) -> str:
    """Like ``ls -h``: 1023, 1.1K, 2.2M, ..."""
    if size < ONEKILO:
        return str(size)
    for limit, unit, scale in ((ONEMEGA, "K", ONEKILO), (ONEGIGA, "M", ONEMEGA),
                               (ONETERA, "G", ONEGIGA), (ONEPETA, "T", ONETERA),
                               (ONEEXA, "P", ONEPETA)):
        if size < limit:
            return f"{size / scale:5.1f}{unit}"
    return ">1Exa"


def mode_human_readable_vms(mode: int) -> str:
    """``-rw-r--r--`` written as ``- O:rw- G:r-- W:r--``."""
    perm = stat.filemode(mode)
    return f"{perm[0]} O:{perm[1:4]} G:{perm[4:7]} W:{perm[7:10]}"


def _group_specs(specs: List[str]) -> Dict[Path, List[Path]]:
    """Directory -> entries to list, in the order the specs were given."""
    groups: Dict[Path, List[Path]] = {}
    for spec in specs:
        path = Path(spec)
        if path.is_dir():
            groups.setdefault(path.absolute(), []).extend(sorted(path.iterdir()))
        elif path.exists() or path.is_symlink():
            groups.setdefault(path.absolute().parent, []).append(path)
        else:
            raise HandlerError(f"file not found: {spec}")
    return groups


def _entry_line(path: Path) -> Tuple[str, int]:
    info = path.lstat()
    name = path.name + ("/" if stat.S_ISDIR(info.st_mode) else "")
    when = datetime.fromtimestamp(info.st_mtime).strftime(DATETIME_FORMAT)
    size = info.st_size
    line = f"{name:<32} {size_human_readable(size):>7}  {when}  {mode_human_readable_vms(info.st_mode)}"
    return line, size


def _total_line(prefix: str, count: int, size: int) -> str:
    files = "file" if count == 1 else "files"
    return f"{prefix} {count} {files}, {size_human_readable(size).strip()}"


def directory(sources: List[str], destination: Optional[str], options: EffectiveOptions,
              confirm: Optional[Callable] = None, log: Optional[Callable] = None) -> FileOpResult:
    specs = list(sources) + ([destination] if destination is not None else [])
    groups = _group_specs(specs or ["."])

    lines: List[str] = []
    grand_count = grand_size = 0
    for folder, entries in groups.items():
        lines.append(f"Directory {folder}/")
        lines.append("")
        count = size = 0
        for entry in entries:
            line, entry_size = _entry_line(entry)
            lines.append(line)
            count += 1
            size += entry_size
        lines.append("")
        lines.append(_total_line("Total of", count, size))
        lines.append("")
        grand_count += count
        grand_size += size
    if len(groups) > 1:
        lines.append(_total_line(f"Grand total of {len(groups)} directories,", grand_count, grand_size))
    return FileOpResult(output="\n".join(lines).rstrip("\n"))
