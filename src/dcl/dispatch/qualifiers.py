"""
DCL qualifier extraction.

File commands accept VMS-style qualifiers such as ``/LOG`` or ``/CONFIRM``
mixed in with their file specs. The parser separates the two in a single
left-to-right pass, keeping file specs in the order they were given.
"""

import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple, Union

# Checked in order; the first matching pattern wins.
QUALIFIER_TABLE: Tuple[Tuple[Pattern, str], ...] = (
    (re.compile(r"^/LOG$", re.IGNORECASE), "verbose"),
    (re.compile(r"^/CONF(?:I|IR|IRM)?$", re.IGNORECASE), "confirm"),
)

Sources = Union[None, str, List[str]]


def match_qualifier(token: str) -> Optional[str]:
    """Return the flag a token sets, or None for a file spec."""
    for pattern, flag in QUALIFIER_TABLE:
        if pattern.match(token):
            return flag
    return None


def parse(args: Sequence[str]) -> Tuple[List[str], Dict[str, bool]]:
    """
    Split an argument vector into positional file specs and qualifier flags.

    >>> parse(["foo", "/confirm", "bar"])
    (['foo', 'bar'], {'confirm': True})
    """
    positionals: List[str] = []
    qualifiers: Dict[str, bool] = {}
    for token in args:
        flag = match_qualifier(token)
        if flag is None:
            positionals.append(token)
        else:
            qualifiers[flag] = True
    return positionals, qualifiers


def split_positionals(positionals: Sequence[str]) -> Tuple[Sources, Optional[str]]:
    """
    Map file specs onto (sources, destination).

    One spec has no destination, two are a source/destination pair, and
    more than two are several sources followed by one destination.
    """
    count = len(positionals)
    if count == 0:
        return None, None
    if count == 1:
        return positionals[0], None
    if count == 2:
        return positionals[0], positionals[1]
    return list(positionals[:-1]), positionals[-1]


def as_source_list(sources: Sources) -> List[str]:
    if sources is None:
        return []
    if isinstance(sources, str):
        return [sources]
    return list(sources)
