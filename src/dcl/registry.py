# src/dcl/registry.py
"""
Catalog of the action names dcl answers to.

Names are split into two disjoint, ordered groups: DCL file commands and
lexical functions. The order is the order used for help text and for the
symlink maintenance pass.
"""

from typing import Iterable, List, Tuple

FILE_COMMANDS: Tuple[str, ...] = (
    "copy", "create", "rename",
    "delete", "purge", "search",
    "directory", "show",   # "set" would shadow the bash builtin
)

LEXICAL_FUNCTIONS: Tuple[str, ...] = (
    "capcase", "locase", "upcase", "titlecase",
    "collapse", "compress",
    "cjust", "ljust", "rjust",
    "edit", "element", "extract", "substr",
    "length", "pluralize",
    "thousands", "numbernames",
    "trim", "trim_leading", "trim_trailing",
    "uncomment",
    "dclsymlink",
)

# Lexical function that runs the symlink pass for the names it is given
SYMLINK_FUNCTION = "dclsymlink"


class NameRegistry:
    """Read-only lookup over the two action groups."""

    def __init__(self, file_commands: Iterable[str] = FILE_COMMANDS,
                 lexical_functions: Iterable[str] = LEXICAL_FUNCTIONS):
        self.file_commands = tuple(file_commands)
        self.lexical_functions = tuple(lexical_functions)
        overlap = set(self.file_commands) & set(self.lexical_functions)
        if overlap:
            raise ValueError(f"Names registered in both groups: {sorted(overlap)}")

    def all_names(self) -> Tuple[str, ...]:
        return self.file_commands + self.lexical_functions

    def is_file_command(self, name: str) -> bool:
        return name in self.file_commands

    def is_lexical_function(self, name: str) -> bool:
        return name in self.lexical_functions


def format_available(tag: str, names: Iterable[str], per_line: int) -> str:
    """
    Render a comma-separated list of names, ``per_line`` to a line.

    Continuation lines are indented to line up under the first name.
    """
    names = list(names)
    lines: List[str] = []
    for start in range(0, len(names), per_line):
        lines.append(", ".join(names[start:start + per_line]))
    return tag + (",\n" + " " * len(tag)).join(lines)


REGISTRY = NameRegistry()
