"""
VMS-style status messages for the diagnostic stream.

Messages follow the ``%FACILITY-S-IDENT, text`` layout of DCL and are
coloured by severity. They always go to standard error so that standard
output carries only an action's result.
"""

from typing import Optional

from rich.console import Console
from rich.text import Text

SEVERITY_STYLES = {
    "S": "blue",
    "I": "green",
    "W": "yellow",
    "E": "red",
    "F": "bold red",
}


class MessageWriter:
    """Formats and writes ``%facility-severity-ident`` lines."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True, highlight=False)

    @staticmethod
    def format(facility: str, severity: str, ident: str, text: str) -> str:
        return f"%{facility}-{severity}-{ident}, {text}"

    def report(self, facility: str, severity: str, ident: str, text: str,
               emphasis: Optional[str] = None) -> None:
        line = Text(self.format(facility, severity, ident, text),
                    style=SEVERITY_STYLES.get(severity, ""))
        if emphasis:
            line.stylize(emphasis, len(line) - len(text))
        self.console.print(line, soft_wrap=True)

    def info(self, facility: str, ident: str, text: str, emphasis: Optional[str] = None) -> None:
        self.report(facility, "I", ident, text, emphasis)

    def success(self, facility: str, ident: str, text: str) -> None:
        self.report(facility, "S", ident, text)

    def error(self, facility: str, ident: str, text: str) -> None:
        self.report(facility, "E", ident, text)
