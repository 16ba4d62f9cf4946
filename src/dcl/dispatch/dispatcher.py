# src/dcl/dispatch/dispatcher.py
"""
Dispatcher: routes one invocation to the action named by its invocation name.

The invocation name (the basename dcl was run as, usually one of its
symlinks) is the only thing that selects the action. The outcome is one of
four routes: the symlink maintenance pass, a file command, a lexical
function, or an unrecognized-action error.
"""

import logging
import sys
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, TextIO

import typer
from rich.console import Console

from dcl.commands import FILE_COMMAND_TABLE
from dcl.core.config import Settings
from dcl.core.errors import DclError, HandlerError, LexicalFunctionError, UnrecognizedActionError
from dcl.core.messages import MessageWriter
from dcl.core.settings import PROGNAME
from dcl.dispatch.context import InvocationContext
from dcl.dispatch.options import EffectiveOptions, blend
from dcl.dispatch.qualifiers import as_source_list, parse, split_positionals
from dcl.functions import LEXICAL_TABLE, LexicalFunction
from dcl.registry import REGISTRY, SYMLINK_FUNCTION, NameRegistry
from dcl.symlinks.manager import SymlinkEntry, SymlinkManager, SymlinkState, summarize

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class Route(str, Enum):
    """Where an invocation ends up."""
    MAINTENANCE = "maintenance"
    FILE_COMMAND = "file_command"
    LEXICAL_FUNCTION = "lexical_function"
    UNRECOGNIZED = "unrecognized"


def _chomp(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def _ask(question: str) -> bool:
    return typer.confirm(question, default=False, err=True)


class Dispatcher:
    """
    Runs a single invocation to completion.

    Handler tables, streams and the confirmation prompt can be replaced,
    which is how the tests drive it without a terminal.
    """

    def __init__(
        self,
        context: InvocationContext,
        settings: Optional[Settings] = None,
        registry: NameRegistry = REGISTRY,
        file_commands: Optional[Mapping[str, Callable]] = None,
        lexical_functions: Optional[Mapping[str, LexicalFunction]] = None,
        messages: Optional[MessageWriter] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        confirm: Callable[[str], bool] = _ask,
    ):
        self.context = context
        self.settings = settings or Settings()
        self.registry = registry
        self.file_commands = file_commands if file_commands is not None else FILE_COMMAND_TABLE
        self.lexical_functions = lexical_functions if lexical_functions is not None else LEXICAL_TABLE
        self.messages = messages or MessageWriter()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.confirm = confirm

    @property
    def action(self) -> str:
        return self.context.invoked_name

    def resolve(self) -> Route:
        if self.context.global_options.symlinks:
            return Route.MAINTENANCE
        if self.registry.is_file_command(self.action):
            return Route.FILE_COMMAND
        if self.registry.is_lexical_function(self.action):
            return Route.LEXICAL_FUNCTION
        return Route.UNRECOGNIZED

    def run(self) -> int:
        """Dispatch and return the process exit status."""
        route = self.resolve()
        logger.info("Invoked as '%s', routed to %s", self.action, route.value)
        try:
            if route is Route.MAINTENANCE:
                self.maintain_symlinks(self.registry.all_names())
            elif route is Route.FILE_COMMAND:
                self.run_file_command()
            elif route is Route.LEXICAL_FUNCTION:
                self.run_lexical_function()
            else:
                raise UnrecognizedActionError(self.action)
        except UnrecognizedActionError as e:
            self.messages.error(PROGNAME, e.code, str(e))
            return EXIT_FAILURE
        except DclError as e:
            self.messages.error(PROGNAME, e.code, f"{self.action}: {e}")
            return EXIT_FAILURE
        except OSError as e:
            self.messages.error(PROGNAME, "failed", f"{self.action}: {e}")
            return EXIT_FAILURE
        return EXIT_SUCCESS

    # ---------- maintenance ----------

    def maintain_symlinks(self, names) -> List[SymlinkEntry]:
        path = self.context.invocation_path
        target = self.settings.resolve_target(path)
        link_dir = self.settings.resolve_link_dir(path)
        manager = SymlinkManager(registered=self.registry.all_names())
        entries = manager.ensure_symlinks(names, target, link_dir)
        for entry in entries:
            self._report_symlink(entry)
        if self.context.global_options.verbose:
            counts = summarize(entries)
            self.messages.info(PROGNAME, "summary", ", ".join(
                f"{counts[state]} {state.value}" for state in SymlinkState
            ))
        return entries

    def _report_symlink(self, entry: SymlinkEntry) -> None:
        link, target = entry.link_path, entry.target_path
        if entry.state is SymlinkState.CREATED:
            self.messages.success(PROGNAME, "created", f"symlink {link} created (-> {target})")
        elif entry.state is SymlinkState.VERIFIED:
            self.messages.info(PROGNAME, "verified", f"symlink {link} is verified (-> {target})")
        elif entry.state is SymlinkState.BROKEN_LINK:
            self.messages.error(PROGNAME, "badlink", f"symlink {link} is wrong (not -> {target})")
        elif entry.state is SymlinkState.CONFLICT:
            self.messages.error(PROGNAME, "conflict", f"file {link} exists, no symlink created")
        else:
            self.messages.error(PROGNAME, "failed", f"symlink {link} not created: {entry.error}")

    # ---------- file commands ----------

    def run_file_command(self) -> None:
        handler = self.file_commands.get(self.action)
        if handler is None:
            raise HandlerError(f"DCL command '{self.action}' not yet implemented")
        positionals, qualifiers = parse(self.context.raw_args)
        sources, destination = split_positionals(positionals)
        options = blend(self.context.global_options, qualifiers)
        logger.debug("sources=%r destination=%r qualifiers=%r", sources, destination, qualifiers)
        logger.debug("effective options: %r", options)

        if options.verbose:
            self._echo(" ".join(positionals))
        result = handler(
            as_source_list(sources), destination, options,
            confirm=self.confirm,
            log=lambda step: self.messages.info(self.action, "log", step),
        )
        if result.output is not None:
            self._emit(result.output + "\n", options)
        if options.verbose:
            outcome = f"{len(result.actions)} step(s)"
            if options.noop:
                outcome += " (noop, nothing changed)"
            if result.skipped:
                outcome += f", {len(result.skipped)} skipped"
            self.messages.info(self.action, "result", outcome, emphasis="bold")

    # ---------- lexical functions ----------

    def run_lexical_function(self) -> None:
        options = blend(self.context.global_options, {})
        if self.action == SYMLINK_FUNCTION:
            names = list(self.context.raw_args)
            if not names:
                raise LexicalFunctionError("name one or more actions to link, e.g. 'dclsymlink upcase'")
            self.maintain_symlinks(names)
            return

        function = self.lexical_functions.get(self.action)
        if function is None:
            raise HandlerError(f"DCL function '{self.action}' not yet implemented")
        params, words = function.split_args(self.context.raw_args)
        text = " ".join(words) if words else _chomp(self.stdin.readline())

        if options.verbose:
            self._echo(f"'{text}'" + (f"  {_format_params(params)}" if params else ""))
        result = function(text, options, **params)
        if options.verbose:
            self.messages.info(self.action, "result", f"'{result}'", emphasis="bold")
        self._emit(result, options)

    # ---------- output ----------

    def _echo(self, arguments: str) -> None:
        self.messages.info(self.action, "echo", f"  $ {self.action} {arguments}".rstrip())

    def _emit(self, text: str, options: EffectiveOptions) -> None:
        """Write a result to standard output exactly as given."""
        if options.pager and self.stdout.isatty():
            console = Console(file=self.stdout, highlight=False)
            with console.pager():
                console.print(text, markup=False, end="")
            return
        self.stdout.write(text)
        self.stdout.flush()


def _format_params(params: Dict) -> str:
    return "(" + ", ".join(f"{key}={value!r}" for key, value in params.items()) + ")"
