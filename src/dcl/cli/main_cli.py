"""
Command-line entry point for the dcl multi-call executable.

``dcl`` is installed once and linked under every action name
(``dcl --symlinks``). Running one of those links, e.g.::

    $ upcase this is a test
    THIS IS A TEST

dispatches on the link's name; the options below apply to every action.
"""

import logging
import sys
from typing import List, Optional

import typer

from dcl.core.config import load_settings
from dcl.core.errors import ConfigError
from dcl.core.messages import MessageWriter
from dcl.core.settings import ABOUT, DBGLVL1, DBGLVL2, DBGLVL3, PROGID, PROGNAME
from dcl.dispatch.context import InvocationContext, normalize_invocation_name
from dcl.dispatch.dispatcher import EXIT_FAILURE, Dispatcher
from dcl.dispatch.options import GlobalOptions
from dcl.registry import REGISTRY, format_available

app = typer.Typer(add_completion=False, help="DCL commands and lexical functions for the Linux shell")


def _configure_logging(debug: int) -> None:
    if debug >= DBGLVL2:
        level = logging.DEBUG
    elif debug >= DBGLVL1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s - %(message)s")


def _about_callback(value: bool):
    if value:
        typer.echo(PROGID)
        typer.echo(ABOUT)
        raise typer.Exit()


def _help_callback(ctx: typer.Context, value: bool):
    if not value or ctx.resilient_parsing:
        return
    typer.echo(ctx.get_help())
    typer.echo(format_available("  Available commands: ", REGISTRY.file_commands, 8))
    typer.echo(format_available(" Available functions: ", REGISTRY.lexical_functions, 4))
    raise typer.Exit()


@app.command(context_settings={"help_option_names": []})
def dcl_command(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(None, help="File specs and /qualifiers, or the text to transform"),
    verbose: bool = typer.Option(False, "--verbose", "-v", "--log", help="Verbose mode"),
    noop: bool = typer.Option(False, "--noop", "-n", "--dryrun", "--test",
                              help="Dry-run (test & display, no-op) mode"),
    interactive: bool = typer.Option(False, "--interactive", "-i", "--confirm", help="Interactive mode (/CONFIRM)"),
    pager: bool = typer.Option(False, "--pager", "-m", "--less", "--more", help="Use a pager for long output"),
    preserve: bool = typer.Option(False, "--preserve", "-p",
                                  help="Preserve file metadata (owner, permissions, datetimes)"),
    symlinks: bool = typer.Option(False, "--symlinks", "-l", "--links",
                                  help="Create or verify symlinks for all commands and functions"),
    debug: int = typer.Option(0, "--debug", "-d", help="Debug level: 1 basic, 2 advanced, 3 start the debugger"),
    about: bool = typer.Option(False, "--about", "-a", callback=_about_callback, is_eager=True,
                               expose_value=False, help="Display program info"),
    show_help: bool = typer.Option(False, "--help", "-h", callback=_help_callback, is_eager=True,
                                   expose_value=False, help="Display this help text"),
):
    """
    Run the DCL command or lexical function this program was invoked as.

    Only the installed script and its symlinks select an action;
    ``python -m`` would dispatch on the module file name.
    """
    _configure_logging(debug)
    invocation_path = (ctx.obj or {}).get("invocation_path") or ctx.info_name or PROGNAME

    try:
        settings = load_settings()
    except ConfigError as e:
        MessageWriter().error(PROGNAME, e.code, str(e))
        raise typer.Exit(EXIT_FAILURE)

    global_options = GlobalOptions(
        verbose=verbose or noop or settings.verbose,  # dry-run implies verbose
        noop=noop,
        interactive=interactive or settings.confirm,
        pager=pager or settings.pager,
        preserve=preserve or settings.preserve,
        symlinks=symlinks,
        debug=max(debug, settings.debug),
    )
    if global_options.debug >= DBGLVL3:
        breakpoint()

    context = InvocationContext.build(invocation_path, args or [], global_options)
    status = Dispatcher(context, settings=settings).run()
    raise typer.Exit(status)


def main(argv: Optional[List[str]] = None):
    """Console-script entry point; ``argv[0]`` selects the action."""
    argv = list(sys.argv if argv is None else argv)
    invocation_path = argv[0] if argv else PROGNAME
    app(
        args=argv[1:],
        prog_name=normalize_invocation_name(invocation_path),
        obj={"invocation_path": invocation_path},
    )

