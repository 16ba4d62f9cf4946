"""
Global options and the per-invocation effective options.
"""

from typing import Mapping, Union

from pydantic import BaseModel, ConfigDict


class GlobalOptions(BaseModel):
    """Options given as command-line switches (or config defaults)."""
    model_config = ConfigDict(frozen=True)

    verbose: bool = False
    noop: bool = False
    interactive: bool = False
    pager: bool = False
    preserve: bool = False
    symlinks: bool = False
    debug: int = 0


class EffectiveOptions(BaseModel):
    """Options a single action runs with."""
    model_config = ConfigDict(frozen=True)

    verbose: bool = False
    confirm: bool = False
    noop: bool = False
    preserve: bool = False
    pager: bool = False
    debug: int = 0


def blend(global_options: Union[GlobalOptions, Mapping], qualifiers: Mapping[str, bool]) -> EffectiveOptions:
    """
    Merge global options with extracted qualifiers.

    Boolean flags are OR'd so either source can turn them on. Everything
    else comes from the global options; qualifiers cannot set it.
    """
    if not isinstance(global_options, GlobalOptions):
        global_options = GlobalOptions(**dict(global_options))
    return EffectiveOptions(
        verbose=global_options.verbose or bool(qualifiers.get("verbose")),
        confirm=global_options.interactive or bool(qualifiers.get("confirm")),
        noop=global_options.noop or bool(qualifiers.get("noop")),
        preserve=global_options.preserve,
        pager=global_options.pager,
        debug=global_options.debug,
    )
