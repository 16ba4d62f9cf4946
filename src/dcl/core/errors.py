# src/dcl/core/errors.py
"""
Exception types raised by the dispatcher and its handlers.

Every error carries a short ``code`` used as the ident of the
``%dcl-E-<code>, ...`` diagnostic line.
"""


class DclError(Exception):
    """Base class for every error the dispatcher reports to the user."""

    code = "error"


class ConfigError(DclError):
    code = "config"


class UnrecognizedActionError(DclError):
    """The invocation name is neither a file command nor a lexical function."""

    code = "unrecognized"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"'{name}' is not a registered command or function; "
            f"invoke it through one of the dcl symlinks or run 'dcl --symlinks'"
        )


class HandlerError(DclError):
    """A file command could not complete."""

    code = "failed"


class DestinationNotDirectoryError(HandlerError):
    code = "notdir"

    def __init__(self, destination):
        self.destination = destination
        super().__init__(f"destination path must be a directory: {destination}")


class LexicalFunctionError(DclError):
    """A lexical function was given parameters it cannot use."""

    code = "badparam"
