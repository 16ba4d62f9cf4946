"""
DCL file commands.

FILE_COMMAND_TABLE maps every file command name to its handler.
"""

from dcl.commands import file_commands
from dcl.commands.listing import directory

FILE_COMMAND_TABLE = {
    "copy": file_commands.copy,
    "create": file_commands.create,
    "rename": file_commands.rename,
    "delete": file_commands.delete,
    "purge": file_commands.purge,
    "search": file_commands.search,
    "directory": directory,
    "show": file_commands.show,
}
