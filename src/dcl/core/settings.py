"""
Project-wide constants that are unlikely to change at runtime.
"""

from pathlib import Path

from dcl import __version__

PROGNAME = "dcl"
PROGID = f"{PROGNAME} v{__version__}"
ABOUT = "DCL command and lexical function emulator for the Linux command line"

CONFIG_DIR = Path.home() / ".config" / PROGNAME
CONFIG_FILE = CONFIG_DIR / f".{PROGNAME}.yaml.rc"

# --debug levels
DBGLVL1 = 1  # basic debugging information
DBGLVL2 = 2  # parsed arguments and effective options
DBGLVL3 = 3  # drops into the debugger
