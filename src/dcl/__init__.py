"""
dcl: a multi-call dispatcher for VMS DCL style file commands and lexical functions.
"""

__version__ = "3.0.0"
