"""
Creation and verification of the per-action symlinks.
"""

from dcl.symlinks.manager import SymlinkEntry, SymlinkManager, SymlinkState, summarize
