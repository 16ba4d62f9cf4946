"""
Command-line interface for dcl.
"""
