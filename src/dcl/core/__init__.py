"""
Shared configuration, errors and diagnostic output for dcl.
"""
