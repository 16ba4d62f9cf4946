"""
Lexical (string transformation) functions.
"""

from dcl.functions.lexical import LEXICAL_TABLE, LexicalFunction
