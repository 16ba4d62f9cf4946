# src/dcl/functions/lexical.py
"""
Lexical functions in the spirit of the DCL ``F$*`` library.

Each function is a pure transform ``(text, options, **params) -> str``.
Functions that take leading parameters on the command line (a width, an
element number, an edit list...) pair the transform with a parameter
parser which consumes those arguments and leaves the text arguments.

LEXICAL_TABLE maps every lexical function name to its implementation.
"""

import re
import shutil
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from dcl.core.errors import LexicalFunctionError
from dcl.functions import numbers

ParamParser = Callable[[List[str]], Tuple[Dict[str, Any], List[str]]]

SMALL_WORDS = frozenset(
    "a an and as at but by en for if in nor of on or per the to v vs via".split()
)


# ---------- transforms ----------

def capcase(text: str, options=None) -> str:
    return text.capitalize()


def locase(text: str, options=None) -> str:
    return text.lower()


def upcase(text: str, options=None) -> str:
    return text.upper()


def titlecase(text: str, options=None) -> str:
    """Capitalize every word except short connectives after the first word."""
    words = text.split(" ")
    out = []
    seen_word = False
    for word in words:
        if word and seen_word and word.lower() in SMALL_WORDS:
            out.append(word.lower())
        elif word:
            out.append(word[0].upper() + word[1:].lower())
        else:
            out.append(word)
        seen_word = seen_word or bool(word)
    return " ".join(out)


def collapse(text: str, options=None) -> str:
    """Remove all whitespace."""
    return re.sub(r"\s+", "", text)


def compress(text: str, options=None) -> str:
    """Squeeze whitespace runs to one space and trim both ends."""
    return re.sub(r"\s+", " ", text).strip()


def trim(text: str, options=None) -> str:
    return text.strip()


def trim_leading(text: str, options=None) -> str:
    return text.lstrip()


def trim_trailing(text: str, options=None) -> str:
    return text.rstrip()


def uncomment(text: str, options=None, comment: str = "#") -> str:
    """Drop everything from the comment character to end of line."""
    lines = [line.split(comment, 1)[0].rstrip() for line in text.split("\n")]
    return "\n".join(lines)


def length(text: str, options=None) -> str:
    return str(len(text))


def cjust(text: str, options=None, width: int = 80) -> str:
    return text.center(width)


def ljust(text: str, options=None, width: int = 80) -> str:
    return text.ljust(width)


def rjust(text: str, options=None, width: int = 80) -> str:
    return text.rjust(width)


def element(text: str, options=None, index: int = 0, separator: str = ",") -> str:
    """
    Zero-based element of a delimited list.

    As with DCL's F$ELEMENT, an index past the end returns the separator.
    """
    parts = text.split(separator)
    if index < 0 or index >= len(parts):
        return separator
    return parts[index]


def substr(text: str, options=None, start: int = 0, count: int = 0) -> str:
    """``count`` characters from ``start``; a negative start counts from the end."""
    if start < 0:
        start += len(text)
        if start < 0:
            return ""
    if count < 0:
        return ""
    return text[start:start + count]


EDITS: Dict[str, Callable[[str], str]] = {
    "capcase": capcase,
    "collapse": collapse,
    "compress": compress,
    "locase": locase,
    "lowercase": locase,
    "titlecase": titlecase,
    "trim": trim,
    "trim_leading": trim_leading,
    "trim_trailing": trim_trailing,
    "uncomment": uncomment,
    "upcase": upcase,
    "uppercase": upcase,
}


def edit(text: str, options=None, edits: Sequence[str] = ()) -> str:
    """Apply a chain of named edits, left to right."""
    for name in edits:
        text = EDITS[name](text)
    return text


# ---------- parameter parsers ----------

def _int_param(args: List[str], what: str) -> int:
    if not args:
        raise LexicalFunctionError(f"missing {what}")
    try:
        return int(args.pop(0))
    except ValueError:
        raise LexicalFunctionError(f"{what} must be an integer") from None


def _width_params(args: List[str]):
    args = list(args)
    if args and re.fullmatch(r"\d+", args[0]):
        width = int(args.pop(0))
    else:
        width = shutil.get_terminal_size().columns
    return {"width": width}, args


def _edit_params(args: List[str]):
    args = list(args)
    if not args:
        raise LexicalFunctionError("missing edit list, e.g. 'compress,upcase'")
    edits = [name.strip().lower() for name in args.pop(0).split(",") if name.strip()]
    unknown = [name for name in edits if name not in EDITS]
    if unknown:
        raise LexicalFunctionError(
            f"unknown edit(s) {', '.join(unknown)}; choose from {', '.join(sorted(EDITS))}"
        )
    return {"edits": edits}, args


def _element_params(args: List[str]):
    args = list(args)
    index = _int_param(args, "element number")
    separator = args.pop(0) if args and len(args[0]) == 1 else ","
    return {"index": index, "separator": separator}, args


def _substr_params(args: List[str]):
    args = list(args)
    start = _int_param(args, "start position")
    count = _int_param(args, "length")
    return {"start": start, "count": count}, args


def _pluralize_params(args: List[str]):
    args = list(args)
    if not args:
        raise LexicalFunctionError("missing word to pluralize")
    word = args.pop(0)
    count = _int_param(args, "count")
    irregular = args.pop(0) if args else None
    return {"count": count, "irregular": irregular}, [word]


class LexicalFunction:
    """A transform plus the parser for its leading command-line parameters."""

    def __init__(self, transform: Callable[..., str], parse_params: Optional[ParamParser] = None):
        self.transform = transform
        self.parse_params = parse_params

    def split_args(self, args: Sequence[str]) -> Tuple[Dict[str, Any], List[str]]:
        """Return (params, text arguments)."""
        if self.parse_params is None:
            return {}, list(args)
        return self.parse_params(list(args))

    def __call__(self, text: str, options=None, **params) -> str:
        return self.transform(text, options, **params)


LEXICAL_TABLE: Dict[str, LexicalFunction] = {
    "capcase": LexicalFunction(capcase),
    "locase": LexicalFunction(locase),
    "upcase": LexicalFunction(upcase),
    "titlecase": LexicalFunction(titlecase),
    "collapse": LexicalFunction(collapse),
    "compress": LexicalFunction(compress),
    "cjust": LexicalFunction(cjust, _width_params),
    "ljust": LexicalFunction(ljust, _width_params),
    "rjust": LexicalFunction(rjust, _width_params),
    "edit": LexicalFunction(edit, _edit_params),
    "element": LexicalFunction(element, _element_params),
    "extract": LexicalFunction(substr, _substr_params),
    "substr": LexicalFunction(substr, _substr_params),
    "length": LexicalFunction(length),
    "pluralize": LexicalFunction(numbers.pluralize, _pluralize_params),
    "thousands": LexicalFunction(numbers.thousands),
    "numbernames": LexicalFunction(numbers.numbernames),
    "trim": LexicalFunction(trim),
    "trim_leading": LexicalFunction(trim_leading),
    "trim_trailing": LexicalFunction(trim_trailing),
    "uncomment": LexicalFunction(uncomment),
}
