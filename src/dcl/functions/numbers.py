"""
Number formatting functions: digit grouping, English number names and
count-dependent plurals.
"""

import re
from typing import List, Optional

from dcl.core.errors import LexicalFunctionError

_NUMBER_RE = re.compile(r"^([+-]?)(\d[\d,]*)(\.\d+)?$")

ONES = (
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
)
TENS = ("", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety")
SCALES = (
    "", "thousand", "million", "billion", "trillion", "quadrillion",
    "quintillion", "sextillion", "septillion", "octillion", "nonillion",
)


def _split_number(text: str):
    match = _NUMBER_RE.match(text.strip())
    if not match:
        raise LexicalFunctionError(f"not a number: '{text.strip()}'")
    sign, digits, fraction = match.groups()
    return sign, digits.replace(",", ""), fraction or ""


def thousands(text: str, options=None) -> str:
    """``1234567.5`` -> ``1,234,567.5``"""
    sign, digits, fraction = _split_number(text)
    return f"{sign}{int(digits):,}{fraction}"


def _hundreds_name(n: int) -> str:
    words = []
    hundreds, rest = divmod(n, 100)
    if hundreds:
        words.append(f"{ONES[hundreds]} hundred")
    if rest >= 20:
        tens, ones = divmod(rest, 10)
        words.append(TENS[tens] + (f"-{ONES[ones]}" if ones else ""))
    elif rest or not hundreds:
        words.append(ONES[rest])
    return " ".join(words)


def number_stanzas(value: int) -> List[str]:
    """
    English name of ``value`` split into one stanza per power of a thousand.

    >>> number_stanzas(1002003)
    ['one million', 'two thousand', 'three']
    """
    if value == 0:
        return [ONES[0]]
    negative = value < 0
    value = abs(value)
    groups = []
    while value:
        value, group = divmod(value, 1000)
        groups.append(group)
    if len(groups) > len(SCALES):
        raise LexicalFunctionError("number too large to name")
    stanzas = []
    for power in range(len(groups) - 1, -1, -1):
        group = groups[power]
        if not group:
            continue
        stanza = _hundreds_name(group)
        if SCALES[power]:
            stanza = f"{stanza} {SCALES[power]}"
        stanzas.append(stanza)
    if negative:
        stanzas[0] = f"minus {stanzas[0]}"
    return stanzas


def numbernames(text: str, options=None) -> str:
    sign, digits, fraction = _split_number(text)
    if fraction:
        raise LexicalFunctionError(f"only whole numbers can be named: '{text.strip()}'")
    return "".join(stanza + "\n" for stanza in number_stanzas(int(sign + digits)))


def pluralize(text: str, options=None, count: int = 2, irregular: Optional[str] = None) -> str:
    """Singular ``text`` for a count of one, otherwise its plural form."""
    word = text.strip()
    if abs(count) == 1:
        return word
    if irregular:
        return irregular
    lower = word.lower()
    if re.search(r"(s|x|z|ch|sh)$", lower):
        return word + "es"
    if re.search(r"[^aeiou]y$", lower):
        return word[:-1] + "ies"
    return word + "s"
