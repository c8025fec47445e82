"""
Text cleanup for values scraped out of the weapon stat page.

Every value on the page is rendered as text, often with units or decoration
around the number ("600 RPM", "0.25°"). prune() turns such a fragment into
the bare value stored in a weapon record.
"""

import math
import re
from typing import Optional, Union

# Characters that decorate values on the page and never belong in the data
NOISE_CHARACTERS = ("°",)

# Decimal literals the page's scripts accept as numbers
NUMBER_RE = re.compile(r"[+-]?((\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|Infinity)")

# Larger integral floats stay floats so they serialize in exponent form
MAX_EXACT_INT = 2**53

Value = Union[int, float, str]


def first_word(text: str) -> str:
    """Return the first nonempty space-separated word, or the text unchanged if there is none."""
    for candidate in text.split(" "):
        if candidate:
            return candidate
    return text


def to_number(text: str) -> Union[int, float]:
    """
    Coerce text to a number the way the page's own scripts do.

    Surrounding whitespace is ignored and an empty string is 0. Anything that
    does not parse comes back as NaN instead of raising. Integral values are
    returned as int so that "30" stays 30 in the JSON output.
    """
    text = text.strip()
    if text == "":
        return 0
    if not NUMBER_RE.fullmatch(text):
        return math.nan
    number = float(text)
    if number.is_integer() and abs(number) < MAX_EXACT_INT:
        return int(number)
    return number


def is_missing(value: Optional[Value]) -> bool:
    """True for values that cannot take part in arithmetic: None and NaN."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def prune(text: Optional[str], keep_spaces: bool = False, as_number: bool = True) -> Optional[Value]:
    """
    Remove the noise surrounding a value.

    Args:
        text: Raw text content, or None when the element was not found
        keep_spaces: Keep the whole string instead of plucking its first word
        as_number: Coerce the cleaned string with to_number()

    Returns:
        None if text is None, otherwise the cleaned string or number
    """
    if text is None:
        return None

    if not keep_spaces:
        text = first_word(text)

    for character in NOISE_CHARACTERS:
        text = text.replace(character, "")

    if as_number:
        return to_number(text)
    return text
