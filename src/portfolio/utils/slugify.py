"""
Slug derivation for identity fields (titles, names, roles, degrees).

Stored slugs were produced by this exact sequence of steps, so it must not be
reordered: a different order yields different slugs for some inputs and the
conflict check would stop matching existing rows.
"""

import re
import unicodedata
from typing import Any

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_WHITESPACE_RUN = re.compile(r"\s+")
# ASCII word characters only: letters outside [A-Za-z0-9_] are dropped
_NON_WORD = re.compile(r"[^\w-]+", flags=re.ASCII)
_HYPHEN_RUN = re.compile(r"--+")


def slugify(text: Any) -> str:
    """
    Return the URL-safe slug for `text`.

    >>> slugify("Café del Mar!")
    'cafe-del-mar'

    Total: never raises, and input made only of symbols yields "".
    """
    value = "" if text is None else str(text)
    value = unicodedata.normalize("NFD", value)
    value = _COMBINING_MARKS.sub("", value)
    value = value.lower().strip()
    value = _WHITESPACE_RUN.sub("-", value)
    value = _NON_WORD.sub("", value)
    return _HYPHEN_RUN.sub("-", value)
