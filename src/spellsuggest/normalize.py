from __future__ import annotations
import re

_WORD = re.compile(r"\w+")

def is_single_word(text: object) -> bool:
    """True for a non-empty string made only of word characters (letters, digits, underscore)."""
    return isinstance(text, str) and _WORD.fullmatch(text) is not None

def strip_eol(line: str) -> str:
    return line.rstrip("\r\n")

def clean_word(line: str, *, lower: bool = False) -> str:
    """
    Prepare one word-list line for bucketing:
      * surrounding whitespace trimmed
      * optionally lower-cased (normalised dictionaries)
    An empty return value means the line carries no word.
    """
    word = line.strip()
    return word.lower() if lower else word
