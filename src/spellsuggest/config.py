from __future__ import annotations
import os
from typing import Dict, Iterable, Optional

from .errors import ConstructionError, FormatError

# Suggestion defaults
DEFAULT_MAXIMUM_COST: int = 3
DEFAULT_MAXIMUM_SUGGESTIONS: int = 5

# Edit-distance weights
COST_DELETION: int = 2
COST_INSERTION: int = 2
COST_SUBSTITUTION: int = 2
COST_SWAP: int = 1
COST_CASE_CHANGE: int = 1

# Phonetic encoding
DIGIT_CODE: str = "0"
DEFAULT_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
IGNORED_RULE_KEYWORDS: tuple[str, ...] = ("version", "followup", "collapse_result")

# /* ~~~ bucketed on-disk index ~~~ */
MAX_BUCKET_SIZE: int = 200
DIRECTORY_WORDS: str = "words"
DIRECTORY_DB: str = "db"
FILE_CONTENTS: str = "contents"
FILE_DB: str = "words.db"
FILE_INDEX: str = "words.idx"

# /* ~~~ dichotomy file: ranges smaller than this are scanned line by line ~~~ */
SEQUENTIAL_SCAN_BYTES: int = 256

# Progress logging (set SPELLSUGGEST_VERBOSE=1 to enable)
VERBOSE = os.environ.get("SPELLSUGGEST_VERBOSE") == "1"


# Settings keys
EDIT_DELETION = "EDIT_DEL1"
EDIT_INSERTION = "EDIT_DEL2"
EDIT_SWAP = "EDIT_SWAP"
EDIT_SUBSTITUTION = "EDIT_SUB"
EDIT_CASE = "EDIT_CASE"
SPELL_THRESHOLD = "SPELL_THRESHOLD"
SPELL_IGNORE_UPPER_CASE = "SPELL_IGNORE_UPPER_CASE"
SPELL_IGNORE_MIXED_CASE = "SPELL_IGNORE_MIXED_CASE"
SPELL_IGNORE_INTERNET_ADDRESS = "SPELL_IGNORE_INTERNET_ADDRESS"
SPELL_IGNORE_DIGIT_WORDS = "SPELL_IGNORE_DIGIT_WORDS"
SPELL_IGNORE_SENTENCE_CAPITALIZATION = "SPELL_IGNORE_SENTENCE_CAPITALIZATION"

_INTEGER_DEFAULTS: Dict[str, int] = {
    EDIT_DELETION: COST_DELETION,
    EDIT_INSERTION: COST_INSERTION,
    EDIT_SWAP: COST_SWAP,
    EDIT_SUBSTITUTION: COST_SUBSTITUTION,
    EDIT_CASE: COST_CASE_CHANGE,
    SPELL_THRESHOLD: DEFAULT_MAXIMUM_COST,
}

# Carried for callers that pre-filter input; the engine never reads them.
_BOOLEAN_DEFAULTS: Dict[str, bool] = {
    SPELL_IGNORE_UPPER_CASE: True,
    SPELL_IGNORE_MIXED_CASE: False,
    SPELL_IGNORE_INTERNET_ADDRESS: True,
    SPELL_IGNORE_DIGIT_WORDS: True,
    SPELL_IGNORE_SENTENCE_CAPITALIZATION: False,
}

_TRUE_WORDS = ("true", "yes", "on", "1")
_FALSE_WORDS = ("false", "no", "off", "0")


class Settings:
    """
    Integer and boolean settings addressed by key.

    Seeded with the built-in defaults; values can be overridden one by one or
    loaded from a ``key=value`` properties file (``#`` and ``!`` start comments).
    Unknown keys are stored as integers.
    """

    def __init__(self, values: Optional[Dict[str, str]] = None) -> None:
        self._ints: Dict[str, int] = dict(_INTEGER_DEFAULTS)
        self._bools: Dict[str, bool] = dict(_BOOLEAN_DEFAULTS)
        if values:
            for key, raw in values.items():
                self.set_raw(key, raw)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Settings":
        values: Dict[str, str] = {}
        for n, raw in enumerate(lines, 1):
            line = raw.strip()
            if not line or line[0] in "#!":
                continue
            sep = min((i for i in (line.find("="), line.find(":")) if i >= 0), default=-1)
            if sep < 0:
                raise FormatError(f"settings line {n}: expected key=value, got {raw!r}")
            values[line[:sep].strip()] = line[sep + 1:].strip()
        return cls(values)

    @classmethod
    def from_file(cls, path: str) -> "Settings":
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls.from_lines(f)
        except FileNotFoundError as e:
            raise ConstructionError(f"settings file not found: {path}") from e

    def set_raw(self, key: str, raw: str) -> None:
        """Store a textual value; known flags parse as booleans, everything else as integers."""
        value = raw.strip()
        if key in self._bools:
            low = value.lower()
            if low not in _TRUE_WORDS and low not in _FALSE_WORDS:
                raise FormatError(f"{key}: not a boolean: {raw!r}")
            self._bools[key] = low in _TRUE_WORDS
            return
        try:
            self._ints[key] = int(value)
        except ValueError as e:
            raise FormatError(f"{key}: not an integer: {raw!r}") from e

    def get_integer(self, key: str) -> int:
        return self._ints[key]

    def get_boolean(self, key: str) -> bool:
        return self._bools[key]

    def set_integer(self, key: str, value: int) -> None:
        self._ints[key] = int(value)

    def set_boolean(self, key: str, value: bool) -> None:
        self._bools[key] = bool(value)
