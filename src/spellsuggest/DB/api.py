# spellsuggest/DB/api.py
from __future__ import annotations
from typing import Iterable, List, Optional, Protocol, Tuple

from ..errors import UnsupportedOperation
from ..phonetic import RuleTable, default_rules


class SpellingBackend(Protocol):
    """
    Word storage keyed by phonetic code.

    Implementations only have to provide `rules` and `lookup`; the
    correctness check and the unsupported write path are shared.
    """
    rules: RuleTable

    # Read
    def lookup(self, code: str) -> List[str]: ...

    def is_correct(self, word: str, *, case_fallback: bool = True) -> bool:
        bucket = self.lookup(self.rules.encode(word))
        if word in bucket:
            return True
        return case_fallback and word.lower() in bucket

    # Write
    def add_word(self, word: str) -> None:
        raise UnsupportedOperation("adding words to a dictionary is not supported")

    # lifecycle
    def close(self) -> None:
        return None


def sorted_code_pairs(words: Iterable[str], rules: RuleTable) -> List[Tuple[str, str]]:
    """(code, word) for each distinct word, ordered by code; words sharing a code stay sorted."""
    pairs = [(rules.encode(w), w) for w in sorted(set(words))]
    pairs.sort(key=lambda p: p[0])
    return pairs


def make_backend(
    dsn: str,
    *,
    rules: Optional[RuleTable] = None,
    normalised: bool = False,
) -> SpellingBackend:
    """
    Factory (paths follow the triple slash, so an absolute path gives four):
      - memory://           -> empty HashedBackend (fill with add_dictionary)
      - memory:///path      -> HashedBackend loaded from a word list
      - dichotomy:///path   -> DichotomyBackend over a sorted code*word file
      - bucketed:///dir     -> BucketedBackend rooted at dir (rebuilt if stale)
    """
    rules = rules or default_rules()

    if dsn == "memory://":
        from .hashed import HashedBackend
        return HashedBackend([], rules=rules, normalised=normalised)

    if dsn.startswith("memory:///"):
        from .hashed import HashedBackend
        return HashedBackend.from_file(dsn.removeprefix("memory:///"), rules=rules, normalised=normalised)

    if dsn.startswith("dichotomy:///"):
        from .dichotomy import DichotomyBackend
        return DichotomyBackend.open(dsn.removeprefix("dichotomy:///"), rules=rules)

    if dsn.startswith("bucketed:///"):
        from .bucketed import BucketedBackend
        return BucketedBackend(dsn.removeprefix("bucketed:///"), rules=rules)

    raise ValueError(f"Unsupported backend DSN: {dsn}")
