# spellsuggest/DB/hashed.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from .api import SpellingBackend
from ..loader import LineSource, iter_lines
from ..normalize import clean_word
from ..phonetic import RuleTable, default_rules

log = logging.getLogger(__name__)


class HashedBackend(SpellingBackend):
    """In-memory dictionary: phonetic code -> words sharing that code."""

    def __init__(
        self,
        lines: Iterable[str],
        *,
        rules: Optional[RuleTable] = None,
        normalised: bool = False,
    ) -> None:
        self.rules = rules or default_rules()
        self.normalised = normalised
        self._buckets: Dict[str, List[str]] = {}
        n = self._ingest(lines, unique=False)
        log.info("Hashed dictionary built: words=%d codes=%d", n, len(self._buckets))

    @classmethod
    def from_file(cls, path: LineSource, **kw) -> "HashedBackend":
        return cls(iter_lines(path), **kw)

    def _ingest(self, lines: Iterable[str], *, unique: bool) -> int:
        put = self.put_word_unique if unique else self.put_word
        n = 0
        for line in lines:
            word = clean_word(line, lower=self.normalised)
            if not word:
                continue
            put(word)
            n += 1
        return n

    def put_word(self, word: str) -> None:
        self._buckets.setdefault(self.rules.encode(word), []).append(word)

    def put_word_unique(self, word: str) -> None:
        """Like put_word, but skip words already present in the bucket ignoring case."""
        bucket = self._buckets.setdefault(self.rules.encode(word), [])
        low = word.lower()
        if any(w.lower() == low for w in bucket):
            return
        bucket.append(word)

    def add_dictionary(self, source: LineSource) -> int:
        """Merge another word list; returns how many non-blank lines were read."""
        n = self._ingest(iter_lines(source), unique=True)
        log.info("Merged %d words into hashed dictionary (codes=%d)", n, len(self._buckets))
        return n

    def lookup(self, code: str) -> List[str]:
        return list(self._buckets.get(code, ()))

    def count(self) -> int:
        return sum(len(b) for b in self._buckets.values())

    def close(self) -> None:
        self._buckets.clear()
