from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Set

from .DB.api import SpellingBackend
from .distance import EditDistance
from .models import Candidate, CostModel, DEFAULT_COSTS

log = logging.getLogger(__name__)


def near_miss_variants(word: str, letters: str) -> Iterator[str]:
    """Every single-edit variant of `word` built from the given replacement letters."""
    n = len(word)
    # adjacent swaps
    for i in range(n - 1):
        yield word[:i] + word[i + 1] + word[i] + word[i + 2:]
    # substitutions
    for i in range(n):
        for ch in letters:
            yield word[:i] + ch + word[i + 1:]
    # insertions, including after the last char
    for i in range(n + 1):
        for ch in letters:
            yield word[:i] + ch + word[i:]
    # deletions
    for i in range(n):
        yield word[:i] + word[i + 1:]


class SuggestionEngine:
    """
    Spell checking and ranked suggestions over one backend.

    Suggestions come in two groups, each sorted by edit cost:
      1. words sharing the query's phonetic code,
      2. words under the codes of one-edit variants of the query.
    When neither group has anything under the threshold, the cheapest words
    of the query's own code are returned instead.
    """

    def __init__(
        self,
        backend: SpellingBackend,
        costs: CostModel = DEFAULT_COSTS,
        *,
        case_fallback: bool = True,
    ) -> None:
        self.backend = backend
        self.costs = costs
        self.case_fallback = case_fallback

    @property
    def rules(self):
        return self.backend.rules

    def is_correct(self, word: str) -> bool:
        return self.backend.is_correct(word, case_fallback=self.case_fallback)

    def suggest(self, word: str, threshold: int) -> List[Candidate]:
        dist = EditDistance(self.costs)
        code0 = self.rules.encode(word)
        own_bucket = self.backend.lookup(code0)

        phonetic = self._score(word, own_bucket, dist, threshold)
        near = self._score(word, self._near_miss_words(word, code0), dist, threshold)

        if not phonetic and not near:
            return self._best_guess(word, own_bucket, dist)

        phonetic.sort(key=lambda c: c.cost)
        near.sort(key=lambda c: c.cost)
        log.debug("suggest %r: phonetic=%d near=%d", word, len(phonetic), len(near))
        return phonetic + near

    def _near_miss_words(self, word: str, code0: str) -> Iterator[str]:
        encode = self.rules.encode
        seen: Set[str] = {code0}
        for variant in near_miss_variants(word, self.rules.replace_list):
            code = encode(variant)
            if code in seen:
                continue
            seen.add(code)
            yield from self.backend.lookup(code)

    @staticmethod
    def _score(word: str, candidates: Iterable[str], dist: EditDistance, threshold: int) -> List[Candidate]:
        out: List[Candidate] = []
        for cand in candidates:
            cost = dist(word, cand)
            if cost < threshold:
                out.append(Candidate(cand, cost))
        return out

    @staticmethod
    def _best_guess(word: str, bucket: List[str], dist: EditDistance) -> List[Candidate]:
        scored = [Candidate(cand, dist(word, cand)) for cand in bucket]
        if not scored:
            return []
        best = min(c.cost for c in scored)
        return [c for c in scored if c.cost == best]
