from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from . import config as CFG
from .DB.api import SpellingBackend
from .DB.hashed import HashedBackend
from .errors import InvalidWordError, UnsupportedOperation
from .loader import LineSource, iter_lines
from .models import CostModel, DEFAULT_COSTS, Result, SuggestedSpelling, suggestion_sort_key
from .normalize import is_single_word
from .phonetic import RuleTable
from .suggest import SuggestionEngine

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dictionary:
    """A named backend plus the limits applied to its suggestions."""
    name: str
    description: str
    engine: SuggestionEngine = field(repr=False)
    maximum_suggestions: int = CFG.DEFAULT_MAXIMUM_SUGGESTIONS
    maximum_cost: int = CFG.DEFAULT_MAXIMUM_COST

    def is_correct(self, word: str) -> bool:
        return self.engine.is_correct(word)

    def check_spelling(self, word: str, cost_threshold: Optional[int] = None) -> Result:
        if self.engine.is_correct(word):
            return Result(word, self.name, True)

        threshold = self.maximum_cost if cost_threshold is None else cost_threshold
        found = [
            SuggestedSpelling(c.word, c.cost, self.name)
            for c in self.engine.suggest(word, threshold)
        ]
        found.sort(key=suggestion_sort_key)
        return Result(word, self.name, False, tuple(found[: self.maximum_suggestions]))

    def close(self) -> None:
        self.engine.backend.close()


class DictionarySet:
    """Dictionaries queried together, in the order they were added."""

    def __init__(self, dictionaries: Iterable[Dictionary] = ()) -> None:
        self._items: List[Dictionary] = list(dictionaries)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Dictionary]:
        return iter(self._items)

    def __getitem__(self, i: int) -> Dictionary:
        return self._items[i]

    def add(self, dictionary: Dictionary) -> None:
        self._items.append(dictionary)

    def remove(self, name: str) -> None:
        raise UnsupportedOperation("dictionaries cannot be removed from a set")

    def names(self) -> List[str]:
        return [d.name for d in self._items]

    def copy(self) -> "DictionarySet":
        return DictionarySet(self._items)

    def spell_check(self, word: str) -> List[Result]:
        """One Result per dictionary, in registration order."""
        if not is_single_word(word):
            raise InvalidWordError(f"not a single word: {word!r}")
        return [d.check_spelling(word) for d in self._items]


class DictionaryManager:
    """
    Builds dictionaries with shared defaults and keeps them in one set.

    The limits and cost model in force when a dictionary is created are
    baked into it; changing them later only affects new dictionaries.
    """

    def __init__(
        self,
        *,
        costs: CostModel = DEFAULT_COSTS,
        rules: Optional[RuleTable] = None,
        maximum_cost: int = CFG.DEFAULT_MAXIMUM_COST,
        maximum_suggestions: int = CFG.DEFAULT_MAXIMUM_SUGGESTIONS,
        case_fallback: bool = True,
    ) -> None:
        self.costs = costs
        self.rules = rules
        self.maximum_cost = maximum_cost
        self.maximum_suggestions = maximum_suggestions
        self.case_fallback = case_fallback
        self._set = DictionarySet()

    def set_cost_threshold(self, cost: int) -> None:
        if cost < 0:
            raise ValueError("cost threshold must be non-negative")
        self.maximum_cost = int(cost)

    def set_maximum_suggestions(self, n: int) -> None:
        if n < 0:
            raise ValueError("maximum suggestions must be non-negative")
        self.maximum_suggestions = int(n)

    def _check_name(self, name: str) -> None:
        if name in self._set.names():
            raise ValueError(f"dictionary already registered: {name}")

    def register_backend(self, name: str, description: str, backend: SpellingBackend) -> Dictionary:
        self._check_name(name)
        engine = SuggestionEngine(backend, self.costs, case_fallback=self.case_fallback)
        d = Dictionary(
            name,
            description,
            engine,
            maximum_suggestions=self.maximum_suggestions,
            maximum_cost=self.maximum_cost,
        )
        self._set.add(d)
        log.info("Registered dictionary %s (%s)", name, type(backend).__name__)
        return d

    def create(self, name: str, description: str, source: LineSource, normalised: bool = False) -> Dictionary:
        """Load a word list into an in-memory dictionary and register it."""
        self._check_name(name)
        backend = HashedBackend(iter_lines(source), rules=self.rules, normalised=normalised)
        return self.register_backend(name, description, backend)

    def dictionary_set(self) -> DictionarySet:
        return self._set.copy()

    def reset(self) -> None:
        for d in self._set:
            d.close()
        self._set = DictionarySet()
