from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from . import config as CFG
from .config import Settings

@dataclass(frozen=True)
class CostModel:
    deletion: int = CFG.COST_DELETION          # drop a char from the source
    insertion: int = CFG.COST_INSERTION        # add a char to the source
    substitution: int = CFG.COST_SUBSTITUTION
    swap: int = CFG.COST_SWAP                  # transpose two adjacent chars
    case_change: int = CFG.COST_CASE_CHANGE

    @classmethod
    def from_settings(cls, settings: Settings) -> "CostModel":
        return cls(
            deletion=settings.get_integer(CFG.EDIT_DELETION),
            insertion=settings.get_integer(CFG.EDIT_INSERTION),
            substitution=settings.get_integer(CFG.EDIT_SUBSTITUTION),
            swap=settings.get_integer(CFG.EDIT_SWAP),
            case_change=settings.get_integer(CFG.EDIT_CASE),
        )

DEFAULT_COSTS = CostModel()

@dataclass(frozen=True)
class Candidate:
    word: str
    cost: int

@dataclass(frozen=True)
class SuggestedSpelling:
    word: str
    cost: int
    dictionary_name: str

@dataclass(frozen=True)
class Result:
    word: str                 # the word that was checked
    dictionary_name: str
    is_correct: bool
    suggestions: Tuple[SuggestedSpelling, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "dictionary": self.dictionary_name,
            "correct": self.is_correct,
            "suggestions": [{"word": s.word, "cost": s.cost} for s in self.suggestions],
        }

def suggestion_sort_key(s: SuggestedSpelling) -> tuple[int, str]:
    """Cheapest first; ties broken case-insensitively on the word."""
    return (s.cost, s.word.lower())
