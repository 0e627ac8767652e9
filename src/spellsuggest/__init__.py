"""
Spelling Suggestion Module

This module checks single words against one or more dictionaries and, for
misspelled words, proposes corrections ranked by a weighted edit distance.
Candidates are found through phonetic codes: words that sound alike share a
code, and the codes of one-edit variants of the query widen the search.

The module is organised as:
- Phonetic rule tables (aspell notation) and edit distance
- Dictionary backends: in-memory, binary-searched file, bucketed on-disk index
- Suggestion engine, dictionaries and dictionary sets
- Configuration and word-list loading

Example Usage:
    from spellsuggest import DictionaryManager

    manager = DictionaryManager()
    manager.create("en", "English word list", "/path/to/words.txt")

    for result in manager.dictionary_set().spell_check("recieve"):
        for s in result.suggestions:
            print(f"{s.cost}: {s.word}")

Version: 1.0.0
"""

# src/spellsuggest/__init__.py
from .config import Settings
from .distance import EditDistance, distance
from .dictionary import Dictionary, DictionaryManager, DictionarySet
from .errors import (
    ConstructionError,
    FormatError,
    InvalidWordError,
    SpellError,
    UnsupportedOperation,
)
from .models import CostModel, Result, SuggestedSpelling
from .phonetic import RuleTable, compile_rules, load_rules
from .suggest import SuggestionEngine

__version__ = "1.0.0"
__all__ = [
    "Settings",
    "EditDistance",
    "distance",
    "Dictionary",
    "DictionaryManager",
    "DictionarySet",
    "ConstructionError",
    "FormatError",
    "InvalidWordError",
    "SpellError",
    "UnsupportedOperation",
    "CostModel",
    "Result",
    "SuggestedSpelling",
    "RuleTable",
    "compile_rules",
    "load_rules",
    "SuggestionEngine",
]
