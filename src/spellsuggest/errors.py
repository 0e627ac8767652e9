from __future__ import annotations


class SpellError(Exception):
    """Base class for every error raised by spellsuggest."""


class FormatError(SpellError, ValueError):
    """A dictionary, index or rule file contains a malformed line."""


class ConstructionError(SpellError, OSError):
    """A word list, rule file or index could not be opened while building a dictionary."""


class InvalidWordError(SpellError, ValueError):
    """spell_check() was given something that is not a single word."""


class UnsupportedOperation(SpellError, NotImplementedError):
    """The operation exists on the API but no backend implements it."""
