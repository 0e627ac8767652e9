from __future__ import annotations
import logging
import os
from typing import Iterable, Iterator, List, Union

from .config import VERBOSE
from .errors import ConstructionError
from .normalize import clean_word, strip_eol

log = logging.getLogger(__name__)

PROGRESS_EVERY_WORDS = 50_000

LineSource = Union[str, os.PathLike, Iterable[str]]

def iter_lines(source: LineSource) -> Iterator[str]:
    """
    Yield the lines of a word list without their end-of-line characters.
    `source` is a file path, an open text stream, or any iterable of strings.
    """
    if isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        try:
            f = open(path, "r", encoding="utf-8", errors="replace")
        except FileNotFoundError as e:
            log.error("Word list not found: %s", path)
            raise ConstructionError(f"word list not found: {path}") from e
        with f:
            for raw in f:
                yield strip_eol(raw)
        return
    for raw in source:
        yield strip_eol(raw)

def read_wordlist(source: LineSource, *, lower: bool = False, min_length: int = 1,
                  verbose: bool = VERBOSE) -> Iterator[str]:
    """
    Words from a commented word list: '#' starts a comment, the rest of the
    line is trimmed, and payloads shorter than `min_length` are dropped.
    With `verbose`, a progress line is printed every PROGRESS_EVERY_WORDS words.
    """
    n = 0
    for line in iter_lines(source):
        hash_at = line.find("#")
        if hash_at >= 0:
            line = line[:hash_at]
        word = clean_word(line, lower=lower)
        if len(word) < max(1, min_length):
            continue
        n += 1
        if verbose and n % PROGRESS_EVERY_WORDS == 0:
            print(f"[loaded] words={n:,}")
        yield word

def list_wordlist_files(directory: str) -> List[str]:
    """Regular files directly under `directory`, sorted by name."""
    if not os.path.isdir(directory):
        raise ConstructionError(f"word list directory not found: {directory}")
    names = sorted(fn for fn in os.listdir(directory) if os.path.isfile(os.path.join(directory, fn)))
    return [os.path.join(directory, fn) for fn in names]
