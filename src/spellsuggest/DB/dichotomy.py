# spellsuggest/DB/dichotomy.py
from __future__ import annotations
import logging
import mmap
import os
from typing import Iterable, List, Optional, Protocol, Tuple, Union

from .api import SpellingBackend, sorted_code_pairs
from ..config import SEQUENTIAL_SCAN_BYTES
from ..errors import ConstructionError, FormatError
from ..phonetic import RuleTable, default_rules

# File format (UTF-8 text, one record per line, sorted by code):
#   <code>*<word>\n
# A reader may land anywhere in the file, so lookups resync to the next
# line start before comparing.

log = logging.getLogger(__name__)

_SEP = b"*"


class LineSource(Protocol):
    size: int

    def read_line(self, offset: int) -> Tuple[bytes, int]:
        """Bytes of the line starting at `offset` (terminator dropped) and the offset just past it."""
        ...


class BufferLineSource:
    """LineSource over anything that supports find() and slicing: bytes or an mmap."""

    def __init__(self, buf: Union[bytes, mmap.mmap]) -> None:
        self._buf = buf
        self.size = len(buf)

    def read_line(self, offset: int) -> Tuple[bytes, int]:
        if offset >= self.size:
            return b"", self.size
        nl = self._buf.find(b"\n", offset)
        if nl < 0:
            return bytes(self._buf[offset:self.size]), self.size
        return bytes(self._buf[offset:nl]).rstrip(b"\r"), nl + 1


def _split(line: bytes) -> Tuple[str, str]:
    star = line.find(_SEP)
    if star < 0:
        raise FormatError(f"bad dichotomy record (no '*'): {line[:80]!r}")
    return line[:star].decode("utf-8"), line[star + 1:].decode("utf-8")


class DichotomyBackend(SpellingBackend):
    """
    Binary search over a code-sorted file, without loading it.

    Every split reads two lines at the midpoint: the first only to reach a
    line boundary, the second to compare. Small ranges are scanned linearly.
    One reader per instance.
    """

    def __init__(
        self,
        source: LineSource,
        *,
        rules: Optional[RuleTable] = None,
        scan_threshold: int = SEQUENTIAL_SCAN_BYTES,
    ) -> None:
        self.rules = rules or default_rules()
        self.scan_threshold = scan_threshold
        self._src = source
        self._fd = None
        self._mm: Optional[mmap.mmap] = None

    @classmethod
    def open(cls, path: str, **kw) -> "DichotomyBackend":
        path = os.path.abspath(path)
        try:
            fd = open(path, "rb")
        except FileNotFoundError as e:
            log.error("Dichotomy file not found: %s", path)
            raise ConstructionError(f"dichotomy file not found: {path}") from e
        mm = None
        if os.fstat(fd.fileno()).st_size > 0:
            mm = mmap.mmap(fd.fileno(), length=0, access=mmap.ACCESS_READ)
        backend = cls(BufferLineSource(mm if mm is not None else b""), **kw)
        backend._fd, backend._mm = fd, mm
        log.info("Opened dichotomy file %s (%d bytes)", path, backend._src.size)
        return backend

    def lookup(self, code: str) -> List[str]:
        src = self._src
        words: List[str] = []
        stack: List[Tuple[int, int]] = [(0, src.size)]   # [lo, hi) byte ranges, lo on a line start
        while stack:
            lo, hi = stack.pop()
            if lo >= hi:
                continue
            if hi - lo < self.scan_threshold:
                words.extend(self._scan(code, lo, hi))
                continue
            _, start = src.read_line((lo + hi) // 2)
            line, end = src.read_line(start)
            if end >= hi or not line:
                words.extend(self._scan(code, lo, hi))
                continue
            test, word = _split(line)
            if code < test:
                stack.append((lo, start))
            elif code > test:
                stack.append((end, hi))
            else:
                words.append(word)
                stack.append((lo, start))
                stack.append((end, hi))
        log.debug("dichotomy lookup %s -> %d words", code, len(words))
        return words

    def _scan(self, code: str, lo: int, hi: int) -> List[str]:
        found: List[str] = []
        pos = lo
        while pos < hi:
            line, nxt = self._src.read_line(pos)
            pos = nxt
            if not line:
                continue
            test, word = _split(line)
            if test == code:
                found.append(word)
        return found

    def close(self) -> None:
        try:
            if self._mm is not None:
                self._mm.close()
        finally:
            if self._fd is not None:
                self._fd.close()
            self._mm = self._fd = None


def write_dichotomy_file(path: str, words: Iterable[str], rules: Optional[RuleTable] = None) -> int:
    """Write a lookup-ready file for `words`; returns the number of records."""
    rules = rules or default_rules()
    pairs = sorted_code_pairs((w.strip() for w in words if w.strip()), rules)
    path = os.path.abspath(path)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    tmp = f"{path}.tmp"
    with open(tmp, "w", encoding="utf-8", newline="\n") as f:
        for code, word in pairs:
            f.write(f"{code}*{word}\n")
    os.replace(tmp, path)
    log.info("Wrote dichotomy file %s: records=%d", path, len(pairs))
    return len(pairs)
