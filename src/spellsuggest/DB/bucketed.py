# spellsuggest/DB/bucketed.py
from __future__ import annotations
import logging
import os
from bisect import bisect_left
from typing import Dict, List, Optional, Sequence, Tuple

from .api import SpellingBackend, sorted_code_pairs
from .. import config as CFG
from ..errors import ConstructionError, FormatError
from ..loader import iter_lines, list_wordlist_files
from ..normalize import clean_word
from ..phonetic import RuleTable, default_rules

# Directory layout:
#   <base>/words/*          source word lists, one word per line
#   <base>/db/contents      manifest of the build: "<filename>,<length>" per word list
#   <base>/db/words.db      "<code>,<word>\n" records sorted by code
#   <base>/db/words.idx     "<index code>,<offset>,<length>" per run of records
#
# An index code is the shortest prefix of a record's code that covers at most
# max_bucket_size records, so one idx row never points at an oversized span.

log = logging.getLogger(__name__)

Manifest = List[Tuple[str, int]]


def _prefix_count(codes: Sequence[str], prefix: str) -> int:
    """Number of entries of the sorted `codes` that start with `prefix`."""
    lo = bisect_left(codes, prefix)
    upper = prefix[:-1] + chr(ord(prefix[-1]) + 1)
    return bisect_left(codes, upper, lo) - lo


def assign_index_codes(codes: Sequence[str], max_bucket_size: int) -> List[str]:
    """Index code for each entry of the sorted `codes`."""
    out: List[str] = []
    cached: Optional[str] = None
    for code in codes:
        if len(code) <= 1:
            out.append(code)
            continue
        if cached is not None and code.startswith(cached):
            out.append(cached)
            continue
        chosen = code
        for z in range(1, len(code)):
            prefix = code[:z]
            if _prefix_count(codes, prefix) <= max_bucket_size:
                chosen = cached = prefix
                break
        out.append(chosen)
    return out


class BucketedBackend(SpellingBackend):
    """
    On-disk dictionary built from a directory of word lists.

    The db and idx files are rebuilt only when the word lists change (by name
    or byte length) or when either file is missing; otherwise they are reused
    untouched. The idx is held in memory and each lookup reads one span of
    the db file.
    """

    def __init__(
        self,
        base_dir: str,
        *,
        rules: Optional[RuleTable] = None,
        max_bucket_size: int = CFG.MAX_BUCKET_SIZE,
    ) -> None:
        self.rules = rules or default_rules()
        self.max_bucket_size = max_bucket_size
        self.base_dir = os.path.abspath(base_dir)
        if not os.path.isdir(self.base_dir):
            raise ConstructionError(f"dictionary directory not found: {self.base_dir}")

        self.words_dir = os.path.join(self.base_dir, CFG.DIRECTORY_WORDS)
        self.db_dir = os.path.join(self.base_dir, CFG.DIRECTORY_DB)
        self.db_path = os.path.join(self.db_dir, CFG.FILE_DB)
        self.idx_path = os.path.join(self.db_dir, CFG.FILE_INDEX)
        self.contents_path = os.path.join(self.db_dir, CFG.FILE_CONTENTS)
        os.makedirs(self.db_dir, exist_ok=True)

        self.rebuilt = False
        manifest = self._current_manifest()
        if self._needs_rebuild(manifest):
            log.info("Word lists changed under %s; rebuilding index", self.base_dir)
            self._build(manifest)
            self.rebuilt = True
        else:
            log.info("Reusing index under %s", self.db_dir)
        self._index = self._load_index()

    # ------------- manifest -------------

    def _current_manifest(self) -> Manifest:
        files = list_wordlist_files(self.words_dir)
        return sorted((os.path.basename(p), os.path.getsize(p)) for p in files)

    def _recorded_manifest(self) -> Optional[Manifest]:
        if not os.path.exists(self.contents_path):
            return None
        rows: Manifest = []
        for line in iter_lines(self.contents_path):
            if not line.strip():
                continue
            name, sep, size = line.rpartition(",")
            if not sep or not size.strip().isdigit():
                raise FormatError(f"bad contents row: {line!r}")
            rows.append((name, int(size)))
        return sorted(rows)

    def _needs_rebuild(self, manifest: Manifest) -> bool:
        if not (os.path.exists(self.db_path) and os.path.exists(self.idx_path)):
            return True
        return self._recorded_manifest() != manifest

    # ------------- build -------------

    def _build(self, manifest: Manifest) -> None:
        words = []
        for name, _ in manifest:
            for line in iter_lines(os.path.join(self.words_dir, name)):
                word = clean_word(line)
                if word:
                    words.append(word)

        pairs = sorted_code_pairs(words, self.rules)
        codes = [c for c, _ in pairs]
        index_codes = assign_index_codes(codes, self.max_bucket_size)

        rows: List[Tuple[str, int, int]] = []
        offset = 0
        with open(f"{self.db_path}.tmp", "wb") as f:
            run_code: Optional[str] = None
            run_start = 0
            for (code, word), idx_code in zip(pairs, index_codes):
                if idx_code != run_code:
                    if run_code is not None:
                        rows.append((run_code, run_start, offset - run_start))
                    run_code, run_start = idx_code, offset
                rec = f"{code},{word}\n".encode("utf-8")
                f.write(rec)
                offset += len(rec)
            if run_code is not None:
                rows.append((run_code, run_start, offset - run_start))

        with open(f"{self.idx_path}.tmp", "w", encoding="utf-8", newline="\n") as f:
            for idx_code, start, length in rows:
                f.write(f"{idx_code},{start},{length}\n")

        os.replace(f"{self.db_path}.tmp", self.db_path)
        os.replace(f"{self.idx_path}.tmp", self.idx_path)

        # Manifest last: an interrupted build leaves a stale manifest and is redone.
        with open(f"{self.contents_path}.tmp", "w", encoding="utf-8", newline="\n") as f:
            for name, size in manifest:
                f.write(f"{name},{size}\n")
        os.replace(f"{self.contents_path}.tmp", self.contents_path)

        log.info("Index built: words=%d rows=%d", len(pairs), len(rows))

    # ------------- query -------------

    def _load_index(self) -> Dict[str, Tuple[int, int]]:
        index: Dict[str, Tuple[int, int]] = {}
        for line in iter_lines(self.idx_path):
            if not line.strip():
                continue
            parts = line.rsplit(",", 2)
            if len(parts) != 3 or not parts[1].isdigit() or not parts[2].isdigit():
                raise FormatError(f"bad index row: {line!r}")
            index[parts[0]] = (int(parts[1]), int(parts[2]))
        return index

    def lookup(self, code: str) -> List[str]:
        probe = code
        while probe and probe not in self._index:
            probe = probe[:-1]
        if not probe:
            return []
        start, length = self._index[probe]
        with open(self.db_path, "rb") as f:
            f.seek(start)
            chunk = f.read(length).decode("utf-8")

        words: List[str] = []
        for rec in chunk.splitlines():
            rec_code, sep, word = rec.partition(",")
            if not sep:
                raise FormatError(f"bad db record: {rec!r}")
            if rec_code == code:
                words.append(word)
        return words

    def bucket_count(self) -> int:
        return len(self._index)
