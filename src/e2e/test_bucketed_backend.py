# src/e2e/test_bucketed_backend.py

import hashlib
import os
from pathlib import Path
import pytest

from spellsuggest.DB import BucketedBackend, make_backend
from spellsuggest.DB.bucketed import assign_index_codes
from spellsuggest.errors import ConstructionError, FormatError


def _words() -> list[str]:
    return [c1 + v + c2 for c1 in "bdfklmnprst" for v in "aeiou" for c2 in "bdfklmnprst"]


def _seed(tmp: Path) -> Path:
    base = tmp / "en"
    words = base / "words"
    words.mkdir(parents=True)
    all_words = _words()
    half = len(all_words) // 2
    (words / "a.txt").write_text("\n".join(all_words[:half]) + "\n", encoding="utf-8")
    (words / "b.txt").write_text("\n".join(all_words[half:]) + "\n\n", encoding="utf-8")
    return base


def _sha(p: Path) -> str:
    return hashlib.sha256(p.read_bytes()).hexdigest()


def test_assign_index_codes_prefers_shortest_small_prefix():
    codes = ["A", "KS", "KST", "KT", "KT", "KT"]
    assert assign_index_codes(codes, 2) == ["A", "KS", "KS", "KT", "KT", "KT"]
    assert assign_index_codes(codes, 10) == ["A", "K", "K", "K", "K", "K"]


@pytest.mark.e2e
def test_build_then_find_every_word(tmp_path: Path):
    base = _seed(tmp_path)
    be = BucketedBackend(str(base), max_bucket_size=5)
    assert be.rebuilt
    db = base / "db"
    for name in ("contents", "words.db", "words.idx"):
        assert (db / name).exists()

    for w in _words():
        assert be.is_correct(w, case_fallback=False), w
    assert be.lookup("QQQ") == []
    assert not be.is_correct("kite")


@pytest.mark.e2e
def test_index_rows_tile_the_db_file(tmp_path: Path):
    base = _seed(tmp_path)
    be = BucketedBackend(str(base), max_bucket_size=5)
    rows = []
    for line in (base / "db" / "words.idx").read_text(encoding="utf-8").splitlines():
        code, off, length = line.rsplit(",", 2)
        rows.append((code, int(off), int(length)))

    assert len({r[0] for r in rows}) == len(rows) == be.bucket_count()   # one row per index code
    pos = 0
    for _, off, length in rows:
        assert off == pos and length > 0
        pos += length
    assert pos == (base / "db" / "words.db").stat().st_size

    manifest = (base / "db" / "contents").read_text(encoding="utf-8").splitlines()
    sizes = {p.name: p.stat().st_size for p in (base / "words").iterdir()}
    assert manifest == [f"{n},{sizes[n]}" for n in sorted(sizes)]


@pytest.mark.e2e
def test_unchanged_word_lists_reuse_the_index(tmp_path: Path):
    base = _seed(tmp_path)
    BucketedBackend(str(base), max_bucket_size=5)
    db_file = base / "db" / "words.db"
    before = (db_file.stat().st_mtime_ns, _sha(db_file))

    again = BucketedBackend(str(base), max_bucket_size=5)
    assert not again.rebuilt
    assert (db_file.stat().st_mtime_ns, _sha(db_file)) == before
    assert again.is_correct("kit")


@pytest.mark.e2e
def test_changed_word_list_triggers_rebuild(tmp_path: Path):
    base = _seed(tmp_path)
    first = BucketedBackend(str(base), max_bucket_size=5)
    assert not first.is_correct("zebra")

    with open(base / "words" / "a.txt", "a", encoding="utf-8") as f:
        f.write("zebra\n")
    second = BucketedBackend(str(base), max_bucket_size=5)
    assert second.rebuilt
    assert second.is_correct("zebra")
    assert second.is_correct("kit")


def test_missing_index_file_triggers_rebuild(tmp_path: Path):
    base = _seed(tmp_path)
    BucketedBackend(str(base))
    os.remove(base / "db" / "words.idx")
    be = BucketedBackend(str(base))
    assert be.rebuilt
    assert be.is_correct("bab")


def test_missing_directories(tmp_path: Path):
    with pytest.raises(ConstructionError):
        BucketedBackend(str(tmp_path / "nope"))
    (tmp_path / "empty").mkdir()
    with pytest.raises(ConstructionError):
        BucketedBackend(str(tmp_path / "empty"))


def test_record_without_comma_is_format_error(tmp_path: Path):
    base = _seed(tmp_path)
    be = BucketedBackend(str(base))
    db_file = base / "db" / "words.db"
    db_file.write_bytes(b"x" * db_file.stat().st_size)
    with pytest.raises(FormatError):
        be.lookup("KT")


def test_make_backend_bucketed_dsn(tmp_path: Path):
    base = _seed(tmp_path)
    be = make_backend(f"bucketed:///{base}")
    assert be.is_correct("dot")
