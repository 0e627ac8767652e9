# src/e2e/test_loader.py

import io
from pathlib import Path
import pytest

from spellsuggest.errors import ConstructionError
from spellsuggest.loader import iter_lines, list_wordlist_files, read_wordlist


def test_iter_lines_accepts_paths_streams_and_lists(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("cat\r\nbat\n", encoding="utf-8")
    assert list(iter_lines(str(p))) == ["cat", "bat"]
    assert list(iter_lines(p)) == ["cat", "bat"]
    assert list(iter_lines(io.StringIO("a\nb\n"))) == ["a", "b"]
    assert list(iter_lines(["x\n", "y"])) == ["x", "y"]


def test_iter_lines_missing_file(tmp_path: Path):
    with pytest.raises(ConstructionError):
        list(iter_lines(str(tmp_path / "missing.txt")))


def test_read_wordlist_strips_comments_and_short_words():
    lines = ["# header", "cat  # pet", "  Dog ", "", "a", "#"]
    assert list(read_wordlist(lines)) == ["cat", "Dog", "a"]
    assert list(read_wordlist(lines, lower=True, min_length=2)) == ["cat", "dog"]


def test_list_wordlist_files_sorted_regular_files(tmp_path: Path):
    (tmp_path / "b.txt").write_text("", encoding="utf-8")
    (tmp_path / "a.txt").write_text("", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    names = [Path(p).name for p in list_wordlist_files(str(tmp_path))]
    assert names == ["a.txt", "b.txt"]
    with pytest.raises(ConstructionError):
        list_wordlist_files(str(tmp_path / "nope"))


def test_read_wordlist_progress_only_when_verbose(monkeypatch, capsys):
    monkeypatch.setattr("spellsuggest.loader.PROGRESS_EVERY_WORDS", 2)
    lines = ["cat", "bat", "hat", "rat"]
    assert list(read_wordlist(lines, verbose=False)) == lines
    assert capsys.readouterr().out == ""
    assert list(read_wordlist(lines, verbose=True)) == lines
    assert capsys.readouterr().out.splitlines() == ["[loaded] words=2", "[loaded] words=4"]
