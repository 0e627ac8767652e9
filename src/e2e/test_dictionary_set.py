# src/e2e/test_dictionary_set.py

from pathlib import Path
import pytest

from spellsuggest.DB import DichotomyBackend, HashedBackend, write_dichotomy_file
from spellsuggest.dictionary import Dictionary, DictionaryManager, DictionarySet
from spellsuggest.errors import InvalidWordError, UnsupportedOperation
from spellsuggest.models import SuggestedSpelling, suggestion_sort_key
from spellsuggest.suggest import SuggestionEngine


def _dict(name: str, words, **kw) -> Dictionary:
    return Dictionary(name, f"{name} words", SuggestionEngine(HashedBackend(words)), **kw)


def test_correct_word_has_no_suggestions():
    r = _dict("en", ["cat"]).check_spelling("cat")
    assert r.is_correct and r.suggestions == () and r.dictionary_name == "en"


def test_suggestions_sorted_and_truncated_exactly():
    d = _dict("en", ["cut", "kit", "cat", "cod"], maximum_suggestions=2)
    r = d.check_spelling("cot")
    assert not r.is_correct
    assert [(s.word, s.cost) for s in r.suggestions] == [("cat", 2), ("cod", 2)]
    assert all(s.dictionary_name == "en" for s in r.suggestions)

    none = _dict("en", ["cat"], maximum_suggestions=0).check_spelling("cot")
    assert none.suggestions == ()


def test_cost_then_word_ordering_across_phonetic_groups():
    r = _dict("en", ["ACST", "cast"]).check_spelling("acst", cost_threshold=10)
    assert [s.word for s in r.suggestions] == ["cast", "ACST"]


def test_sort_key_ignores_case_on_ties():
    items = [SuggestedSpelling("Bob", 1, "x"), SuggestedSpelling("alice", 1, "x"), SuggestedSpelling("zed", 0, "x")]
    assert [s.word for s in sorted(items, key=suggestion_sort_key)] == ["zed", "alice", "Bob"]


def test_spell_check_one_result_per_dictionary_in_order():
    s = DictionarySet([_dict("first", ["cat"]), _dict("second", ["cot"])])
    results = s.spell_check("cot")
    assert [r.dictionary_name for r in results] == ["first", "second"]
    assert [r.is_correct for r in results] == [False, True]
    assert [x.word for x in results[0].suggestions] == ["cat"]


@pytest.mark.parametrize("bad", ["", "two words", "hy-phen", None, 42])
def test_spell_check_rejects_non_words(bad):
    s = DictionarySet([_dict("en", ["cat"])])
    with pytest.raises(InvalidWordError):
        s.spell_check(bad)


def test_invalid_word_error_is_value_error():
    assert issubclass(InvalidWordError, ValueError)


def test_copy_shares_dictionaries_but_not_the_list():
    s = DictionarySet([_dict("en", ["cat"])])
    c = s.copy()
    assert c is not s and c[0] is s[0]
    c.add(_dict("fr", ["chat"]))
    assert len(s) == 1 and len(c) == 2


def test_remove_is_unsupported():
    s = DictionarySet([_dict("en", ["cat"])])
    with pytest.raises(UnsupportedOperation):
        s.remove("en")


def test_manager_create_register_and_snapshot(tmp_path: Path):
    wl = tmp_path / "en.txt"
    wl.write_text("cat\nbat\nhat\n", encoding="utf-8")
    dic = tmp_path / "en.dic"
    write_dichotomy_file(str(dic), ["cot"])

    mgr = DictionaryManager()
    mgr.create("en", "English", str(wl))
    snapshot = mgr.dictionary_set()

    mgr.set_maximum_suggestions(1)
    mgr.set_cost_threshold(7)
    d2 = mgr.register_backend("disk", "on disk", DichotomyBackend.open(str(dic)))
    assert (d2.maximum_suggestions, d2.maximum_cost) == (1, 7)
    assert snapshot[0].maximum_suggestions == 5 and snapshot[0].maximum_cost == 3

    assert len(snapshot) == 1
    assert mgr.dictionary_set().names() == ["en", "disk"]

    with pytest.raises(ValueError):
        mgr.create("en", "again", ["cat"])

    mgr.reset()
    assert len(mgr.dictionary_set()) == 0


def test_manager_normalised_dictionary():
    mgr = DictionaryManager()
    mgr.create("plain", "", ["Sunday"])
    mgr.create("norm", "", ["Sunday"], normalised=True)
    results = mgr.dictionary_set().spell_check("sunday")
    assert [r.is_correct for r in results] == [False, True]
