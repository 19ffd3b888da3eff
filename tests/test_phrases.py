from __future__ import annotations

from pathlib import Path

from traveltalk.core import database as db
from traveltalk.core.phrases import SavedPhrasesStore


def test_add_trims_and_inserts_newest_first(initialized_db: Path) -> None:
    store = SavedPhrasesStore()
    first = store.add("en", "si", "  thank you ", " ස්තූතියි ")
    second = store.add("en", "si", "hello", "හෙලෝ")

    assert first.input == "thank you"
    assert first.output == "ස්තූතියි"
    assert [p.id for p in store.phrases] == [second.id, first.id]


def test_phrases_survive_reload(initialized_db: Path) -> None:
    store = SavedPhrasesStore()
    first = store.add("en", "si", "thank you", "ස්තූතියි")
    second = store.add("si", "en", "ආයුබෝවන්", "hello")

    reloaded = SavedPhrasesStore().phrases
    assert [p.id for p in reloaded] == [second.id, first.id]
    assert reloaded[0].source_lang == "si"
    assert reloaded[1].date == first.date


def test_blank_sides_are_not_saved(initialized_db: Path) -> None:
    store = SavedPhrasesStore()

    assert store.add("en", "si", "   ", "හෙලෝ") is None
    assert store.add("en", "si", "hello", "") is None
    assert store.phrases == []
    assert db.get_all_saved_phrases() == []


def test_remove(initialized_db: Path) -> None:
    store = SavedPhrasesStore()
    phrase = store.add("en", "si", "hello", "හෙලෝ")

    assert store.remove(phrase.id) is True
    assert store.remove(phrase.id) is False
    assert store.phrases == []
    assert db.get_saved_phrase(phrase.id) is None


def test_remove_at_offsets(initialized_db: Path) -> None:
    store = SavedPhrasesStore()
    a = store.add("en", "si", "a", "අ")
    b = store.add("en", "si", "b", "බ")
    c = store.add("en", "si", "c", "ච")

    store.remove_at([0, 2])

    assert [p.id for p in store.phrases] == [b.id]
    assert [p.id for p in SavedPhrasesStore().phrases] == [b.id]
    assert db.get_saved_phrase(a.id) is None
    assert db.get_saved_phrase(c.id) is None


def test_to_dict(initialized_db: Path) -> None:
    phrase = SavedPhrasesStore().add("en", "si", "please", "කරුණාකර")
    payload = phrase.to_dict()

    assert payload["input"] == "please"
    assert payload["date"] == phrase.date.isoformat()
