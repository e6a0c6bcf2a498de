"""Tests for named deck storage."""

import json

import pytest

from wxdeck.models.deck import Deck
from wxdeck.services.deck_library import DECK_KEY_PREFIX, INDEX_KEY, DeckLibrary


@pytest.fixture
def store() -> dict[str, str]:
    return {}


@pytest.fixture
def library(store: dict[str, str]) -> DeckLibrary:
    return DeckLibrary(store)


class TestCreate:
    def test_create_writes_index_and_deck(self, library: DeckLibrary, store: dict) -> None:
        assert library.create("b", Deck([1], [2]))
        assert library.create("a", Deck([], []))

        assert json.loads(store[INDEX_KEY]) == ["a", "b"]
        assert json.loads(store[DECK_KEY_PREFIX + "b"]) == {"mainDeck": [1], "lrigDeck": [2]}

    def test_create_existing_name_fails(self, library: DeckLibrary) -> None:
        library.create("a", Deck([1], []))

        assert not library.create("a", Deck([2], []))
        assert library.load("a") == Deck([1], [])

    def test_names_sorted(self, library: DeckLibrary) -> None:
        for name in ("c", "a", "b"):
            library.create(name, Deck())
        assert library.names() == ["a", "b", "c"]
        assert "b" in library


class TestRenameDelete:
    def test_rename_moves_deck(self, library: DeckLibrary, store: dict) -> None:
        library.create("old", Deck([5], [6]))

        assert library.rename("old", "new")
        assert library.names() == ["new"]
        assert library.load("new") == Deck([5], [6])
        assert DECK_KEY_PREFIX + "old" not in store

    def test_rename_to_taken_name_fails(self, library: DeckLibrary) -> None:
        library.create("a", Deck([1], []))
        library.create("b", Deck([2], []))

        assert not library.rename("a", "b")
        assert library.load("b") == Deck([2], [])

    def test_rename_unknown_fails(self, library: DeckLibrary) -> None:
        assert not library.rename("missing", "x")

    def test_delete(self, library: DeckLibrary, store: dict) -> None:
        library.create("a", Deck([1], []))

        assert library.delete("a")
        assert library.names() == []
        assert DECK_KEY_PREFIX + "a" not in store
        assert not library.delete("a")


class TestLoadSave:
    def test_save_unknown_name_fails(self, library: DeckLibrary) -> None:
        assert not library.save("missing", Deck())

    def test_save_overwrites(self, library: DeckLibrary) -> None:
        library.create("a", Deck([1], []))
        assert library.save("a", Deck([2, 3], [4]))
        assert library.load("a") == Deck([2, 3], [4])

    def test_load_missing_returns_none(self, library: DeckLibrary) -> None:
        assert library.load("missing") is None

    def test_load_corrupted_returns_none(self, library: DeckLibrary, store: dict) -> None:
        library.create("a", Deck())
        store[DECK_KEY_PREFIX + "a"] = "{broken"
        assert library.load("a") is None

    def test_reopens_existing_store(self, store: dict) -> None:
        """A second library over the same store sees the same decks."""
        DeckLibrary(store).create("a", Deck([1], [2]))

        reopened = DeckLibrary(store)

        assert reopened.names() == ["a"]
        assert reopened.load("a") == Deck([1], [2])

    def test_corrupted_index_starts_empty(self) -> None:
        assert DeckLibrary({INDEX_KEY: "not json"}).names() == []

    @pytest.mark.parametrize("index", ["5", '{"a": 1}', '"deck"', "null"])
    def test_index_that_is_not_a_list_starts_empty(self, index: str) -> None:
        """Well-formed JSON of the wrong shape is treated as a corrupted index."""
        library = DeckLibrary({INDEX_KEY: index})

        assert library.names() == []
        assert library.create("a", Deck())
        assert library.names() == ["a"]
