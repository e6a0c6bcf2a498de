"""Tests for the deck editing session."""

import pytest

from wxdeck.models.deck import Deck
from wxdeck.search.engine import QueryEngine
from wxdeck.services.card_database import CardDatabase
from wxdeck.services.deck_editor import STARTER_DECK, STARTER_DECK_NAME, DeckEditor
from wxdeck.services.deck_io import export_deck
from wxdeck.services.deck_library import DeckLibrary
from wxdeck.services.deck_validator import DeckValidator


@pytest.fixture
def library() -> DeckLibrary:
    return DeckLibrary({})


@pytest.fixture
def editor(library: DeckLibrary, deck_db: CardDatabase, legal_deck: Deck) -> DeckEditor:
    library.create("legal", legal_deck)
    return DeckEditor(library, deck_db, DeckValidator(deck_db), QueryEngine(deck_db))


class TestSession:
    def test_empty_library_gets_starter_deck(self, deck_db: CardDatabase) -> None:
        library = DeckLibrary({})
        editor = DeckEditor(library, deck_db, DeckValidator(deck_db), QueryEngine(deck_db))

        assert library.names() == [STARTER_DECK_NAME]
        assert editor.deck_name == STARTER_DECK_NAME
        assert library.load(STARTER_DECK_NAME) == STARTER_DECK

    def test_opens_first_deck(self, editor: DeckEditor) -> None:
        assert editor.deck_name == "legal"
        assert len(editor.main_deck) == 40
        assert len(editor.lrig_deck) == 5

    def test_select_unknown_fails(self, editor: DeckEditor) -> None:
        assert not editor.select("missing")
        assert editor.deck_name == "legal"

    def test_validity_properties(self, editor: DeckEditor) -> None:
        assert editor.main_deck_valid
        assert editor.lrig_deck_valid
        assert editor.format_restriction_valid
        assert editor.burst_count == 20
        assert editor.validate().is_legal


class TestEditing:
    def test_add_routes_lrig_deck_cards(self, editor: DeckEditor, deck_db: CardDatabase) -> None:
        assert editor.add_card(deck_db.get_by_pid(203))

        assert len(editor.lrig_deck) == 6
        assert len(editor.main_deck) == 40

    def test_add_sorts_and_saves(
        self, editor: DeckEditor, deck_db: CardDatabase, library: DeckLibrary
    ) -> None:
        editor.add_card(deck_db.get_by_pid(150))

        assert editor.main_deck[-1].pid == 150
        assert library.load("legal").main_deck == editor.current_deck().main_deck
        assert not editor.main_deck_valid

    def test_main_deck_soft_cap(self, editor: DeckEditor, deck_db: CardDatabase) -> None:
        spell = deck_db.get_by_pid(150)
        for _ in range(10):
            assert editor.add_card(spell)

        assert not editor.add_card(spell)
        assert len(editor.main_deck) == 50

    def test_lrig_deck_soft_cap(self, editor: DeckEditor, deck_db: CardDatabase) -> None:
        arts = deck_db.get_by_pid(203)
        for _ in range(15):
            assert editor.add_card(arts)

        assert not editor.add_card(arts)
        assert len(editor.lrig_deck) == 20

    def test_remove_card(self, editor: DeckEditor, library: DeckLibrary) -> None:
        removed = editor.lrig_deck[0]

        assert editor.remove_card(is_lrig=True, index=0)
        assert removed.pid not in editor.current_deck().lrig_deck
        assert library.load("legal").lrig_deck == editor.current_deck().lrig_deck

    def test_remove_out_of_range(self, editor: DeckEditor) -> None:
        assert not editor.remove_card(is_lrig=False, index=40)
        assert not editor.remove_card(is_lrig=False, index=-1)


class TestDeckManagement:
    def test_create_copies_open_deck(self, editor: DeckEditor, library: DeckLibrary) -> None:
        before = editor.current_deck()

        assert editor.create("second")
        assert editor.deck_name == "second"
        assert library.load("second") == before

    def test_copy(self, editor: DeckEditor) -> None:
        assert editor.copy("clone")
        assert editor.deck_names() == ["clone", "legal"]

    def test_rename(self, editor: DeckEditor) -> None:
        assert editor.rename("renamed")
        assert editor.deck_name == "renamed"
        assert editor.deck_names() == ["renamed"]

    def test_rename_rejects_empty_or_same(self, editor: DeckEditor) -> None:
        assert not editor.rename("")
        assert not editor.rename("legal")

    def test_delete_last_deck_reseeds_starter(self, editor: DeckEditor) -> None:
        assert editor.delete()
        assert editor.deck_names() == [STARTER_DECK_NAME]
        assert editor.deck_name == STARTER_DECK_NAME

    def test_delete_opens_neighbour(self, editor: DeckEditor) -> None:
        editor.create("b")
        editor.create("c")
        editor.select("b")

        assert editor.delete()
        assert editor.deck_name == "c"


class TestSearchAndIO:
    def test_search_stores_results(self, editor: DeckEditor) -> None:
        results = editor.search("spell")
        assert [r.pid for r in results] == [150]
        assert editor.search_results == results

    def test_export_matches_current_deck(self, editor: DeckEditor) -> None:
        assert editor.export() == export_deck(editor.current_deck())

    def test_import_creates_and_opens(self, editor: DeckEditor) -> None:
        payload = export_deck(Deck(main_deck=[100, 101], lrig_deck=[200]))

        assert editor.import_deck("imported", payload)
        assert editor.deck_name == "imported"
        # Opened decks come back in editor order
        assert editor.current_deck() == Deck(main_deck=[101, 100], lrig_deck=[200])

    def test_import_rejects_bad_payload_or_taken_name(self, editor: DeckEditor) -> None:
        assert not editor.import_deck("x", "garbage")
        assert not editor.import_deck("legal", editor.export())

    def test_to_text_has_three_sections(self, editor: DeckEditor) -> None:
        assert editor.to_text().count("——————————") == 2
