"""Tests for card, deck and format rule models."""

import logging

import pytest

from deckforge.models.card import CardRef
from deckforge.models.deck import Board, DeckCardEntry, DeckModel
from deckforge.models.failure import UnknownFormatError
from deckforge.models.format_rules import (
    DEFAULT_FORMAT_RULES,
    FORMAT_RULES,
    DeckFormat,
    FormatRules,
    find_format_rules,
    get_format_rules,
    parse_format,
    require_format_rules,
)


class TestCardRef:
    def test_identity_key_prefers_oracle_id(self) -> None:
        card = CardRef(id="print-1", name="Opt", oracle_id="oracle-opt")
        assert card.identity_key == "oracle-opt"

    def test_identity_key_falls_back_to_id(self) -> None:
        card = CardRef(id="print-1", name="Opt")
        assert card.identity_key == "print-1"

    def test_display_name_prefers_printed_name(self) -> None:
        card = CardRef(id="1", name="Shock", printed_name="Choc")
        assert card.display_name == "Choc"

    @pytest.mark.parametrize(
        ("type_line", "is_land", "is_basic"),
        [
            ("Basic Land — Forest", True, True),
            ("Basic Snow Land — Island", True, True),
            ("Land — Forest Plains", True, False),
            ("Terrain de base : Forêt", True, True),
            ("Artifact Land", True, False),
            ("Creature — Elf", False, False),
            ("Legendary Creature — Island Spirit", False, False),
        ],
    )
    def test_land_detection(self, type_line: str, is_land: bool, is_basic: bool) -> None:
        card = CardRef(id="1", name="Card", type_line=type_line)

        assert card.is_land is is_land
        assert card.is_basic_land is is_basic

    def test_basic_land_color(self) -> None:
        forest = CardRef(id="1", name="Forest", type_line="Basic Land — Forest")
        wastes = CardRef(id="2", name="Wastes", type_line="Basic Land")
        grove = CardRef(id="3", name="Forest", type_line="Land")

        assert forest.basic_land_color == "G"
        assert wastes.basic_land_color is None
        assert grove.basic_land_color is None

    def test_matches_name_checks_printed_name(self) -> None:
        card = CardRef(id="1", name="Shock", printed_name="Choc")

        assert card.matches_name(frozenset({"choc"})) == "Choc"
        assert card.matches_name(frozenset({"shock"})) == "Shock"
        assert card.matches_name(frozenset({"bolt"})) is None


class TestDeckModel:
    def test_from_entries_merges_duplicate_ids(self, lightning_bolt: CardRef) -> None:
        deck = DeckModel.from_entries(
            "modern",
            mainboard=[
                DeckCardEntry(card=lightning_bolt, quantity=2),
                DeckCardEntry(card=lightning_bolt, quantity=1),
            ],
        )

        assert len(deck.mainboard) == 1
        assert deck.mainboard[0].quantity == 3

    def test_from_entries_drops_empty_entries(self, lightning_bolt: CardRef) -> None:
        deck = DeckModel.from_entries(
            "modern",
            sideboard=[
                DeckCardEntry(card=lightning_bolt, quantity=0),
                DeckCardEntry(card=lightning_bolt, quantity=-2),
            ],
        )

        assert deck.sideboard == ()

    def test_counts(self, lightning_bolt: CardRef, plains: CardRef) -> None:
        deck = DeckModel.from_entries(
            "standard",
            mainboard=[DeckCardEntry(card=plains, quantity=20)],
            sideboard=[DeckCardEntry(card=lightning_bolt, quantity=3)],
            maybeboard=[DeckCardEntry(card=lightning_bolt, quantity=5)],
        )

        assert deck.count(Board.MAIN) == 20
        assert deck.count(Board.SIDE) == 3
        assert deck.count(Board.MAYBE) == 5
        assert deck.total_cards() == 23

    def test_with_board_returns_new_deck(self, lightning_bolt: CardRef) -> None:
        deck = DeckModel.from_entries("standard")
        edited = deck.with_board(Board.MAIN, (DeckCardEntry(card=lightning_bolt, quantity=1),))

        assert deck.mainboard == ()
        assert edited.find_entry(Board.MAIN, lightning_bolt.id) is not None
        assert edited.find_entry(Board.SIDE, lightning_bolt.id) is None


class TestFormatRules:
    def test_every_format_has_rules(self) -> None:
        assert set(FORMAT_RULES) == set(DeckFormat)

    def test_constructed_formats(self) -> None:
        for deck_format in (DeckFormat.STANDARD, DeckFormat.MODERN, DeckFormat.HISTORIC):
            rules = FORMAT_RULES[deck_format]
            assert rules.min_mainboard == 60
            assert rules.sideboard_limit == 15
            assert rules.copy_limit == 4
            assert rules.singleton is False

    def test_commander(self) -> None:
        rules = FORMAT_RULES[DeckFormat.COMMANDER]

        assert rules.min_mainboard == 99
        assert rules.copy_limit == 1
        assert rules.singleton is True
        assert rules.sideboard_limit is None

    def test_unbounded_sideboard_formats(self) -> None:
        for deck_format in (DeckFormat.BRAWL, DeckFormat.PAUPER, DeckFormat.CASUAL):
            assert FORMAT_RULES[deck_format].sideboard_limit is None

    def test_is_banned_is_case_insensitive(self) -> None:
        rules = FormatRules(name="test", banned=frozenset({"black lotus"}))

        assert rules.is_banned("Black Lotus")
        assert not rules.is_banned("Lotus Petal")

    def test_parse_format_normalizes(self) -> None:
        assert parse_format("  Modern ") == DeckFormat.MODERN
        assert parse_format("oathbreaker") is None

    def test_find_format_rules(self) -> None:
        assert find_format_rules("PIONEER") is FORMAT_RULES[DeckFormat.PIONEER]
        assert find_format_rules("unknown") is None

    def test_get_format_rules_falls_back_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="deckforge.models.format_rules"):
            rules = get_format_rules("oathbreaker")

        assert rules is DEFAULT_FORMAT_RULES
        assert rules.min_mainboard == 60
        assert rules.copy_limit == 4
        assert rules.sideboard_limit is None
        assert "oathbreaker" in caplog.text

    def test_require_format_rules_raises(self) -> None:
        with pytest.raises(UnknownFormatError) as exc_info:
            require_format_rules("oathbreaker")

        assert exc_info.value.status_code == 404
        assert "standard" in (exc_info.value.detail or "")
