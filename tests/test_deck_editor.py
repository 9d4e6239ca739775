"""
Tests for deck editing operations.

Every operation returns a new deck. A failed operation raises and leaves the
caller's deck untouched.
"""

from collections.abc import Callable

import pytest

from deckforge.models.card import CardRef
from deckforge.models.deck import Board, DeckCardEntry, DeckModel
from deckforge.models.failure import (
    CardNotFoundError,
    FailureKind,
    InvalidQuantityError,
    InvalidTransferError,
)
from deckforge.services.deck_editor import (
    DeckCardOperation,
    add_card,
    apply_operations,
    remove_card,
    set_quantity,
    transfer,
)


def _entry(card: CardRef, quantity: int) -> DeckCardEntry:
    return DeckCardEntry(card=card, quantity=quantity)


@pytest.fixture
def deck(lightning_bolt: CardRef, plains: CardRef) -> DeckModel:
    """2 Bolt and 20 Plains main, 3 Bolt side."""
    return DeckModel.from_entries(
        "modern",
        mainboard=[_entry(lightning_bolt, 2), _entry(plains, 20)],
        sideboard=[_entry(lightning_bolt, 3)],
    )


class TestAddCard:
    def test_merges_with_existing_entry(self, deck: DeckModel, lightning_bolt: CardRef) -> None:
        edited = add_card(deck, Board.MAIN, lightning_bolt, 1)

        entry = edited.find_entry(Board.MAIN, lightning_bolt.id)
        assert entry is not None
        assert entry.quantity == 3
        assert len(edited.mainboard) == 2

    def test_appends_new_card(self, deck: DeckModel, mountain: CardRef) -> None:
        edited = add_card(deck, Board.MAIN, mountain, 4)

        assert edited.mainboard[-1] == DeckCardEntry(card=mountain, quantity=4)

    def test_maybeboard(self, deck: DeckModel, mountain: CardRef) -> None:
        edited = add_card(deck, Board.MAYBE, mountain)

        assert edited.count(Board.MAYBE) == 1
        assert edited.count(Board.MAIN) == deck.count(Board.MAIN)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_rejects_non_positive_quantity(
        self, deck: DeckModel, mountain: CardRef, quantity: int
    ) -> None:
        with pytest.raises(InvalidQuantityError) as exc_info:
            add_card(deck, Board.MAIN, mountain, quantity)

        assert exc_info.value.kind == FailureKind.INVALID_INPUT

    def test_original_deck_unchanged(self, deck: DeckModel, mountain: CardRef) -> None:
        add_card(deck, Board.MAIN, mountain, 4)

        assert deck.find_entry(Board.MAIN, mountain.id) is None


class TestRemoveAndSetQuantity:
    def test_remove_card(self, deck: DeckModel, lightning_bolt: CardRef) -> None:
        edited = remove_card(deck, Board.MAIN, lightning_bolt.id)

        assert edited.find_entry(Board.MAIN, lightning_bolt.id) is None
        assert edited.find_entry(Board.SIDE, lightning_bolt.id) is not None

    def test_remove_missing_card(self, deck: DeckModel) -> None:
        with pytest.raises(CardNotFoundError) as exc_info:
            remove_card(deck, Board.MAYBE, "nope")

        assert exc_info.value.status_code == 404
        assert exc_info.value.board == "maybe"

    def test_set_quantity(self, deck: DeckModel, plains: CardRef) -> None:
        edited = set_quantity(deck, Board.MAIN, plains.id, 17)

        entry = edited.find_entry(Board.MAIN, plains.id)
        assert entry is not None
        assert entry.quantity == 17

    def test_set_quantity_zero_removes(self, deck: DeckModel, plains: CardRef) -> None:
        edited = set_quantity(deck, Board.MAIN, plains.id, 0)

        assert edited.find_entry(Board.MAIN, plains.id) is None
        assert all(entry.quantity > 0 for entry in edited.mainboard)

    def test_set_quantity_missing_card(self, deck: DeckModel) -> None:
        with pytest.raises(CardNotFoundError):
            set_quantity(deck, Board.MAIN, "nope", 2)


class TestTransfer:
    def test_whole_entry_merges_into_destination(
        self, deck: DeckModel, lightning_bolt: CardRef
    ) -> None:
        """side(3) -> main(2) leaves main 5 and no side entry."""
        edited = transfer(deck, lightning_bolt.id, Board.SIDE, Board.MAIN)

        main_entry = edited.find_entry(Board.MAIN, lightning_bolt.id)
        assert main_entry is not None
        assert main_entry.quantity == 5
        assert edited.find_entry(Board.SIDE, lightning_bolt.id) is None
        assert edited.total_cards() == deck.total_cards()

    def test_partial_transfer(self, deck: DeckModel, lightning_bolt: CardRef) -> None:
        edited = transfer(deck, lightning_bolt.id, Board.SIDE, Board.MAIN, quantity=1)

        assert edited.count(Board.SIDE) == 2
        main_entry = edited.find_entry(Board.MAIN, lightning_bolt.id)
        assert main_entry is not None
        assert main_entry.quantity == 3

    def test_transfer_to_empty_board_creates_entry(
        self, deck: DeckModel, plains: CardRef
    ) -> None:
        edited = transfer(deck, plains.id, Board.MAIN, Board.MAYBE, quantity=5)

        assert edited.maybeboard == (DeckCardEntry(card=plains, quantity=5),)
        assert edited.count(Board.MAIN) == deck.count(Board.MAIN) - 5

    def test_missing_card_leaves_deck_unchanged(
        self, plains: CardRef, mountain: CardRef
    ) -> None:
        deck = DeckModel.from_entries("standard", mainboard=[_entry(plains, 20)])
        snapshot = DeckModel.from_entries("standard", mainboard=[_entry(plains, 20)])

        with pytest.raises(CardNotFoundError):
            transfer(deck, mountain.id, Board.SIDE, Board.MAIN)

        assert deck == snapshot

    def test_same_board_is_rejected(self, deck: DeckModel, lightning_bolt: CardRef) -> None:
        with pytest.raises(InvalidTransferError) as exc_info:
            transfer(deck, lightning_bolt.id, Board.MAIN, Board.MAIN)

        assert exc_info.value.kind == FailureKind.INVALID_TRANSFER

    def test_same_board_checked_before_presence(self, deck: DeckModel) -> None:
        with pytest.raises(InvalidTransferError):
            transfer(deck, "nope", Board.SIDE, Board.SIDE)

    @pytest.mark.parametrize("quantity", [0, -2, 4])
    def test_quantity_out_of_range(
        self, deck: DeckModel, lightning_bolt: CardRef, quantity: int
    ) -> None:
        with pytest.raises(InvalidTransferError) as exc_info:
            transfer(deck, lightning_bolt.id, Board.SIDE, Board.MAIN, quantity=quantity)

        assert exc_info.value.detail == "3 available in the side board"


class TestApplyOperations:
    def test_upserts_in_order(
        self, deck: DeckModel, lightning_bolt: CardRef, mountain: CardRef, plains: CardRef
    ) -> None:
        edited = apply_operations(
            deck,
            [
                DeckCardOperation(card=mountain, quantity=8),
                DeckCardOperation(card=plains, quantity=12),
                DeckCardOperation(card=lightning_bolt, quantity=0, board=Board.SIDE),
                DeckCardOperation(card=mountain, quantity=10),
            ],
        )

        assert [(e.card.name, e.quantity) for e in edited.mainboard] == [
            ("Lightning Bolt", 2),
            ("Plains", 12),
            ("Mountain", 10),
        ]
        assert edited.sideboard == ()

    def test_removing_absent_card_is_noop(self, deck: DeckModel, mountain: CardRef) -> None:
        edited = apply_operations(deck, [DeckCardOperation(card=mountain, quantity=0)])

        assert edited == deck

    def test_empty_batch(self, deck: DeckModel) -> None:
        assert apply_operations(deck, []) == deck
