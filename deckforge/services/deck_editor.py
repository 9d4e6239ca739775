"""
Deck editing service.

The mutation surface of a deck: add, remove, set quantity, transfer between
boards, and bulk upsert. Every operation takes a DeckModel and returns a new
one. Validation happens before anything is built, so when an operation raises
the caller still holds the untouched original deck (no partial mutation).

Errors are KnownError subclasses (local, recoverable):
- CardNotFoundError: the card has no entry on the board
- InvalidTransferError: same-board move or a quantity the source cannot cover
- InvalidQuantityError: a non-positive quantity where one is required
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from deckforge.models.card import CardRef
from deckforge.models.deck import Board, DeckCardEntry, DeckModel
from deckforge.models.failure import (
    CardNotFoundError,
    InvalidQuantityError,
    InvalidTransferError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeckCardOperation:
    """
    One bulk upsert instruction.

    quantity <= 0 removes the entry if present; otherwise the entry is set to
    exactly `quantity` (created from `card` when absent).
    """

    card: CardRef
    quantity: int
    board: Board = Board.MAIN


def _require_entry(deck: DeckModel, board: Board, card_id: str) -> DeckCardEntry:
    entry = deck.find_entry(board, card_id)
    if entry is None:
        raise CardNotFoundError(card_id, board.value)
    return entry


def _merge_into(
    entries: tuple[DeckCardEntry, ...], card: CardRef, quantity: int
) -> tuple[DeckCardEntry, ...]:
    """Add quantity to the entry for card.id, or append a new entry."""
    for index, entry in enumerate(entries):
        if entry.card.id == card.id:
            merged = replace(entry, quantity=entry.quantity + quantity)
            return entries[:index] + (merged,) + entries[index + 1 :]
    return entries + (DeckCardEntry(card=card, quantity=quantity),)


def _with_quantity(
    entries: tuple[DeckCardEntry, ...], card_id: str, quantity: int
) -> tuple[DeckCardEntry, ...]:
    """Set the quantity of an existing entry; quantity <= 0 drops it."""
    if quantity <= 0:
        return tuple(entry for entry in entries if entry.card.id != card_id)
    return tuple(
        replace(entry, quantity=quantity) if entry.card.id == card_id else entry
        for entry in entries
    )


def add_card(deck: DeckModel, board: Board, card: CardRef, quantity: int = 1) -> DeckModel:
    """
    Add copies of a card to a board, merging with an existing entry.

    Raises:
        InvalidQuantityError: If quantity < 1
    """
    if quantity < 1:
        raise InvalidQuantityError(quantity, "at least one copy must be added")
    return deck.with_board(board, _merge_into(deck.board(board), card, quantity))


def remove_card(deck: DeckModel, board: Board, card_id: str) -> DeckModel:
    """
    Remove a card's entry from a board entirely.

    Raises:
        CardNotFoundError: If the card is not on the board
    """
    _require_entry(deck, board, card_id)
    return deck.with_board(board, _with_quantity(deck.board(board), card_id, 0))


def set_quantity(deck: DeckModel, board: Board, card_id: str, quantity: int) -> DeckModel:
    """
    Set a card's quantity on a board. Zero (or a negative value) removes it.

    Raises:
        CardNotFoundError: If the card is not on the board
    """
    _require_entry(deck, board, card_id)
    return deck.with_board(board, _with_quantity(deck.board(board), card_id, quantity))


def transfer(
    deck: DeckModel,
    card_id: str,
    from_board: Board,
    to_board: Board,
    quantity: int | None = None,
) -> DeckModel:
    """
    Move a card (all of it, or part of its quantity) between boards.

    The source entry is decremented, or deleted when emptied. The destination
    merges with an existing entry for the same card id, or gains a new one.
    Both boards change together or not at all.

    Args:
        deck: The deck to edit (not modified)
        card_id: Printing-level card id
        from_board: Board to take the card from
        to_board: Board to put the card on
        quantity: Copies to move; the entire source quantity when omitted

    Returns:
        The edited deck

    Raises:
        InvalidTransferError: Same-board move, or quantity outside 1..source quantity
        CardNotFoundError: If the card is not on from_board
    """
    if from_board == to_board:
        raise InvalidTransferError(
            f"Cannot move a card from the {from_board.value} board to itself."
        )

    source = _require_entry(deck, from_board, card_id)
    moved = source.quantity if quantity is None else quantity

    if moved < 1 or moved > source.quantity:
        raise InvalidTransferError(
            f"Cannot move {moved} cop{'y' if moved == 1 else 'ies'} of '{source.card.name}'.",
            detail=f"{source.quantity} available in the {from_board.value} board",
        )

    remaining = source.quantity - moved
    new_source = _with_quantity(deck.board(from_board), card_id, remaining)
    new_target = _merge_into(deck.board(to_board), source.card, moved)

    logger.debug(
        "Moved %d x %s from %s to %s", moved, card_id, from_board.value, to_board.value
    )

    return deck.with_board(from_board, new_source).with_board(to_board, new_target)


def apply_operations(deck: DeckModel, operations: Iterable[DeckCardOperation]) -> DeckModel:
    """
    Apply a batch of upserts, all or nothing.

    Operations are applied in order, so a later operation on the same card and
    board wins. Removing a card that is absent is a no-op.
    """
    result = deck
    for op in operations:
        entries = result.board(op.board)
        if result.find_entry(op.board, op.card.id) is None:
            if op.quantity > 0:
                entries = entries + (DeckCardEntry(card=op.card, quantity=op.quantity),)
        else:
            entries = _with_quantity(entries, op.card.id, op.quantity)
        result = result.with_board(op.board, entries)
    return result
