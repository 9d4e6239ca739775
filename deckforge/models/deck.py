"""
Deck model.

A deck is three ordered boards of (card, quantity) entries plus a format tag.

INVARIANTS:
- An entry never has quantity 0 (it is removed instead)
- Within one board, entries are unique by card.id (mutations merge)
- DeckModel is immutable; every edit produces a new DeckModel, so a failed
  edit can never leave a half-applied deck behind
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

from deckforge.models.card import CardRef


class Board(str, Enum):
    """The three card lists composing a deck."""

    MAIN = "main"
    SIDE = "side"
    MAYBE = "maybe"


@dataclass(frozen=True, slots=True)
class DeckCardEntry:
    """A card on a board with its quantity."""

    card: CardRef
    quantity: int


_BOARD_FIELDS: dict[Board, str] = {
    Board.MAIN: "mainboard",
    Board.SIDE: "sideboard",
    Board.MAYBE: "maybeboard",
}


def _merge_entries(entries: Iterable[DeckCardEntry]) -> tuple[DeckCardEntry, ...]:
    """Merge duplicate card ids (first position wins) and drop empty entries."""
    merged: dict[str, DeckCardEntry] = {}
    for entry in entries:
        if entry.quantity <= 0:
            continue
        existing = merged.get(entry.card.id)
        if existing is None:
            merged[entry.card.id] = entry
        else:
            merged[entry.card.id] = replace(existing, quantity=existing.quantity + entry.quantity)
    return tuple(merged.values())


@dataclass(frozen=True)
class DeckModel:
    """
    A deck under construction.

    Attributes:
        format: Format tag (looked up in the format rule table)
        mainboard: Main deck entries, in insertion order
        sideboard: Sideboard entries, in insertion order
        maybeboard: Cards under consideration, never counted for legality
    """

    format: str = "standard"
    mainboard: tuple[DeckCardEntry, ...] = ()
    sideboard: tuple[DeckCardEntry, ...] = ()
    maybeboard: tuple[DeckCardEntry, ...] = ()

    @classmethod
    def from_entries(
        cls,
        format_name: str,
        mainboard: Iterable[DeckCardEntry] = (),
        sideboard: Iterable[DeckCardEntry] = (),
        maybeboard: Iterable[DeckCardEntry] = (),
    ) -> "DeckModel":
        """
        Hydrate a deck from persisted or client-supplied entries.

        Duplicate card ids within a board are merged and entries with
        quantity <= 0 are dropped, so the result satisfies the model invariants.
        """
        return cls(
            format=format_name,
            mainboard=_merge_entries(mainboard),
            sideboard=_merge_entries(sideboard),
            maybeboard=_merge_entries(maybeboard),
        )

    def board(self, board: Board) -> tuple[DeckCardEntry, ...]:
        """Get the entries of one board."""
        entries: tuple[DeckCardEntry, ...] = getattr(self, _BOARD_FIELDS[board])
        return entries

    def with_board(self, board: Board, entries: tuple[DeckCardEntry, ...]) -> "DeckModel":
        """Return a copy of this deck with one board replaced."""
        return replace(self, **{_BOARD_FIELDS[board]: entries})

    def find_entry(self, board: Board, card_id: str) -> DeckCardEntry | None:
        for entry in self.board(board):
            if entry.card.id == card_id:
                return entry
        return None

    def count(self, board: Board) -> int:
        """Total quantity on a board."""
        return sum(entry.quantity for entry in self.board(board))

    def total_cards(self) -> int:
        """Total quantity across mainboard and sideboard."""
        return self.count(Board.MAIN) + self.count(Board.SIDE)
