"""
DeckForge services.

Deck editing operations. Analytics and legality live in deckforge.analysis.
"""

from deckforge.services.deck_editor import (
    DeckCardOperation,
    add_card,
    apply_operations,
    remove_card,
    set_quantity,
    transfer,
)

__all__ = [
    "DeckCardOperation",
    "add_card",
    "apply_operations",
    "remove_card",
    "set_quantity",
    "transfer",
]
