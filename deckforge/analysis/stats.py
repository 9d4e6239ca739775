"""
Deck analytics.

Pure functions over the mainboard. Sideboard and maybeboard never contribute.
All counts are quantity-weighted.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from deckforge.models.card import COLOR_ORDER
from deckforge.models.deck import DeckCardEntry

# Mana curve buckets 0..6, bucket 7 aggregates mana value 7+
CURVE_BUCKETS = 8

# Distribution-only bucket for non-land cards without W/U/B/R/G
COLORLESS = "C"

# Checked in order; the first substring found in the type line wins,
# so an "Artifact Creature" is a Creature.
TYPE_PRIORITY: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Creature", ("creature",)),
    ("Instant", ("instant",)),
    ("Sorcery", ("sorcery",)),
    ("Enchantment", ("enchantment",)),
    ("Artifact", ("artifact",)),
    ("Planeswalker", ("planeswalker",)),
    ("Land", ("land", "terrain")),
)
OTHER_TYPE = "Other"


@dataclass
class DeckStats:
    """Chart-ready analytics for a mainboard."""

    mana_curve: list[int] = field(default_factory=lambda: [0] * CURVE_BUCKETS)
    color_distribution: dict[str, int] = field(default_factory=dict)
    type_distribution: dict[str, int] = field(default_factory=dict)
    average_mana_value: float = 0.0
    total_cards: int = 0
    land_count: int = 0
    colors: list[str] = field(default_factory=list)


def board_count(entries: Sequence[DeckCardEntry]) -> int:
    """Total quantity on a board."""
    return sum(entry.quantity for entry in entries)


def _curve_bucket(mana_value: float) -> int:
    """Convert a mana value to its curve bucket (0-7, where 7 = 7+)."""
    if not math.isfinite(mana_value) or mana_value <= 0:
        return 0
    return min(int(math.floor(mana_value)), CURVE_BUCKETS - 1)


def mana_curve(mainboard: Sequence[DeckCardEntry]) -> list[int]:
    curve = [0] * CURVE_BUCKETS
    for entry in mainboard:
        curve[_curve_bucket(entry.card.mana_value)] += entry.quantity
    return curve


def color_distribution(mainboard: Sequence[DeckCardEntry]) -> dict[str, int]:
    """
    Count spell color intensity.

    Lands are skipped entirely: a dual land's color identity says nothing about
    how many spells of each color the deck casts. A multicolor card counts once
    for each of its colors; a colorless spell counts toward "C".
    """
    distribution = dict.fromkeys((*COLOR_ORDER, COLORLESS), 0)

    for entry in mainboard:
        card = entry.card
        if card.is_land:
            continue

        card_colors = [c for c in card.colors if c in COLOR_ORDER]
        if not card_colors:
            distribution[COLORLESS] += entry.quantity
            continue

        for color in card_colors:
            distribution[color] += entry.quantity

    return distribution


def classify_type(type_line: str) -> str:
    lowered = type_line.lower()
    for type_name, markers in TYPE_PRIORITY:
        if any(marker in lowered for marker in markers):
            return type_name
    return OTHER_TYPE


def type_distribution(mainboard: Sequence[DeckCardEntry]) -> dict[str, int]:
    distribution = {type_name: 0 for type_name, _ in TYPE_PRIORITY}
    distribution[OTHER_TYPE] = 0

    for entry in mainboard:
        distribution[classify_type(entry.card.type_line)] += entry.quantity

    return distribution


def average_mana_value(mainboard: Sequence[DeckCardEntry]) -> float:
    """Quantity-weighted average mana value; 0.0 for an empty mainboard."""
    total_cards = board_count(mainboard)
    if total_cards <= 0:
        return 0.0

    total_mana_value = sum(entry.card.mana_value * entry.quantity for entry in mainboard)
    return total_mana_value / total_cards


def land_count(mainboard: Sequence[DeckCardEntry]) -> int:
    """Number of land cards (basic or not) in the mainboard."""
    return sum(entry.quantity for entry in mainboard if entry.card.is_land)


def basic_land_counts(mainboard: Sequence[DeckCardEntry]) -> dict[str, int]:
    """Count basic lands already in the mainboard, by the color they produce."""
    counts = dict.fromkeys(COLOR_ORDER, 0)
    for entry in mainboard:
        color = entry.card.basic_land_color
        if color is not None:
            counts[color] += entry.quantity
    return counts


def deck_colors(mainboard: Sequence[DeckCardEntry]) -> list[str]:
    """The deck's colors: union of mainboard color identities, in WUBRG order."""
    present: set[str] = set()
    for entry in mainboard:
        present.update(entry.card.color_identity)
    return [c for c in COLOR_ORDER if c in present]


def compute_stats(mainboard: Sequence[DeckCardEntry]) -> DeckStats:
    """
    Compute all mainboard analytics in one pass of calls.

    Args:
        mainboard: Mainboard entries

    Returns:
        DeckStats with curve, color and type distributions, and averages
    """
    return DeckStats(
        mana_curve=mana_curve(mainboard),
        color_distribution=color_distribution(mainboard),
        type_distribution=type_distribution(mainboard),
        average_mana_value=average_mana_value(mainboard),
        total_cards=board_count(mainboard),
        land_count=land_count(mainboard),
        colors=deck_colors(mainboard),
    )
