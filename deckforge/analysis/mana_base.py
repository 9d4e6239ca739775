"""
Mana-Base Advisor.

Suggests how many of each basic land to add, in three steps:

1. Color demand: colored pips of every non-land mainboard card
   ({W} = 1 pip, {W/U} = 1/2 pip to each color, generic = nothing)
2. Land target: a coarse step function of the average mana value
3. Allocation: split the missing lands proportionally to demand, correct the
   rounding drift in a fixed W, U, B, R, G order, then subtract the basics
   already in the deck

The drift walk visits only colors with demand. A plain walk over all five
colors would hand surplus lands to a color the deck never casts (demand
{U, B, R} with 4 lands would get a Plains); here the surplus goes to U.

The result is a suggestion, never a legality constraint. For identical inputs
the output is identical: nothing depends on dict or set iteration order.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from deckforge.analysis.stats import average_mana_value, basic_land_counts, land_count
from deckforge.models.card import COLOR_ORDER
from deckforge.models.deck import DeckCardEntry
from deckforge.models.format_rules import FormatRules
from deckforge.parsers.card_data import parse_mana_symbols

logger = logging.getLogger(__name__)

# Upper bound on rounding-drift correction steps
MAX_CORRECTION_STEPS = 25

# Non-singleton land target: (average mana value upper bound, lands)
CONSTRUCTED_LAND_STEPS: tuple[tuple[float, int], ...] = (
    (2.2, 22),
    (2.6, 23),
    (3.0, 24),
    (3.4, 25),
)
CONSTRUCTED_MAX_LANDS = 26

SINGLETON_LOW_CURVE = 2.5
SINGLETON_HIGH_CURVE = 3.2
SINGLETON_LANDS_LOW = 35
SINGLETON_LANDS_DEFAULT = 36
SINGLETON_LANDS_HIGH = 37


@dataclass
class ManaBasePlan:
    """
    Every intermediate of a mana-base suggestion.

    Attributes:
        demand: Colored pip demand per color (fractional for hybrids)
        average_mana_value: Mainboard average mana value
        land_target: Suggested total land count
        current_lands: Lands already in the mainboard
        to_allocate: Lands still missing (never negative)
        allocation: Basics per color for the missing lands (sums to to_allocate)
        additions: Basics to add once existing basics are accounted for
    """

    demand: dict[str, float] = field(default_factory=dict)
    average_mana_value: float = 0.0
    land_target: int = 0
    current_lands: int = 0
    to_allocate: int = 0
    allocation: dict[str, int] = field(default_factory=dict)
    additions: dict[str, int] = field(default_factory=dict)


def _zero_colors() -> dict[str, int]:
    return dict.fromkeys(COLOR_ORDER, 0)


def symbol_pips(symbol: str) -> dict[str, float]:
    """
    Pips contributed by one mana symbol.

    "W" -> {W: 1}; "W/U" -> {W: 0.5, U: 0.5}; "2/W" and "W/P" -> {W: 1};
    generic, colorless and X symbols -> {}.
    """
    colors = [part for part in symbol.split("/") if part in COLOR_ORDER]
    if not colors:
        return {}
    share = 1 / len(colors)
    pips: dict[str, float] = {}
    for color in colors:
        pips[color] = pips.get(color, 0.0) + share
    return pips


def color_demand(mainboard: Sequence[DeckCardEntry]) -> dict[str, float]:
    """Quantity-weighted pip demand of the non-land mainboard cards."""
    demand = dict.fromkeys(COLOR_ORDER, 0.0)

    for entry in mainboard:
        if entry.card.is_land:
            continue
        for symbol in parse_mana_symbols(entry.card.mana_cost):
            for color, pips in symbol_pips(symbol).items():
                demand[color] += pips * entry.quantity

    return demand


def land_target(avg_mana_value: float, rules: FormatRules) -> int:
    """
    Heuristic total land count for a deck.

    Singleton formats run 35-37 lands; other formats step from 22 to 26
    as the curve gets heavier.
    """
    if rules.singleton:
        if avg_mana_value > SINGLETON_HIGH_CURVE:
            return SINGLETON_LANDS_HIGH
        if avg_mana_value < SINGLETON_LOW_CURVE:
            return SINGLETON_LANDS_LOW
        return SINGLETON_LANDS_DEFAULT

    for upper_bound, lands in CONSTRUCTED_LAND_STEPS:
        if avg_mana_value < upper_bound:
            return lands
    return CONSTRUCTED_MAX_LANDS


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def allocate_basics(demand: Mapping[str, float], to_allocate: int) -> dict[str, int]:
    """
    Split `to_allocate` lands across colors proportionally to demand.

    Shares are rounded half-up, then the drift between the rounded sum and
    `to_allocate` is corrected one land at a time, walking the colors that
    have demand in W, U, B, R, G order. No color goes below zero.

    Args:
        demand: Pip demand per color
        to_allocate: Number of lands to distribute

    Returns:
        Lands per color; sums to `to_allocate` whenever demand is positive
    """
    allocation = _zero_colors()
    total_demand = sum(max(0.0, demand.get(c, 0.0)) for c in COLOR_ORDER)

    if to_allocate <= 0 or total_demand <= 0:
        return allocation

    for color in COLOR_ORDER:
        share = max(0.0, demand.get(color, 0.0)) / total_demand
        allocation[color] = _round_half_up(share * to_allocate)

    walk = [c for c in COLOR_ORDER if demand.get(c, 0.0) > 0]
    diff = to_allocate - sum(allocation.values())
    step = 0

    while diff != 0 and step < MAX_CORRECTION_STEPS:
        color = walk[step % len(walk)]
        step += 1
        if diff > 0:
            allocation[color] += 1
            diff -= 1
        elif allocation[color] > 0:
            allocation[color] -= 1
            diff += 1

    if diff != 0:
        logger.warning(
            "Basic land allocation stopped after %d steps with drift %d", step, diff
        )

    return allocation


def plan_mana_base(
    mainboard: Sequence[DeckCardEntry],
    rules: FormatRules,
    existing_land_count: int | None = None,
    current_basic_counts: Mapping[str, int] | None = None,
) -> ManaBasePlan:
    """
    Compute a full mana-base suggestion.

    Args:
        mainboard: Mainboard entries
        rules: Format rules (the singleton flag drives the land target)
        existing_land_count: Lands already in the deck; counted from the
            mainboard when omitted
        current_basic_counts: Basics already in the deck per color; counted
            from the mainboard when omitted

    Returns:
        ManaBasePlan with demand, target, allocation and additions
    """
    if existing_land_count is None:
        existing_land_count = land_count(mainboard)
    if current_basic_counts is None:
        current_basic_counts = basic_land_counts(mainboard)

    demand = color_demand(mainboard)
    avg = average_mana_value(mainboard)
    target = land_target(avg, rules)
    to_allocate = max(0, target - existing_land_count)

    allocation = allocate_basics(demand, to_allocate)
    additions = {
        color: max(0, allocation[color] - current_basic_counts.get(color, 0))
        for color in COLOR_ORDER
    }

    return ManaBasePlan(
        demand=demand,
        average_mana_value=avg,
        land_target=target,
        current_lands=existing_land_count,
        to_allocate=to_allocate,
        allocation=allocation,
        additions=additions,
    )


def suggest_basics(
    mainboard: Sequence[DeckCardEntry],
    rules: FormatRules,
    existing_land_count: int | None = None,
    current_basic_counts: Mapping[str, int] | None = None,
) -> dict[str, int]:
    """How many more of each basic land to add, per color (all >= 0)."""
    return plan_mana_base(mainboard, rules, existing_land_count, current_basic_counts).additions
