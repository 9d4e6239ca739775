"""Non-binding deck construction hints. These never affect legality."""

from deckforge.analysis.mana_base import land_target
from deckforge.analysis.stats import average_mana_value, board_count, land_count, mana_curve
from deckforge.models.deck import Board, DeckModel
from deckforge.models.format_rules import FormatRules

HEAVY_CURVE_THRESHOLD = 3.2
MIN_CHEAP_SPELLS = 8


def deck_advice(deck: DeckModel, rules: FormatRules) -> list[str]:
    """
    Construction hints for the mainboard.

    - Too few lands for the curve (against the mana-base land target)
    - Heavy curve (average mana value above 3.2)
    - Few plays at mana value 0-1, once the mainboard reaches the format minimum
    """
    mainboard = deck.board(Board.MAIN)
    hints: list[str] = []

    avg = average_mana_value(mainboard)
    lands = land_count(mainboard)
    target = land_target(avg, rules)

    if lands < target:
        hints.append(f"Too few lands: {lands}/{target} recommended.")

    if avg > HEAVY_CURVE_THRESHOLD:
        hints.append(f"Heavy curve (average mana value {avg:.2f}): add cheaper spells.")

    curve = mana_curve(mainboard)
    cheap = curve[0] + curve[1]
    if cheap < MIN_CHEAP_SPELLS and board_count(mainboard) >= rules.min_mainboard:
        hints.append(f"Only {cheap} cards at mana value 0-1: consider a faster curve.")

    return hints
