from deckforge.analysis.advice import deck_advice
from deckforge.analysis.legality import LegalityRule, RuleViolation, ValidationResult, validate
from deckforge.analysis.mana_base import (
    ManaBasePlan,
    allocate_basics,
    color_demand,
    land_target,
    plan_mana_base,
    suggest_basics,
)
from deckforge.analysis.stats import (
    DeckStats,
    average_mana_value,
    basic_land_counts,
    board_count,
    color_distribution,
    compute_stats,
    deck_colors,
    land_count,
    mana_curve,
    type_distribution,
)

__all__ = [
    "DeckStats",
    "LegalityRule",
    "ManaBasePlan",
    "RuleViolation",
    "ValidationResult",
    "allocate_basics",
    "average_mana_value",
    "basic_land_counts",
    "board_count",
    "color_demand",
    "color_distribution",
    "compute_stats",
    "deck_advice",
    "deck_colors",
    "land_count",
    "land_target",
    "mana_curve",
    "plan_mana_base",
    "suggest_basics",
    "type_distribution",
    "validate",
]
