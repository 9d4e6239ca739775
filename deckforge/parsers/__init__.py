from deckforge.parsers.card_data import (
    CardDataError,
    card_from_dict,
    normalize_colors,
    normalize_mana_value,
    parse_mana_symbols,
)

__all__ = [
    "CardDataError",
    "card_from_dict",
    "normalize_colors",
    "normalize_mana_value",
    "parse_mana_symbols",
]
