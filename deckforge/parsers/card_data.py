"""
Card record normalization.

Card records reach the engine from several sources (Scryfall bulk data, the
collection database, client payloads) and in several shapes:

- snake_case or camelCase keys ("type_line" / "typeLine")
- colors as a list, a JSON-encoded string, a comma list, or compact letters
- mana value as a number, a numeric string, or missing

This module is the ONLY place those shapes are interpreted. Everything
downstream works on CardRef and never re-parses raw fields.
"""

import json
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from deckforge.models.card import COLOR_ORDER, CardRef

_MANA_SYMBOL_PATTERN = re.compile(r"\{([^}]+)\}")
_COMPACT_NOISE_PATTERN = re.compile(r"[{}\s]")


class CardDataError(ValueError):
    """Raised when a card record lacks the fields needed to build a CardRef."""


def normalize_colors(raw: Any) -> tuple[str, ...]:
    """
    Normalize a color field to a deduplicated tuple in WUBRG order.

    Fallback order for strings:
    1. JSON array (e.g., '["W", "U"]') or JSON string (e.g., '"WU"')
    2. Comma-separated letters (e.g., "W, U")
    3. Compact letters (e.g., "WU", "{W}{U}"), only when the string holds
       nothing but color letters, braces and spaces

    In lists and comma lists, anything that is not a W/U/B/R/G letter is
    dropped. A string that is neither yields no colors.

    Args:
        raw: List/tuple of letters, string in any supported shape, or None

    Returns:
        Tuple of color letters in WUBRG order
    """
    letters: list[str] = []

    if raw is None:
        return ()

    if isinstance(raw, str):
        letters = _colors_from_string(raw)
    elif isinstance(raw, Iterable):
        letters = [str(c).strip().upper() for c in raw]

    present = set(letters)
    return tuple(c for c in COLOR_ORDER if c in present)


def _colors_from_string(raw: str) -> list[str]:
    source = raw.strip()
    if not source:
        return []

    try:
        parsed = json.loads(source)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, list):
        return [str(c).strip().upper() for c in parsed]
    if isinstance(parsed, str):
        source = parsed

    comma_parts = [p.strip().upper() for p in source.split(",")]
    if len(comma_parts) > 1:
        return comma_parts

    # Compact form only when every character is a color letter, so words
    # like "Colorless" or "blue" yield no colors.
    compact = _COMPACT_NOISE_PATTERN.sub("", source).upper()
    if not all(c in COLOR_ORDER for c in compact):
        return []
    return list(compact)


def normalize_mana_value(raw: Any) -> float:
    """Coerce a mana value to a finite, non-negative float (0.0 otherwise)."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def parse_mana_symbols(mana_cost: str | None) -> tuple[str, ...]:
    """
    Split a brace-notation cost into its symbols.

    "{2}{W/U}{G}" -> ("2", "W/U", "G")
    """
    if not mana_cost:
        return ()
    return tuple(symbol.strip().upper() for symbol in _MANA_SYMBOL_PATTERN.findall(mana_cost))


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def card_from_dict(data: Mapping[str, Any]) -> CardRef:
    """
    Build a CardRef from a loosely-shaped card record.

    Colors fall back to color identity when the record has no explicit colors,
    matching how the collection database stores single-faced cards.

    Args:
        data: Card record with snake_case or camelCase keys

    Returns:
        Normalized CardRef

    Raises:
        CardDataError: If the record has neither an id nor a name
    """
    card_id = _first(data, "id", "card_id", "cardId")
    name = _first(data, "name")

    if card_id is None and name is None:
        raise CardDataError("Card record needs at least an 'id' or a 'name'")

    color_identity = normalize_colors(_first(data, "color_identity", "colorIdentity"))
    raw_colors = _first(data, "colors")
    colors = normalize_colors(raw_colors) if raw_colors is not None else color_identity

    mana_cost = _first(data, "mana_cost", "manaCost")

    return CardRef(
        id=str(card_id if card_id is not None else name),
        name=str(name if name is not None else card_id),
        type_line=str(_first(data, "type_line", "typeLine") or ""),
        oracle_id=_first(data, "oracle_id", "oracleId"),
        mana_cost=str(mana_cost) if mana_cost is not None else None,
        mana_value=normalize_mana_value(_first(data, "mana_value", "cmc", "manaValue")),
        colors=colors,
        color_identity=color_identity,
        printed_name=_first(data, "printed_name", "printedName", "name_fr", "nameFr"),
    )
