"""
Format Rule Table: One Versioned Source of Truth for Deck Construction Rules.

INVARIANT: Every consumer (legality validator, mana-base advisor, API) reads
format constants from FORMAT_RULES. No other module hardcodes a deck minimum,
sideboard limit, copy limit or banlist.

Copy limit vs. singleton:
The numeric copy_limit is authoritative for legality. The singleton flag is
advisory and only steers the mana-base land target. The table keeps the two
consistent (singleton formats have copy_limit == 1), but validation never
derives one from the other.

Sideboard limit:
- None  -> unbounded, the sideboard check is skipped
- 0     -> no sideboard allowed
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from deckforge.models.failure import UnknownFormatError

logger = logging.getLogger(__name__)

# Bump whenever a minimum, limit or banlist changes
FORMAT_RULES_VERSION = "2025-01"


class DeckFormat(str, Enum):
    """Supported deck formats."""

    STANDARD = "standard"
    PIONEER = "pioneer"
    MODERN = "modern"
    LEGACY = "legacy"
    VINTAGE = "vintage"
    HISTORIC = "historic"
    COMMANDER = "commander"
    ALCHEMY = "alchemy"
    BRAWL = "brawl"
    PAUPER = "pauper"
    CASUAL = "casual"


@dataclass(frozen=True, slots=True)
class FormatRules:
    """
    Construction rules for one format.

    Attributes:
        name: Format name
        min_mainboard: Minimum number of mainboard cards
        sideboard_limit: Maximum sideboard size, None when unbounded
        copy_limit: Maximum copies per oracle card (basic lands exempt)
        singleton: Commander-style format flag (advisory)
        banned: Lowercased names of banned cards
    """

    name: str
    min_mainboard: int = 60
    sideboard_limit: int | None = None
    copy_limit: int = 4
    singleton: bool = False
    banned: frozenset[str] = field(default_factory=frozenset)

    def is_banned(self, card_name: str) -> bool:
        return card_name.lower() in self.banned


def _rules(
    deck_format: DeckFormat,
    min_mainboard: int = 60,
    sideboard_limit: int | None = None,
    copy_limit: int = 4,
    singleton: bool = False,
    banned: tuple[str, ...] = (),
) -> FormatRules:
    return FormatRules(
        name=deck_format.value,
        min_mainboard=min_mainboard,
        sideboard_limit=sideboard_limit,
        copy_limit=copy_limit,
        singleton=singleton,
        banned=frozenset(name.lower() for name in banned),
    )


# Banlists are published by card name; keep them empty until populated
# deliberately so nothing is blocked by accident.
FORMAT_RULES: dict[DeckFormat, FormatRules] = {
    DeckFormat.STANDARD: _rules(DeckFormat.STANDARD, sideboard_limit=15),
    DeckFormat.PIONEER: _rules(DeckFormat.PIONEER, sideboard_limit=15),
    DeckFormat.MODERN: _rules(DeckFormat.MODERN, sideboard_limit=15),
    DeckFormat.LEGACY: _rules(DeckFormat.LEGACY, sideboard_limit=15),
    DeckFormat.VINTAGE: _rules(DeckFormat.VINTAGE, sideboard_limit=15),
    DeckFormat.HISTORIC: _rules(DeckFormat.HISTORIC, sideboard_limit=15),
    DeckFormat.COMMANDER: _rules(
        DeckFormat.COMMANDER, min_mainboard=99, copy_limit=1, singleton=True
    ),
    DeckFormat.ALCHEMY: _rules(DeckFormat.ALCHEMY),
    DeckFormat.BRAWL: _rules(DeckFormat.BRAWL),
    DeckFormat.PAUPER: _rules(DeckFormat.PAUPER),
    DeckFormat.CASUAL: _rules(DeckFormat.CASUAL),
}

# Used when a deck carries a format tag missing from the table
DEFAULT_FORMAT_RULES = FormatRules(name="default")


def parse_format(format_name: str) -> DeckFormat | None:
    """Map a format tag (any case, surrounding whitespace ignored) to DeckFormat."""
    try:
        return DeckFormat(format_name.strip().lower())
    except ValueError:
        return None


def find_format_rules(format_name: str) -> FormatRules | None:
    deck_format = parse_format(format_name)
    if deck_format is None:
        return None
    return FORMAT_RULES[deck_format]


def get_format_rules(format_name: str) -> FormatRules:
    """
    Look up rules for a format, falling back to DEFAULT_FORMAT_RULES.

    An unknown format is a data issue, not a crash: it is logged and the
    deterministic default (60 cards, 4 copies, no sideboard limit) is used.
    """
    rules = find_format_rules(format_name)
    if rules is None:
        logger.warning(
            "Unknown format %r (rules version %s), using default rules",
            format_name,
            FORMAT_RULES_VERSION,
        )
        return DEFAULT_FORMAT_RULES
    return rules


def require_format_rules(format_name: str) -> FormatRules:
    """
    Look up rules for a format, failing on unknown formats.

    Raises:
        UnknownFormatError: If the format is not in the rule table
    """
    rules = find_format_rules(format_name)
    if rules is None:
        raise UnknownFormatError(format_name, [f.value for f in DeckFormat])
    return rules
