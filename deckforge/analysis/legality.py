"""
Legality Validator.

validate(deck, rules) evaluates four independent rules and collects every
violation (no short-circuit):

1. Mainboard minimum size (mainboard only)
2. Sideboard maximum size (sideboard only, skipped when unbounded)
3. Copy limit (mainboard + sideboard, grouped by oracle identity,
   basic lands exempt)
4. Banlist (mainboard, by card name, case-insensitive)

An invalid deck is a normal outcome, not an error: validate never raises.
Issue order is deterministic: rule 1, rule 2, copy-limit issues by descending
count (then name), then bans in mainboard order.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from deckforge.analysis.stats import board_count
from deckforge.models.deck import Board, DeckModel
from deckforge.models.format_rules import FormatRules

logger = logging.getLogger(__name__)


class LegalityRule(str, Enum):
    """The rule a violation belongs to."""

    MAINBOARD_SIZE = "mainboard_size"
    SIDEBOARD_SIZE = "sideboard_size"
    COPY_LIMIT = "copy_limit"
    BANNED = "banned"


@dataclass(frozen=True, slots=True)
class RuleViolation:
    """
    One itemized legality issue.

    Attributes:
        rule: Which rule was violated
        message: Human-readable issue text
        card_name: Offending card, for copy-limit and ban issues
        observed: Observed count (cards on board, or copies)
        limit: The bound that was crossed
    """

    rule: LegalityRule
    message: str
    card_name: str | None = None
    observed: int | None = None
    limit: int | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a deck against a format."""

    format: str
    violations: tuple[RuleViolation, ...] = ()
    main_count: int = 0
    side_count: int = 0

    @property
    def valid(self) -> bool:
        return not self.violations

    @property
    def issues(self) -> list[str]:
        """Issue messages, one per violation, in deterministic order."""
        return [v.message for v in self.violations]


def _check_mainboard_size(main_count: int, rules: FormatRules) -> list[RuleViolation]:
    if main_count >= rules.min_mainboard:
        return []
    return [
        RuleViolation(
            rule=LegalityRule.MAINBOARD_SIZE,
            message=f"Mainboard: {main_count}/{rules.min_mainboard} cards minimum",
            observed=main_count,
            limit=rules.min_mainboard,
        )
    ]


def _check_sideboard_size(side_count: int, rules: FormatRules) -> list[RuleViolation]:
    # None means unbounded; 0 is a real limit (no sideboard allowed)
    if rules.sideboard_limit is None or side_count <= rules.sideboard_limit:
        return []
    return [
        RuleViolation(
            rule=LegalityRule.SIDEBOARD_SIZE,
            message=f"Sideboard: {side_count}/{rules.sideboard_limit} cards maximum",
            observed=side_count,
            limit=rules.sideboard_limit,
        )
    ]


def _check_copy_limit(deck: DeckModel, rules: FormatRules) -> list[RuleViolation]:
    """Group mainboard + sideboard by oracle identity and flag groups over the limit."""
    totals: dict[str, int] = {}
    names: dict[str, str] = {}

    for entry in (*deck.mainboard, *deck.sideboard):
        card = entry.card
        if card.is_basic_land:
            continue
        key = card.identity_key
        totals[key] = totals.get(key, 0) + entry.quantity
        names.setdefault(key, card.display_name)

    over_limit = [
        (names[key], total) for key, total in totals.items() if total > rules.copy_limit
    ]
    over_limit.sort(key=lambda item: (-item[1], item[0]))

    return [
        RuleViolation(
            rule=LegalityRule.COPY_LIMIT,
            message=f"Too many copies: {name} ({total}/{rules.copy_limit})",
            card_name=name,
            observed=total,
            limit=rules.copy_limit,
        )
        for name, total in over_limit
    ]


def _check_banlist(deck: DeckModel, rules: FormatRules) -> list[RuleViolation]:
    if not rules.banned:
        return []

    violations: list[RuleViolation] = []
    reported: set[str] = set()

    for entry in deck.mainboard:
        hit = entry.card.matches_name(rules.banned)
        if hit is None or hit.lower() in reported:
            continue
        reported.add(hit.lower())
        violations.append(
            RuleViolation(
                rule=LegalityRule.BANNED,
                message=f"Banned: {entry.card.display_name}",
                card_name=entry.card.display_name,
            )
        )

    return violations


def validate(deck: DeckModel, rules: FormatRules) -> ValidationResult:
    """
    Validate a deck against format rules.

    Args:
        deck: The deck to validate (not modified)
        rules: Rules of the format to validate against

    Returns:
        ValidationResult listing every violation found
    """
    main_count = board_count(deck.board(Board.MAIN))
    side_count = board_count(deck.board(Board.SIDE))

    violations = [
        *_check_mainboard_size(main_count, rules),
        *_check_sideboard_size(side_count, rules),
        *_check_copy_limit(deck, rules),
        *_check_banlist(deck, rules),
    ]

    logger.debug(
        "Validated %s deck: %d main, %d side, %d issue(s)",
        rules.name,
        main_count,
        side_count,
        len(violations),
    )

    return ValidationResult(
        format=rules.name,
        violations=tuple(violations),
        main_count=main_count,
        side_count=side_count,
    )
