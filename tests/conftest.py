from collections.abc import Callable

import pytest

from deckforge.models import failure as failure_module
from deckforge.models.card import CardRef
from deckforge.models.deck import DeckCardEntry

CardFactory = Callable[..., CardRef]


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for CardRef with sensible defaults (a 2-mana colorless artifact)."""

    def _make(
        name: str,
        *,
        card_id: str | None = None,
        oracle_id: str | None = None,
        type_line: str = "Artifact",
        mana_cost: str | None = "{2}",
        mana_value: float = 2.0,
        colors: tuple[str, ...] = (),
        color_identity: tuple[str, ...] | None = None,
        printed_name: str | None = None,
    ) -> CardRef:
        return CardRef(
            id=card_id or name.lower().replace(" ", "-"),
            name=name,
            type_line=type_line,
            oracle_id=oracle_id or f"oracle-{name.lower().replace(' ', '-')}",
            mana_cost=mana_cost,
            mana_value=mana_value,
            colors=colors,
            color_identity=colors if color_identity is None else color_identity,
            printed_name=printed_name,
        )

    return _make


@pytest.fixture
def lightning_bolt(make_card: CardFactory) -> CardRef:
    return make_card(
        "Lightning Bolt",
        type_line="Instant",
        mana_cost="{R}",
        mana_value=1,
        colors=("R",),
    )


@pytest.fixture
def plains(make_card: CardFactory) -> CardRef:
    return make_card(
        "Plains",
        type_line="Basic Land — Plains",
        mana_cost=None,
        mana_value=0,
        color_identity=("W",),
    )


@pytest.fixture
def mountain(make_card: CardFactory) -> CardRef:
    return make_card(
        "Mountain",
        type_line="Basic Land — Mountain",
        mana_cost=None,
        mana_value=0,
        color_identity=("R",),
    )


@pytest.fixture
def filler_entries(make_card: CardFactory) -> Callable[[int], list[DeckCardEntry]]:
    """Build `count` distinct single-copy nonland cards."""

    def _filler(count: int) -> list[DeckCardEntry]:
        return [
            DeckCardEntry(card=make_card(f"Filler {i}"), quantity=1) for i in range(count)
        ]

    return _filler


@pytest.fixture
def sample_card_record() -> dict[str, object]:
    """A card record as stored by the collection database (camelCase, JSON colors)."""
    return {
        "id": "c0ffee-1",
        "oracleId": "oracle-azorius-charm",
        "name": "Azorius Charm",
        "nameFr": "Charme d'Azorius",
        "typeLine": "Instant",
        "manaCost": "{W}{U}",
        "cmc": 2,
        "colorIdentity": '["W", "U"]',
    }
