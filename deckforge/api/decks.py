"""
Deck API endpoints.

Stateless endpoints over a deck carried in the request body: validation,
analytics, mana-base suggestion, and board edits. Nothing is persisted; the
caller stores the returned deck (and may cache the validation result with its
`validated_at` timestamp).
"""

import logging
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from deckforge.analysis import (
    compute_stats,
    deck_advice,
    plan_mana_base,
    validate,
)
from deckforge.models.card import COLOR_TO_BASIC_LAND, CardRef
from deckforge.models.deck import Board, DeckCardEntry, DeckModel
from deckforge.models.failure import ApiResponse, FailureKind, KnownError, create_success
from deckforge.models.format_rules import (
    FORMAT_RULES_VERSION,
    find_format_rules,
    get_format_rules,
)
from deckforge.parsers.card_data import CardDataError, card_from_dict
from deckforge.services.deck_editor import (
    DeckCardOperation,
    add_card,
    apply_operations,
    remove_card,
    set_quantity,
    transfer,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


# =============================================================================
# REQUEST MODELS
# =============================================================================


class DeckEntryPayload(BaseModel):
    """A card record with its quantity. Quantities <= 0 are dropped."""

    card: dict[str, Any] = Field(
        ...,
        description="Card record (snake_case or camelCase keys)",
    )
    quantity: int = 1


class DeckPayload(BaseModel):
    """A deck as sent by the caller."""

    format: str = "standard"
    mainboard: list[DeckEntryPayload] = Field(default_factory=list)
    sideboard: list[DeckEntryPayload] = Field(default_factory=list)
    maybeboard: list[DeckEntryPayload] = Field(default_factory=list)

    def to_model(self) -> DeckModel:
        return DeckModel.from_entries(
            self.format,
            mainboard=[_to_entry(e) for e in self.mainboard],
            sideboard=[_to_entry(e) for e in self.sideboard],
            maybeboard=[_to_entry(e) for e in self.maybeboard],
        )


class ManaBaseRequest(BaseModel):
    deck: DeckPayload
    existing_land_count: int | None = Field(default=None, ge=0)
    current_basic_counts: dict[str, Annotated[int, Field(ge=0)]] | None = None


class TransferRequest(BaseModel):
    deck: DeckPayload
    card_id: str
    from_board: Board
    to_board: Board
    quantity: int | None = Field(
        default=None,
        description="Copies to move; the whole entry when omitted",
    )


class AddCardRequest(BaseModel):
    deck: DeckPayload
    board: Board = Board.MAIN
    card: dict[str, Any]
    quantity: int = 1


class SetQuantityRequest(BaseModel):
    deck: DeckPayload
    board: Board = Board.MAIN
    card_id: str
    quantity: int


class RemoveCardRequest(BaseModel):
    deck: DeckPayload
    board: Board = Board.MAIN
    card_id: str


class DeckOperationPayload(BaseModel):
    card: dict[str, Any]
    quantity: int
    board: Board = Board.MAIN


class BulkUpsertRequest(BaseModel):
    deck: DeckPayload
    operations: list[DeckOperationPayload] = Field(default_factory=list)


# =============================================================================
# RESPONSE MODELS
# =============================================================================


class DeckEntryData(BaseModel):
    card: dict[str, Any]
    quantity: int


class DeckData(BaseModel):
    """Response model for an edited deck."""

    format: str
    mainboard: list[DeckEntryData]
    sideboard: list[DeckEntryData]
    maybeboard: list[DeckEntryData]
    main_count: int
    side_count: int


class ViolationData(BaseModel):
    rule: str
    message: str
    card_name: str | None = None
    observed: int | None = None
    limit: int | None = None


class ValidationData(BaseModel):
    """Response model for a validation run."""

    format: str
    format_known: bool
    rules_version: str
    valid: bool
    issues: list[str]
    violations: list[ViolationData]
    main_count: int
    side_count: int
    validated_at: datetime


class StatsData(BaseModel):
    mana_curve: list[int]
    color_distribution: dict[str, int]
    type_distribution: dict[str, int]
    average_mana_value: float
    total_cards: int
    land_count: int
    colors: list[str]


class ManaBaseData(BaseModel):
    demand: dict[str, float]
    average_mana_value: float
    land_target: int
    current_lands: int
    to_allocate: int
    allocation: dict[str, int]
    additions: dict[str, int]
    basic_land_names: dict[str, str] = Field(default_factory=lambda: dict(COLOR_TO_BASIC_LAND))


class AdviceData(BaseModel):
    format: str
    hints: list[str]


# =============================================================================
# CONVERSION HELPERS
# =============================================================================


def _to_card(record: dict[str, Any]) -> CardRef:
    try:
        return card_from_dict(record)
    except CardDataError as e:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid card record.",
            detail=str(e),
            status_code=422,
        ) from e


def _to_entry(payload: DeckEntryPayload) -> DeckCardEntry:
    return DeckCardEntry(card=_to_card(payload.card), quantity=payload.quantity)


def _deck_data(deck: DeckModel) -> DeckData:
    def entries(board: Board) -> list[DeckEntryData]:
        return [
            DeckEntryData(card=asdict(entry.card), quantity=entry.quantity)
            for entry in deck.board(board)
        ]

    return DeckData(
        format=deck.format,
        mainboard=entries(Board.MAIN),
        sideboard=entries(Board.SIDE),
        maybeboard=entries(Board.MAYBE),
        main_count=deck.count(Board.MAIN),
        side_count=deck.count(Board.SIDE),
    )


# =============================================================================
# ANALYSIS ENDPOINTS
# =============================================================================


@router.post("/validate", response_model=ApiResponse[ValidationData])
async def validate_deck(payload: DeckPayload) -> ApiResponse[Any]:
    """
    Validate a deck against its format.

    An invalid deck is a successful response whose data lists the issues.
    Unknown formats are validated with the default rules and flagged.
    """
    deck = payload.to_model()
    rules = get_format_rules(deck.format)
    result = validate(deck, rules)

    return create_success(
        ValidationData(
            format=deck.format,
            format_known=find_format_rules(deck.format) is not None,
            rules_version=FORMAT_RULES_VERSION,
            valid=result.valid,
            issues=result.issues,
            violations=[
                ViolationData(
                    rule=v.rule.value,
                    message=v.message,
                    card_name=v.card_name,
                    observed=v.observed,
                    limit=v.limit,
                )
                for v in result.violations
            ],
            main_count=result.main_count,
            side_count=result.side_count,
            validated_at=datetime.now(UTC),
        )
    )


@router.post("/stats", response_model=ApiResponse[StatsData])
async def deck_stats(payload: DeckPayload) -> ApiResponse[Any]:
    """Mainboard analytics for charts."""
    stats = compute_stats(payload.to_model().board(Board.MAIN))
    return create_success(StatsData(**asdict(stats)))


@router.post("/mana-base", response_model=ApiResponse[ManaBaseData])
async def suggest_mana_base(request: ManaBaseRequest) -> ApiResponse[Any]:
    """
    Suggest basic lands to add.

    The caller applies a suggestion by adding each color's basic land with
    the returned count.
    """
    deck = request.deck.to_model()
    plan = plan_mana_base(
        deck.board(Board.MAIN),
        get_format_rules(deck.format),
        existing_land_count=request.existing_land_count,
        current_basic_counts=request.current_basic_counts,
    )
    return create_success(ManaBaseData(**asdict(plan)))


@router.post("/advice", response_model=ApiResponse[AdviceData])
async def advise_deck(payload: DeckPayload) -> ApiResponse[Any]:
    deck = payload.to_model()
    hints = deck_advice(deck, get_format_rules(deck.format))
    return create_success(AdviceData(format=deck.format, hints=hints))


# =============================================================================
# EDIT ENDPOINTS
# =============================================================================


@router.post("/transfer", response_model=ApiResponse[DeckData])
async def transfer_card(request: TransferRequest) -> ApiResponse[Any]:
    """Move a card between boards. The deck is unchanged on failure."""
    deck = transfer(
        request.deck.to_model(),
        request.card_id,
        request.from_board,
        request.to_board,
        request.quantity,
    )
    logger.info(
        "Transferred %s from %s to %s",
        request.card_id,
        request.from_board.value,
        request.to_board.value,
    )
    return create_success(_deck_data(deck))


@router.post("/cards", response_model=ApiResponse[DeckData])
async def add_deck_card(request: AddCardRequest) -> ApiResponse[Any]:
    card = _to_card(request.card)
    deck = add_card(request.deck.to_model(), request.board, card, request.quantity)
    logger.info("Added %d x %s to %s", request.quantity, card.id, request.board.value)
    return create_success(_deck_data(deck))


@router.put("/cards", response_model=ApiResponse[DeckData])
async def set_deck_card_quantity(request: SetQuantityRequest) -> ApiResponse[Any]:
    deck = set_quantity(
        request.deck.to_model(), request.board, request.card_id, request.quantity
    )
    logger.info(
        "Set %s to %d in %s", request.card_id, request.quantity, request.board.value
    )
    return create_success(_deck_data(deck))


@router.post("/cards/remove", response_model=ApiResponse[DeckData])
async def remove_deck_card(request: RemoveCardRequest) -> ApiResponse[Any]:
    deck = remove_card(request.deck.to_model(), request.board, request.card_id)
    logger.info("Removed %s from %s", request.card_id, request.board.value)
    return create_success(_deck_data(deck))


@router.post("/cards/bulk", response_model=ApiResponse[DeckData])
async def bulk_upsert_cards(request: BulkUpsertRequest) -> ApiResponse[Any]:
    """Apply several quantity upserts at once (quantity <= 0 removes)."""
    operations = [
        DeckCardOperation(card=_to_card(op.card), quantity=op.quantity, board=op.board)
        for op in request.operations
    ]
    deck = apply_operations(request.deck.to_model(), operations)
    logger.info("Applied %d deck operation(s)", len(operations))
    return create_success(_deck_data(deck))
