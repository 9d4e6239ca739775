from deckforge.models.card import (
    BASIC_LAND_TO_COLOR,
    COLOR_ORDER,
    COLOR_TO_BASIC_LAND,
    CardRef,
)
from deckforge.models.deck import Board, DeckCardEntry, DeckModel
from deckforge.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    InvalidQuantityError,
    InvalidTransferError,
    KnownError,
    OutcomeType,
    UnknownFormatError,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)
from deckforge.models.format_rules import (
    DEFAULT_FORMAT_RULES,
    FORMAT_RULES,
    FORMAT_RULES_VERSION,
    DeckFormat,
    FormatRules,
    find_format_rules,
    get_format_rules,
    parse_format,
    require_format_rules,
)

__all__ = [
    "ApiResponse",
    "BASIC_LAND_TO_COLOR",
    "Board",
    "COLOR_ORDER",
    "COLOR_TO_BASIC_LAND",
    "CardNotFoundError",
    "CardRef",
    "DEFAULT_FORMAT_RULES",
    "DeckCardEntry",
    "DeckFormat",
    "DeckModel",
    "FORMAT_RULES",
    "FORMAT_RULES_VERSION",
    "FailureDetail",
    "FailureKind",
    "FormatRules",
    "InvalidQuantityError",
    "InvalidTransferError",
    "KnownError",
    "OutcomeType",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "UnknownFormatError",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "find_format_rules",
    "get_format_rules",
    "is_finalized",
    "parse_format",
    "require_format_rules",
]
