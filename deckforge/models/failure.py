"""
Response envelope and engine errors.

Every HTTP response body is an ApiResponse carrying one of three outcomes:

- success: the operation ran. A deck that breaks format rules is still a
  success; the validation result is the data.
- known_failure: the engine can say exactly what was wrong with the request
  (card missing from a board, same-board transfer, unknown format, bad
  quantity, malformed card record).
- unknown_failure: anything else. The message is fixed and never echoes the
  exception text.

No raw 500 reaches a client. Responses are built through finalize_response(),
which checks that outcome, data and failure agree.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Why an operation did not succeed."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UNKNOWN_FORMAT = "unknown_format"
    INVALID_TRANSFER = "invalid_transfer"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """What went wrong, in terms a deck builder can act on."""

    kind: FailureKind
    message: str = Field(..., description="Explanation shown to the user")
    detail: str | None = Field(default=None, description="Extra context, e.g. known formats")
    suggestion: str | None = Field(default=None, description="What to try next")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every deck and format endpoint."""

    outcome: OutcomeType
    data: T | None = None
    failure: FailureDetail | None = None

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind, message=message, detail=detail, suggestion=suggestion
            ),
        )


# -----------------------------------------------------------------------------
# Engine errors
#
# Raised by deck editing and format lookup for local, recoverable conditions.
# The API layer turns each one into a known_failure with its status code.
# -----------------------------------------------------------------------------


class KnownError(Exception):
    """An error the engine can explain to the caller."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code

    def to_response(self) -> ApiResponse[Any]:
        return finalize_response(
            ApiResponse.known_failure(
                kind=self.kind,
                message=self.message,
                detail=self.detail,
                suggestion=self.suggestion,
            )
        )


class CardNotFoundError(KnownError):
    """A referenced card has no entry on the given board."""

    def __init__(self, card_id: str, board: str):
        self.card_id = card_id
        self.board = board
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card '{card_id}' is not in the {board} board.",
            suggestion="Refresh the deck and try again.",
            status_code=404,
        )


class InvalidTransferError(KnownError):
    """A board transfer that cannot be applied (same board, bad quantity)."""

    def __init__(self, reason: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_TRANSFER,
            message=reason,
            detail=detail,
            suggestion="Pick a different destination board or a smaller quantity.",
        )


class InvalidQuantityError(KnownError):
    def __init__(self, quantity: int, reason: str):
        self.quantity = quantity
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Invalid quantity {quantity}: {reason}",
        )


class UnknownFormatError(KnownError):
    """A format tag that is not in the format rule table."""

    def __init__(self, format_name: str, known_formats: list[str]):
        self.format_name = format_name
        super().__init__(
            kind=FailureKind.UNKNOWN_FORMAT,
            message=f"Unknown format '{format_name}'.",
            detail=f"Known formats: {', '.join(known_formats)}",
            suggestion="Choose one of the supported formats.",
            status_code=404,
        )


# -----------------------------------------------------------------------------
# Response construction
# -----------------------------------------------------------------------------

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The deck operation could not be applied.",
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the failure detail and adjust the request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}

# id() of every response that went through finalize_response
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Check a response's shape and mark it as finalized.

    Raises:
        ValueError: If a success carries failure details, or a failure lacks them
    """
    if response.outcome == OutcomeType.SUCCESS and response.failure is not None:
        raise ValueError("Success response must not have failure details")
    if response.outcome != OutcomeType.SUCCESS and response.failure is None:
        raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))
    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    return id(response) in _finalized_responses


def create_unknown_failure(exception: Exception, include_type: bool = True) -> ApiResponse[Any]:
    """Finalized unknown failure; only the exception class name is exposed."""
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__ if include_type else None,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )
    return finalize_response(response)


def create_known_failure(kind: FailureKind, reason: str) -> ApiResponse[Any]:
    """Finalized known failure with the standard message and `reason` as detail."""
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.KNOWN_FAILURE,
        failure=FailureDetail(
            kind=kind,
            message=STANDARD_MESSAGES[OutcomeType.KNOWN_FAILURE],
            detail=reason,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        ),
    )
    return finalize_response(response)


def create_success(data: T) -> ApiResponse[T]:
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
