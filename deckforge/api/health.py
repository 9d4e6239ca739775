"""
Health check endpoint.

The engine has no external dependencies, so liveness is the only probe.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from deckforge.models.format_rules import FORMAT_RULES_VERSION

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    rules_version: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Returns healthy if the service is running."""
    return HealthResponse(status="healthy", rules_version=FORMAT_RULES_VERSION)
