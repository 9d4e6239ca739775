"""
Format rule endpoints.

Exposes the format rule table so clients render the same minimums and limits
the validator enforces.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from deckforge.models.failure import ApiResponse, create_success
from deckforge.models.format_rules import (
    FORMAT_RULES,
    FORMAT_RULES_VERSION,
    FormatRules,
    require_format_rules,
)

router = APIRouter(prefix="/formats", tags=["formats"])


class FormatRulesData(BaseModel):
    """Response model for one format's rules."""

    name: str
    min_mainboard: int
    sideboard_limit: int | None
    copy_limit: int
    singleton: bool
    banned: list[str]


class FormatListData(BaseModel):
    version: str
    formats: list[FormatRulesData]


def _rules_data(rules: FormatRules) -> FormatRulesData:
    return FormatRulesData(
        name=rules.name,
        min_mainboard=rules.min_mainboard,
        sideboard_limit=rules.sideboard_limit,
        copy_limit=rules.copy_limit,
        singleton=rules.singleton,
        banned=sorted(rules.banned),
    )


@router.get("", response_model=ApiResponse[FormatListData])
async def list_formats() -> ApiResponse[Any]:
    """List every supported format with the rule table version."""
    return create_success(
        FormatListData(
            version=FORMAT_RULES_VERSION,
            formats=[_rules_data(rules) for rules in FORMAT_RULES.values()],
        )
    )


@router.get("/{format_name}", response_model=ApiResponse[FormatRulesData])
async def get_format(format_name: str) -> ApiResponse[Any]:
    """
    Get one format's rules.

    Unknown formats are a known failure (404), not a fallback.
    """
    return create_success(_rules_data(require_format_rules(format_name)))
