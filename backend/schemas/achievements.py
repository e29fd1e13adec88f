"""Pydantic schemas for achievement progress endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class AchievementProgressResponse(BaseModel):
    """Response for /users/{user_id}/achievements."""

    unlocked_achievements: list[str]
    next_available_achievements: list[str]
    current_badge: str
    next_badge: Optional[str] = None  # None once the top tier is reached
    remaining_to_unlock_next_badge: int = Field(ge=0)


class AchievementDefinitionOut(BaseModel):
    """One achievement rule from the catalog."""

    category: str
    name: str
    threshold: int


class BadgeDefinitionOut(BaseModel):
    """One badge tier from the catalog."""

    name: str
    required_achievements: int


class CatalogResponse(BaseModel):
    """Response for /achievements/catalog."""

    achievements: list[AchievementDefinitionOut]
    badges: list[BadgeDefinitionOut]
