"""Achievement progress endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.achievements import AchievementProgressResponse, CatalogResponse
from services.catalog import DEFAULT_CATALOG
from services.errors import SubjectNotFoundError
from services.progress_query import ProgressQueryService

router = APIRouter()


@router.get("/users/{user_id}/achievements", response_model=AchievementProgressResponse)
def get_user_achievements(user_id: int, db: Session = Depends(get_db)):
    """Get a user's unlocked achievements and badge progress.

    Returns the unlocked achievement names, the next available achievement
    in each category, and the current badge with the achievements still
    needed for the next one.
    """
    service = ProgressQueryService(DEFAULT_CATALOG, db)
    try:
        progress = service.get_progress(user_id)
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return AchievementProgressResponse(**progress)


@router.get("/achievements/catalog", response_model=CatalogResponse)
def get_catalog():
    """List every achievement rule and badge tier."""
    return CatalogResponse(
        achievements=[
            {"category": d.category, "name": d.name, "threshold": d.threshold}
            for definitions in DEFAULT_CATALOG.achievements_by_category().values()
            for d in definitions
        ],
        badges=[
            {"name": b.name, "required_achievements": b.required_achievements}
            for b in DEFAULT_CATALOG.badges_by_tier()
        ],
    )
