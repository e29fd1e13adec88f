"""Activity endpoints that feed the achievement engine."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from config import RATE_LIMIT_ACTIVITY, RATE_LIMIT_ENABLED
from database import get_db
from schemas.achievements import AchievementProgressResponse
from schemas.activity import CommentCreateRequest
from services.activity_service import ActivityService
from services.catalog import DEFAULT_CATALOG
from services.errors import LessonNotFoundError, SubjectNotFoundError, UnknownRuleError
from services.progress_query import ProgressQueryService


logger = logging.getLogger(__name__)


def get_user_id_from_request(request: Request) -> str:
    """Extract user ID for rate limiting key."""
    # Fall back to IP address when the path carries no user
    user_id = request.path_params.get("user_id")
    if user_id is not None:
        return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=get_user_id_from_request, enabled=RATE_LIMIT_ENABLED)
router = APIRouter()


def _progress(db: Session, user_id: int) -> AchievementProgressResponse:
    progress = ProgressQueryService(DEFAULT_CATALOG, db).get_progress(user_id)
    return AchievementProgressResponse(**progress)


@router.post(
    "/users/{user_id}/lessons/{lesson_id}/watched",
    response_model=AchievementProgressResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
@limiter.limit(RATE_LIMIT_ACTIVITY)
def watch_lesson(
    request: Request,
    user_id: int,
    lesson_id: int,
    db: Session = Depends(get_db),
):
    """
    Mark a lesson as watched and re-check lesson achievements.

    The server will:
    1. Record the watch (watching a lesson twice counts once)
    2. Evaluate every "Lessons Watched" achievement for the user
    3. Re-check badge tiers when a new achievement was unlocked
    4. Return the user's progress
    """
    service = ActivityService(db)
    try:
        service.record_lesson_watched(user_id, lesson_id)
        return _progress(db, user_id)
    except (SubjectNotFoundError, LessonNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UnknownRuleError as e:
        logger.error("Catalog rejected a rule during lesson dispatch: %s", e)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.post(
    "/users/{user_id}/comments",
    response_model=AchievementProgressResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(RATE_LIMIT_ACTIVITY)
def write_comment(
    request: Request,
    user_id: int,
    payload: CommentCreateRequest,
    db: Session = Depends(get_db),
):
    """Write a comment and re-check comment achievements."""
    service = ActivityService(db)
    try:
        service.record_comment(user_id, payload.body)
        return _progress(db, user_id)
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UnknownRuleError as e:
        logger.error("Catalog rejected a rule during comment dispatch: %s", e)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
