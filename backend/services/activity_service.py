"""Records learner activity and emits the matching events."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.activity import Comment, Lesson, LessonUser
from services.errors import LessonNotFoundError
from services.events import CommentWritten, EventDispatcher, LessonWatched, build_dispatcher
from services.progress_store import ProgressStore


logger = logging.getLogger(__name__)


class ActivityService:
    """Service for lesson-watch and comment-write activity."""

    def __init__(self, db: Session, dispatcher: Optional[EventDispatcher] = None):
        self.db = db
        self.dispatcher = dispatcher or build_dispatcher(db)
        self.store = ProgressStore(db)

    def record_lesson_watched(self, user_id: int, lesson_id: int) -> LessonUser:
        """Mark a lesson watched for the user, then dispatch LessonWatched.

        Watching the same lesson again does not add to the count.
        """
        self.store.require_user(user_id)
        if self.db.get(Lesson, lesson_id) is None:
            raise LessonNotFoundError(lesson_id)

        link = self._get_link(user_id, lesson_id)
        if link is None:
            try:
                link = LessonUser(user_id=user_id, lesson_id=lesson_id, watched=True)
                self.db.add(link)
                self.db.commit()
            except IntegrityError:
                # Concurrent request created the pair; fall through to update it.
                self.db.rollback()
                link = self._get_link(user_id, lesson_id)
        if not link.watched:
            link.watched = True
            self.db.commit()

        logger.info("User %s watched lesson %s", user_id, lesson_id)
        self.dispatcher.dispatch(LessonWatched(user_id=user_id, lesson_id=lesson_id))
        return link

    def record_comment(self, user_id: int, body: str) -> Comment:
        """Persist a comment, then dispatch CommentWritten."""
        self.store.require_user(user_id)

        comment = Comment(user_id=user_id, body=body)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        logger.info("User %s wrote comment %s", user_id, comment.id)
        self.dispatcher.dispatch(CommentWritten(user_id=user_id, comment_id=comment.id))
        return comment

    def _get_link(self, user_id: int, lesson_id: int) -> Optional[LessonUser]:
        return self.db.execute(
            select(LessonUser).where(
                LessonUser.user_id == user_id,
                LessonUser.lesson_id == lesson_id,
            )
        ).scalar_one_or_none()
