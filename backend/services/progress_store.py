"""Database reads and writes used by the achievement engine.

All functions here are database-only and free of business logic.
"""

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from models.achievements import UserAchievement
from models.activity import Comment, LessonUser
from models.user import User
from services.errors import SubjectNotFoundError
from services.progress_evaluator import SubjectCounters


class ProgressStore:
    """Data access helpers for users, activity counts and unlock records."""

    def __init__(self, db: Session):
        self.db = db

    def require_user(self, user_id: int) -> User:
        """Load a user or raise SubjectNotFoundError."""
        user = self.db.get(User, user_id) if user_id is not None else None
        if user is None:
            raise SubjectNotFoundError(user_id)
        return user

    def counters(self, user_id: int) -> SubjectCounters:
        watched = self.db.execute(
            select(func.count(LessonUser.id)).where(
                LessonUser.user_id == user_id,
                LessonUser.watched.is_(True),
            )
        ).scalar_one()
        comments = self.db.execute(
            select(func.count(Comment.id)).where(Comment.user_id == user_id)
        ).scalar_one()
        return SubjectCounters(watched_count=watched, comment_count=comments)

    def unlocked_names(self, user_id: int) -> list[str]:
        """Unlocked achievement names in unlock order."""
        rows = self.db.execute(
            select(UserAchievement.name)
            .where(UserAchievement.user_id == user_id)
            .order_by(UserAchievement.unlocked_at.asc(), UserAchievement.id.asc())
        ).scalars()
        return list(rows)

    def unlocked_count(self, user_id: int) -> int:
        return self.db.execute(
            select(func.count(UserAchievement.id)).where(UserAchievement.user_id == user_id)
        ).scalar_one()

    def has_achievement(self, user_id: int, name: str) -> bool:
        found = self.db.execute(
            select(UserAchievement.id).where(
                UserAchievement.user_id == user_id,
                UserAchievement.name == name,
            )
        ).first()
        return found is not None

    def insert_achievement(self, user_id: int, name: str) -> UserAchievement:
        """Stage an unlock row and flush it so the unique constraint is checked now."""
        unlock = UserAchievement(user_id=user_id, name=name)
        self.db.add(unlock)
        self.db.flush()
        return unlock

    def raise_badge(self, user_id: int, badge: str, replaceable: list[str], known: list[str]) -> bool:
        """Set the badge only if the current value is NULL, unknown or in ``replaceable``.

        Runs as one conditional UPDATE so concurrent writers cannot lose an
        upgrade or apply a downgrade. Returns True when a row changed.
        """
        conditions = [User.badge.is_(None), User.badge.not_in(known)]
        if replaceable:
            conditions.append(User.badge.in_(replaceable))
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, or_(*conditions))
            .values(badge=badge)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
