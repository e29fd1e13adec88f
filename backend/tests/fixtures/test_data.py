"""Test data helpers for activity and achievement tests.

Provides the catalog names used across tests and helpers that write raw
activity rows directly, bypassing the event dispatch.
"""

from sqlalchemy.orm import Session

from models.achievements import UserAchievement
from models.activity import Comment, Lesson, LessonUser
from services.catalog import DEFAULT_CATALOG, COMMENTS_WRITTEN, LESSONS_WATCHED

LESSON_ACHIEVEMENTS = [d.name for d in DEFAULT_CATALOG.achievements_by_category()[LESSONS_WATCHED]]
COMMENT_ACHIEVEMENTS = [d.name for d in DEFAULT_CATALOG.achievements_by_category()[COMMENTS_WRITTEN]]
ALL_ACHIEVEMENTS = DEFAULT_CATALOG.all_achievement_names()


def create_lessons(db: Session, count: int) -> list[Lesson]:
    lessons = [Lesson(title=f"Lesson {i + 1}") for i in range(count)]
    db.add_all(lessons)
    db.commit()
    return lessons


def watch_lessons(db: Session, user_id: int, count: int) -> None:
    """Add ``count`` newly watched lessons for the user."""
    for lesson in create_lessons(db, count):
        db.add(LessonUser(user_id=user_id, lesson_id=lesson.id, watched=True))
    db.commit()


def write_comments(db: Session, user_id: int, count: int) -> None:
    """Add ``count`` comments for the user."""
    existing = db.query(Comment).filter(Comment.user_id == user_id).count()
    for i in range(count):
        db.add(Comment(user_id=user_id, body=f"Comment {existing + i + 1}"))
    db.commit()


def grant_achievements(db: Session, user_id: int, names: list[str]) -> None:
    """Insert unlock rows directly."""
    for name in names:
        db.add(UserAchievement(user_id=user_id, name=name))
    db.commit()


def unlock_rows(db: Session, user_id: int, name: str) -> int:
    return (
        db.query(UserAchievement)
        .filter(UserAchievement.user_id == user_id, UserAchievement.name == name)
        .count()
    )
