"""Model package exports for database initialization."""

from models.user import User
from models.activity import Lesson, LessonUser, Comment
from models.achievements import UserAchievement

__all__ = [
    "User",
    "Lesson",
    "LessonUser",
    "Comment",
    "UserAchievement",
]
