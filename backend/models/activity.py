"""Lesson and comment activity records.

The achievement engine only reads counts from these tables.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import backref, relationship

from database import Base


class Lesson(Base):
    """A course lesson that users can watch."""

    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)


class LessonUser(Base):
    """Tracks a user's relation to a lesson and whether it was watched."""

    __tablename__ = "lesson_user"
    __table_args__ = (
        UniqueConstraint("user_id", "lesson_id", name="uq_lesson_user"),
        Index("ix_lesson_user_user_watched", "user_id", "watched"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lesson_id = Column(
        Integer,
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    watched = Column(Boolean, default=False, nullable=False)

    user = relationship("User", backref=backref("lesson_links", passive_deletes=True))
    lesson = relationship("Lesson")


class Comment(Base):
    """A comment written by a user."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    user = relationship("User", backref=backref("comments", passive_deletes=True))
