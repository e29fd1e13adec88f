"""Domain errors raised by the progress services."""

from typing import Optional


class ProgressError(Exception):
    """Base class for achievement/badge engine errors."""


class SubjectNotFoundError(ProgressError):
    """The user reference does not resolve to a persisted record."""

    def __init__(self, user_id: Optional[int]):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class UnknownRuleError(ProgressError):
    """An achievement or badge name is not in the rule catalog."""

    def __init__(self, name: str, kind: str = "achievement"):
        self.name = name
        self.kind = kind
        super().__init__(f"Unknown {kind}: {name}")


class LessonNotFoundError(ProgressError):
    """The lesson reference does not resolve to a persisted record."""

    def __init__(self, lesson_id: int):
        self.lesson_id = lesson_id
        super().__init__(f"Lesson not found: {lesson_id}")
