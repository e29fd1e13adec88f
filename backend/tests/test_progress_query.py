"""Tests for next-available achievements and badge progress."""

import pytest
from sqlalchemy.orm import Session

from models.user import User
from services.catalog import DEFAULT_CATALOG
from services.errors import SubjectNotFoundError
from services.progress_query import BadgeProgress, ProgressQueryService
from tests.fixtures.test_data import (
    ALL_ACHIEVEMENTS,
    COMMENT_ACHIEVEMENTS,
    LESSON_ACHIEVEMENTS,
    grant_achievements,
)


@pytest.fixture
def service() -> ProgressQueryService:
    return ProgressQueryService(DEFAULT_CATALOG)


class TestNextAvailableAchievements:
    """First locked achievement per category."""

    def test_nothing_unlocked_returns_first_of_each_category(self, service):
        assert service.next_available_achievements(set()) == [
            "First Lesson Watched",
            "First Comment Written",
        ]

    def test_everything_unlocked_returns_empty(self, service):
        assert service.next_available_achievements(set(ALL_ACHIEVEMENTS)) == []

    def test_partial_progress(self, service):
        unlocked = {"First Lesson Watched", "5 Lessons Watched", "First Comment Written"}
        assert service.next_available_achievements(unlocked) == [
            "10 Lessons Watched",
            "3 Comments Written",
        ]

    def test_completed_category_contributes_nothing(self, service):
        assert service.next_available_achievements(LESSON_ACHIEVEMENTS) == ["First Comment Written"]

    def test_gaps_return_lowest_locked(self, service):
        """An out-of-order unlock still leaves the lowest locked one next."""
        assert service.next_available_achievements({"5 Comments Written"}) == [
            "First Lesson Watched",
            "First Comment Written",
        ]


class TestBadgeProgress:
    """Current/next badge and remaining count."""

    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, BadgeProgress("Beginner", "Intermediate", 4)),
            (2, BadgeProgress("Beginner", "Intermediate", 2)),
            (4, BadgeProgress("Intermediate", "Advanced", 4)),
            (8, BadgeProgress("Advanced", "Master", 2)),
            (10, BadgeProgress("Master", None, 0)),
        ],
    )
    def test_badge_progress(self, service, count, expected):
        assert service.badge_progress(count) == expected


@pytest.mark.integration
class TestGetProgress:
    """Full progress report read from the database."""

    def test_new_user(self, db_session: Session, test_user: User):
        progress = ProgressQueryService(DEFAULT_CATALOG, db_session).get_progress(test_user.id)

        assert progress == {
            "unlocked_achievements": [],
            "next_available_achievements": ["First Lesson Watched", "First Comment Written"],
            "current_badge": "Beginner",
            "next_badge": "Intermediate",
            "remaining_to_unlock_next_badge": 4,
        }

    def test_some_achievements(self, db_session: Session, test_user: User):
        unlocked = [LESSON_ACHIEVEMENTS[0], COMMENT_ACHIEVEMENTS[0]]
        grant_achievements(db_session, test_user.id, unlocked)

        progress = ProgressQueryService(DEFAULT_CATALOG, db_session).get_progress(test_user.id)

        assert progress["unlocked_achievements"] == unlocked
        assert progress["next_available_achievements"] == [LESSON_ACHIEVEMENTS[1], COMMENT_ACHIEVEMENTS[1]]
        assert progress["current_badge"] == "Beginner"
        assert progress["remaining_to_unlock_next_badge"] == 2

    def test_all_achievements(self, db_session: Session, test_user: User):
        grant_achievements(db_session, test_user.id, ALL_ACHIEVEMENTS)

        progress = ProgressQueryService(DEFAULT_CATALOG, db_session).get_progress(test_user.id)

        assert progress["unlocked_achievements"] == ALL_ACHIEVEMENTS
        assert progress["next_available_achievements"] == []
        assert progress["current_badge"] == "Master"
        assert progress["next_badge"] is None
        assert progress["remaining_to_unlock_next_badge"] == 0

    def test_unknown_user_raises(self, db_session: Session):
        with pytest.raises(SubjectNotFoundError):
            ProgressQueryService(DEFAULT_CATALOG, db_session).get_progress(13579)

    def test_requires_session(self, service):
        with pytest.raises(RuntimeError):
            service.get_progress(1)
