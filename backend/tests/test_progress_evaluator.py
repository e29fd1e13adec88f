"""Unit tests for the pure unlock checks."""

import pytest

from services.catalog import DEFAULT_CATALOG, COMMENTS_WRITTEN, LESSONS_WATCHED
from services.errors import UnknownRuleError
from services.progress_evaluator import ProgressEvaluator, SubjectCounters


@pytest.fixture
def evaluator() -> ProgressEvaluator:
    return ProgressEvaluator(DEFAULT_CATALOG)


LESSON_RULES = [(d.name, d.threshold) for d in DEFAULT_CATALOG.achievements_by_category()[LESSONS_WATCHED]]
COMMENT_RULES = [(d.name, d.threshold) for d in DEFAULT_CATALOG.achievements_by_category()[COMMENTS_WRITTEN]]


class TestShouldUnlockAchievement:
    """Threshold boundaries for every achievement."""

    @pytest.mark.parametrize("name,threshold", LESSON_RULES)
    def test_lesson_threshold_boundary(self, evaluator, name, threshold):
        assert not evaluator.should_unlock_achievement(name, SubjectCounters(watched_count=threshold - 1))
        assert evaluator.should_unlock_achievement(name, SubjectCounters(watched_count=threshold))
        assert evaluator.should_unlock_achievement(name, SubjectCounters(watched_count=threshold + 1))

    @pytest.mark.parametrize("name,threshold", COMMENT_RULES)
    def test_comment_threshold_boundary(self, evaluator, name, threshold):
        assert not evaluator.should_unlock_achievement(name, SubjectCounters(comment_count=threshold - 1))
        assert evaluator.should_unlock_achievement(name, SubjectCounters(comment_count=threshold))
        assert evaluator.should_unlock_achievement(name, SubjectCounters(comment_count=threshold + 1))

    def test_uses_only_the_category_counter(self, evaluator):
        """Comments never count toward lesson achievements."""
        counters = SubjectCounters(watched_count=0, comment_count=100)
        assert not evaluator.should_unlock_achievement("First Lesson Watched", counters)
        assert evaluator.should_unlock_achievement("20 Comments Written", counters)

    def test_unknown_name_raises(self, evaluator):
        with pytest.raises(UnknownRuleError):
            evaluator.should_unlock_achievement("Invalid Achievement", SubjectCounters(99, 99))


class TestShouldUnlockBadge:
    """Badge checks compare the unlocked achievement count."""

    @pytest.mark.parametrize(
        "name,count,expected",
        [
            ("Beginner", 0, True),
            ("Intermediate", 3, False),
            ("Intermediate", 4, True),
            ("Advanced", 7, False),
            ("Advanced", 8, True),
            ("Master", 9, False),
            ("Master", 10, True),
        ],
    )
    def test_badge_thresholds(self, evaluator, name, count, expected):
        assert evaluator.should_unlock_badge(name, count) is expected

    def test_unknown_badge_raises(self, evaluator):
        with pytest.raises(UnknownRuleError):
            evaluator.should_unlock_badge("Invalid Badge", 10)


def test_missing_counter_for_category_rejected():
    """Every catalog category needs a configured counter."""
    with pytest.raises(ValueError, match="No counter"):
        ProgressEvaluator(DEFAULT_CATALOG, category_counters={})
