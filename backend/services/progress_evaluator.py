"""Pure unlock checks over user activity counters."""

from dataclasses import dataclass
from typing import Callable, Mapping

from services.catalog import (
    COMMENTS_WRITTEN,
    DEFAULT_CATALOG,
    LESSONS_WATCHED,
    RuleCatalog,
)


@dataclass(frozen=True)
class SubjectCounters:
    """Activity counts for a single user."""

    watched_count: int = 0
    comment_count: int = 0


CounterReader = Callable[[SubjectCounters], int]

# Which counter feeds each achievement category.
CATEGORY_COUNTERS: Mapping[str, CounterReader] = {
    LESSONS_WATCHED: lambda counters: counters.watched_count,
    COMMENTS_WRITTEN: lambda counters: counters.comment_count,
}


class ProgressEvaluator:
    """Decides whether named achievements or badges are earned.

    Never touches storage: counters are supplied by the caller.
    """

    def __init__(
        self,
        catalog: RuleCatalog = DEFAULT_CATALOG,
        category_counters: Mapping[str, CounterReader] = CATEGORY_COUNTERS,
    ):
        missing = set(catalog.achievements_by_category()) - set(category_counters)
        if missing:
            raise ValueError(f"No counter configured for categories: {sorted(missing)}")
        self.catalog = catalog
        self.category_counters = category_counters

    def should_unlock_achievement(self, name: str, counters: SubjectCounters) -> bool:
        """Return True when the category counter meets the achievement threshold.

        Raises UnknownRuleError for names outside the catalog.
        """
        definition = self.catalog.get_achievement(name)
        counter = self.category_counters[definition.category](counters)
        return counter >= definition.threshold

    def should_unlock_badge(self, name: str, unlocked_achievement_count: int) -> bool:
        """Return True when enough achievements are unlocked for the badge.

        Raises UnknownRuleError for names outside the catalog.
        """
        definition = self.catalog.get_badge(name)
        return unlocked_achievement_count >= definition.required_achievements
