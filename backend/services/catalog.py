"""Static achievement and badge rule catalog.

The catalog is an immutable value built once at import time and handed to the
evaluator, coordinator and query service. Thresholds are stored as data, so
nothing needs to parse numbers out of display names.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from services.errors import UnknownRuleError

LESSONS_WATCHED = "Lessons Watched"
COMMENTS_WRITTEN = "Comments Written"


@dataclass(frozen=True)
class AchievementDefinition:
    """A one-time milestone tied to a category and a counter threshold."""

    category: str
    name: str
    threshold: int


@dataclass(frozen=True)
class BadgeDefinition:
    """A tier held once the user has unlocked enough achievements."""

    name: str
    required_achievements: int


class RuleCatalog:
    """Immutable lookup over achievement and badge definitions."""

    def __init__(
        self,
        achievements: Iterable[AchievementDefinition],
        badges: Iterable[BadgeDefinition],
    ):
        by_category: dict[str, list[AchievementDefinition]] = {}
        by_name: dict[str, AchievementDefinition] = {}
        for definition in achievements:
            if definition.threshold < 0:
                raise ValueError(f"Negative threshold for achievement: {definition.name}")
            if definition.name in by_name:
                raise ValueError(f"Duplicate achievement name: {definition.name}")
            by_name[definition.name] = definition
            by_category.setdefault(definition.category, []).append(definition)

        for category, definitions in by_category.items():
            thresholds = [d.threshold for d in definitions]
            if thresholds != sorted(thresholds):
                raise ValueError(f"Achievements in {category!r} must ascend by threshold")

        tiers = tuple(badges)
        requirements = [b.required_achievements for b in tiers]
        if requirements != sorted(requirements) or any(r < 0 for r in requirements):
            raise ValueError("Badges must ascend by non-negative required achievements")
        if len({b.name for b in tiers}) != len(tiers):
            raise ValueError("Badge names must be unique")
        if not tiers:
            raise ValueError("At least one badge tier is required")

        self._by_category: Mapping[str, tuple[AchievementDefinition, ...]] = MappingProxyType(
            {category: tuple(defs) for category, defs in by_category.items()}
        )
        self._achievements: Mapping[str, AchievementDefinition] = MappingProxyType(by_name)
        self._badges = tiers
        self._badge_index: Mapping[str, int] = MappingProxyType(
            {badge.name: index for index, badge in enumerate(tiers)}
        )

    def achievements_by_category(self) -> Mapping[str, tuple[AchievementDefinition, ...]]:
        """Achievements grouped by category, each group ascending by threshold."""
        return self._by_category

    def badges_by_tier(self) -> tuple[BadgeDefinition, ...]:
        """Badges ascending by required achievement count."""
        return self._badges

    def all_achievement_names(self) -> list[str]:
        return [d.name for defs in self._by_category.values() for d in defs]

    def get_achievement(self, name: str) -> AchievementDefinition:
        try:
            return self._achievements[name]
        except KeyError:
            raise UnknownRuleError(name, kind="achievement") from None

    def get_badge(self, name: str) -> BadgeDefinition:
        try:
            return self._badges[self._badge_index[name]]
        except KeyError:
            raise UnknownRuleError(name, kind="badge") from None

    def badge_rank(self, name: str) -> int:
        """Position of a badge in tier order (0 is the entry tier)."""
        self.get_badge(name)
        return self._badge_index[name]

    def badges_below(self, name: str) -> list[str]:
        """Names of every tier strictly lower than ``name``."""
        return [badge.name for badge in self._badges[: self.badge_rank(name)]]

    @property
    def entry_badge(self) -> BadgeDefinition:
        return self._badges[0]


DEFAULT_CATALOG = RuleCatalog(
    achievements=[
        AchievementDefinition(LESSONS_WATCHED, "First Lesson Watched", 1),
        AchievementDefinition(LESSONS_WATCHED, "5 Lessons Watched", 5),
        AchievementDefinition(LESSONS_WATCHED, "10 Lessons Watched", 10),
        AchievementDefinition(LESSONS_WATCHED, "25 Lessons Watched", 25),
        AchievementDefinition(LESSONS_WATCHED, "50 Lessons Watched", 50),
        AchievementDefinition(COMMENTS_WRITTEN, "First Comment Written", 1),
        AchievementDefinition(COMMENTS_WRITTEN, "3 Comments Written", 3),
        AchievementDefinition(COMMENTS_WRITTEN, "5 Comments Written", 5),
        AchievementDefinition(COMMENTS_WRITTEN, "10 Comments Written", 10),
        AchievementDefinition(COMMENTS_WRITTEN, "20 Comments Written", 20),
    ],
    badges=[
        BadgeDefinition("Beginner", 0),
        BadgeDefinition("Intermediate", 4),
        BadgeDefinition("Advanced", 8),
        BadgeDefinition("Master", 10),
    ],
)
