"""Read-only progress reporting for achievements and badges."""

from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from services.catalog import DEFAULT_CATALOG, RuleCatalog
from services.progress_store import ProgressStore


@dataclass(frozen=True)
class BadgeProgress:
    current_badge: str
    next_badge: Optional[str]
    remaining: int


class ProgressQueryService:
    """Computes next available achievements and badge progress.

    Has no side effects; the session is only needed for ``get_progress``.
    """

    def __init__(self, catalog: RuleCatalog = DEFAULT_CATALOG, db: Optional[Session] = None):
        self.catalog = catalog
        self.db = db

    def next_available_achievements(self, unlocked_names: Iterable[str]) -> list[str]:
        """First locked achievement of each category, in catalog order."""
        unlocked = set(unlocked_names)
        next_available = []
        for definitions in self.catalog.achievements_by_category().values():
            for definition in definitions:
                if definition.name not in unlocked:
                    next_available.append(definition.name)
                    break
        return next_available

    def badge_progress(self, unlocked_count: int) -> BadgeProgress:
        """Current tier, next tier and achievements remaining to reach it."""
        tiers = self.catalog.badges_by_tier()
        current = self.catalog.entry_badge.name
        for badge in tiers:
            if unlocked_count < badge.required_achievements:
                return BadgeProgress(
                    current_badge=current,
                    next_badge=badge.name,
                    remaining=badge.required_achievements - unlocked_count,
                )
            current = badge.name
        return BadgeProgress(current_badge=current, next_badge=None, remaining=0)

    def get_progress(self, user_id: int) -> dict:
        """Build the progress report for a user.

        Raises SubjectNotFoundError for unknown users.
        """
        if self.db is None:
            raise RuntimeError("ProgressQueryService.get_progress requires a database session")

        store = ProgressStore(self.db)
        store.require_user(user_id)
        unlocked = store.unlocked_names(user_id)
        badge = self.badge_progress(len(unlocked))

        return {
            "unlocked_achievements": unlocked,
            "next_available_achievements": self.next_available_achievements(unlocked),
            "current_badge": badge.current_badge,
            "next_badge": badge.next_badge,
            "remaining_to_unlock_next_badge": badge.remaining,
        }
