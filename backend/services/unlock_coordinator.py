"""Applies achievement and badge candidates to persisted user state."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.catalog import DEFAULT_CATALOG, RuleCatalog
from services.progress_evaluator import ProgressEvaluator
from services.progress_store import ProgressStore


logger = logging.getLogger(__name__)


class UnlockCoordinator:
    """Single writer of unlock records and of the user badge field.

    Every handler validates the user and the rule name before reading
    counters, so a failed candidate leaves no writes behind. Each successful
    write is committed by the handler itself.
    """

    def __init__(
        self,
        db: Session,
        catalog: RuleCatalog = DEFAULT_CATALOG,
        evaluator: Optional[ProgressEvaluator] = None,
    ):
        self.db = db
        self.catalog = catalog
        self.evaluator = evaluator or ProgressEvaluator(catalog)
        self.store = ProgressStore(db)

    def handle_achievement_candidate(self, user_id: int, achievement_name: str) -> bool:
        """Unlock ``achievement_name`` for the user if the threshold is met.

        Returns True only when this call created the unlock record. Repeated
        or concurrent candidates for an unlocked achievement are no-ops.

        Raises:
            SubjectNotFoundError: the user does not exist.
            UnknownRuleError: the achievement is not in the catalog.
        """
        self.store.require_user(user_id)
        self.catalog.get_achievement(achievement_name)

        counters = self.store.counters(user_id)
        if not self.evaluator.should_unlock_achievement(achievement_name, counters):
            logger.debug("User %s does not yet qualify for %r", user_id, achievement_name)
            return False

        if self.store.has_achievement(user_id, achievement_name):
            logger.debug("User %s already unlocked %r", user_id, achievement_name)
            return False

        try:
            self.store.insert_achievement(user_id, achievement_name)
            self.db.commit()
        except IntegrityError:
            # Another writer inserted the same (user, name) pair first.
            self.db.rollback()
            logger.info("Unlock of %r for user %s was already recorded", achievement_name, user_id)
            return False

        logger.info("User %s unlocked achievement %r", user_id, achievement_name)
        return True

    def handle_badge_candidate(self, user_id: int, badge_name: str) -> bool:
        """Move the user to ``badge_name`` if enough achievements are unlocked.

        The badge never moves to a lower tier: a candidate for a tier at or
        below the current one leaves the field unchanged. Returns True when
        the field changed.

        Raises:
            SubjectNotFoundError: the user does not exist.
            UnknownRuleError: the badge is not in the catalog.
        """
        self.store.require_user(user_id)
        self.catalog.get_badge(badge_name)

        unlocked_count = self.store.unlocked_count(user_id)
        if not self.evaluator.should_unlock_badge(badge_name, unlocked_count):
            logger.debug(
                "User %s has %d achievements, not enough for %r",
                user_id, unlocked_count, badge_name,
            )
            return False

        known = [badge.name for badge in self.catalog.badges_by_tier()]
        changed = self.store.raise_badge(
            user_id,
            badge_name,
            replaceable=self.catalog.badges_below(badge_name),
            known=known,
        )
        self.db.commit()

        if changed:
            logger.info("User %s earned badge %r", user_id, badge_name)
        else:
            logger.debug("User %s already holds %r or a higher badge", user_id, badge_name)
        return changed
