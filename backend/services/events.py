"""Candidate signals and the in-process dispatcher that routes them."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Optional

from sqlalchemy.orm import Session

from services.catalog import COMMENTS_WRITTEN, DEFAULT_CATALOG, LESSONS_WATCHED, RuleCatalog
from services.unlock_coordinator import UnlockCoordinator


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LessonWatched:
    user_id: int
    lesson_id: int


@dataclass(frozen=True)
class CommentWritten:
    user_id: int
    comment_id: int


@dataclass(frozen=True)
class AchievementCandidate:
    """Asks the coordinator to re-check one achievement for a user."""

    user_id: int
    achievement_name: str


@dataclass(frozen=True)
class BadgeCandidate:
    """Asks the coordinator to re-check one badge tier for a user."""

    user_id: int
    badge_name: str


Listener = Callable[[Any], None]


class EventDispatcher:
    """Synchronous registry of listeners keyed by signal type.

    Listener exceptions propagate to whoever dispatched the signal.
    """

    def __init__(self):
        self._listeners: DefaultDict[type, list[Listener]] = defaultdict(list)

    def subscribe(self, signal_type: type, listener: Listener) -> None:
        self._listeners[signal_type].append(listener)

    def dispatch(self, signal: Any) -> None:
        listeners = self._listeners.get(type(signal), [])
        if not listeners:
            logger.debug("No listeners for %s", type(signal).__name__)
        for listener in listeners:
            listener(signal)


def build_dispatcher(
    db: Session,
    catalog: RuleCatalog = DEFAULT_CATALOG,
    coordinator: Optional[UnlockCoordinator] = None,
) -> EventDispatcher:
    """Wire activity events through achievement and badge candidates."""
    coordinator = coordinator or UnlockCoordinator(db, catalog)
    dispatcher = EventDispatcher()
    categories = catalog.achievements_by_category()

    def candidates_for(category: str, user_id: int) -> None:
        for definition in categories.get(category, ()):
            dispatcher.dispatch(AchievementCandidate(user_id, definition.name))

    def on_lesson_watched(event: LessonWatched) -> None:
        candidates_for(LESSONS_WATCHED, event.user_id)

    def on_comment_written(event: CommentWritten) -> None:
        candidates_for(COMMENTS_WRITTEN, event.user_id)

    def on_achievement_candidate(signal: AchievementCandidate) -> None:
        if coordinator.handle_achievement_candidate(signal.user_id, signal.achievement_name):
            for badge in catalog.badges_by_tier():
                dispatcher.dispatch(BadgeCandidate(signal.user_id, badge.name))

    def on_badge_candidate(signal: BadgeCandidate) -> None:
        coordinator.handle_badge_candidate(signal.user_id, signal.badge_name)

    dispatcher.subscribe(LessonWatched, on_lesson_watched)
    dispatcher.subscribe(CommentWritten, on_comment_written)
    dispatcher.subscribe(AchievementCandidate, on_achievement_candidate)
    dispatcher.subscribe(BadgeCandidate, on_badge_candidate)
    return dispatcher
