"""Publish/subscribe signal for diary data changes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID

_logger = logging.getLogger(__name__)


class DiaryEventKind(str, Enum):
    """What changed."""

    MEAL_LOGGED = "meal_logged"
    MEAL_UPDATED = "meal_updated"
    MEAL_DELETED = "meal_deleted"
    GOALS_CHANGED = "goals_changed"


@dataclass(frozen=True)
class DiaryEvent:
    """Signal that a user's diary views are stale.

    ``meal_date`` is None when every date is affected, e.g. new targets.
    """

    user_id: UUID
    kind: DiaryEventKind
    meal_date: date | None = None


Subscriber = Callable[[DiaryEvent], None]


@dataclass
class DiaryEventBus:
    """Synchronous in-process event bus."""

    _subscribers: list[Subscriber] = field(default_factory=list)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: DiaryEvent) -> None:
        """Deliver an event to every subscriber."""
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                _logger.exception("Diary event subscriber failed: %s", event.kind)
