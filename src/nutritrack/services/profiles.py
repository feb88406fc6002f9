"""Profile goal targets and recalculation."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from nutritrack.domain.goals import DEFAULT_GOAL_TARGETS, GoalInput, GoalResult
from nutritrack.domain.models import GoalTargets, Profile
from nutritrack.services.events import DiaryEvent, DiaryEventBus, DiaryEventKind
from nutritrack.services.goals import calculate_goals

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile if present."""

    def update_targets(self, user_id: UUID, targets: GoalTargets) -> None:
        """Persist daily calorie and protein targets."""


@dataclass
class ProfileService:
    """Reads goal targets and persists recalculated ones."""

    repository: ProfileRepository
    events: DiaryEventBus
    defaults: GoalTargets = field(default=DEFAULT_GOAL_TARGETS)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.repository.get_profile(user_id)

    def get_targets(self, user_id: UUID) -> GoalTargets:
        """Return the stored targets, filling unset values with defaults."""
        return targets_for(self.repository.get_profile(user_id), self.defaults)

    def set_targets(self, user_id: UUID, targets: GoalTargets) -> GoalTargets:
        """Manually overwrite the daily targets."""
        if targets.daily_calories < 0 or targets.daily_protein < 0:
            raise ValueError("Targets must be non-negative")
        self.repository.update_targets(user_id, targets)
        self.events.publish(DiaryEvent(user_id, DiaryEventKind.GOALS_CHANGED))
        return targets

    def recalculate(
        self, user_id: UUID, timeline_text: str | None
    ) -> GoalResult | None:
        """Re-run the goal calculator on the stored profile and persist targets.

        Returns None when the user has no profile.
        """
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        result = calculate_goals(
            GoalInput(
                weight_lb=profile.weight,
                target_weight_lb=profile.target_weight,
                height_in=profile.height,
                age=profile.age,
                gender=profile.gender,
                activity_level=profile.activity_level,
                timeline_text=timeline_text,
            )
        )
        self.repository.update_targets(user_id, result.targets)
        self.events.publish(DiaryEvent(user_id, DiaryEventKind.GOALS_CHANGED))
        _logger.info("Recalculated goals for user %s", user_id)
        return result


def targets_for(profile: Profile | None, defaults: GoalTargets) -> GoalTargets:
    """Profile targets with the default policy applied to unset values."""
    if profile is None:
        return defaults
    return GoalTargets(
        daily_calories=(
            profile.daily_calories
            if profile.daily_calories is not None
            else defaults.daily_calories
        ),
        daily_protein=(
            profile.daily_protein
            if profile.daily_protein is not None
            else defaults.daily_protein
        ),
    )
