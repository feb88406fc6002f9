"""Tests for the profile service."""

from uuid import uuid4

import pytest

from nutritrack.domain.errors import IncompleteInputError, ValidationError
from nutritrack.domain.goals import DEFAULT_GOAL_TARGETS
from nutritrack.domain.models import GoalTargets
from nutritrack.services.events import DiaryEvent, DiaryEventBus, DiaryEventKind
from nutritrack.services.profiles import ProfileService, targets_for
from tests.conftest import InMemoryProfileRepository, make_profile


def _service() -> tuple[ProfileService, InMemoryProfileRepository, list[DiaryEvent]]:
    repository = InMemoryProfileRepository()
    bus = DiaryEventBus()
    received: list[DiaryEvent] = []
    bus.subscribe(received.append)
    return ProfileService(repository, bus), repository, received


def test_get_targets_applies_defaults() -> None:
    service, repository, _ = _service()
    user_id = uuid4()

    assert service.get_targets(user_id) == DEFAULT_GOAL_TARGETS

    repository.profiles[user_id] = make_profile(daily_calories=None, daily_protein=120)
    assert service.get_targets(user_id) == GoalTargets(2000, 120)


def test_targets_for_uses_profile_values() -> None:
    profile = make_profile(daily_calories=1800, daily_protein=140)
    assert targets_for(profile, DEFAULT_GOAL_TARGETS) == GoalTargets(1800, 140)


def test_set_targets_persists_and_publishes() -> None:
    service, repository, received = _service()
    user_id = uuid4()
    repository.profiles[user_id] = make_profile()

    service.set_targets(user_id, GoalTargets(1700, 130))

    assert repository.profiles[user_id].daily_calories == 1700
    assert received == [DiaryEvent(user_id, DiaryEventKind.GOALS_CHANGED)]
    with pytest.raises(ValueError):
        service.set_targets(user_id, GoalTargets(-1, 130))


def test_recalculate_persists_goal_result() -> None:
    service, repository, received = _service()
    user_id = uuid4()
    repository.profiles[user_id] = make_profile()

    result = service.recalculate(user_id, "8 weeks")

    assert result is not None
    assert result.daily_calories == 1829
    assert result.daily_protein == 181
    assert repository.profiles[user_id].daily_calories == 1829
    assert repository.profiles[user_id].daily_protein == 181
    assert received[-1].kind == DiaryEventKind.GOALS_CHANGED


def test_recalculate_without_timeline_uses_default_days() -> None:
    service, repository, _ = _service()
    user_id = uuid4()
    repository.profiles[user_id] = make_profile()

    result = service.recalculate(user_id, None)

    assert result is not None
    assert result.timeline_days == 56


def test_recalculate_invalid_timeline_leaves_profile_untouched() -> None:
    service, repository, received = _service()
    user_id = uuid4()
    repository.profiles[user_id] = make_profile()

    with pytest.raises(ValidationError):
        service.recalculate(user_id, "forever")

    assert repository.profiles[user_id].daily_calories == 2000
    assert received == []


def test_recalculate_missing_profile() -> None:
    service, _, _ = _service()
    assert service.recalculate(uuid4(), "8 weeks") is None


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"gender": None}, "gender"),
        ({"activity_level": None}, "activity_level"),
    ],
)
def test_recalculate_requires_gender_and_activity_level(overrides, field) -> None:
    service, repository, received = _service()
    user_id = uuid4()
    repository.profiles[user_id] = make_profile(**overrides)

    with pytest.raises(IncompleteInputError) as excinfo:
        service.recalculate(user_id, "12 weeks")

    assert excinfo.value.field == field
    assert repository.profiles[user_id].daily_calories == 2000
    assert received == []
