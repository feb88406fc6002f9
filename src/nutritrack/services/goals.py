"""Goal calculator: daily calorie and protein targets from biometrics."""

import logging
import math
import re

from nutritrack.domain.errors import (
    IncompleteInputError,
    TimelineIssue,
    ValidationError,
)
from nutritrack.domain.goals import (
    AGGRESSIVE_DEFICIT_KCAL,
    CALORIES_PER_POUND,
    DEFAULT_TIMELINE_DAYS,
    GoalInput,
    GoalResult,
)
from nutritrack.domain.models import ActivityLevel, Gender
from nutritrack.domain.units import in_to_cm, lb_to_kg

_logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"\d+")
_UNIT_PATTERN = re.compile(
    r"(?<![a-z])(week|wk|month|mo|day|d)s?(?![a-z])", re.IGNORECASE
)

_UNIT_ALIASES = {
    "day": "day",
    "d": "day",
    "week": "week",
    "wk": "week",
    "month": "month",
    "mo": "month",
}
_DAYS_PER_UNIT = {"day": 1, "week": 7, "month": 30}
_ACCEPTED_RANGES = {"day": (7, 365), "week": (1, 52), "month": (1, 12)}

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

_PROTEIN_PER_KG_LOSS = 2.0
_PROTEIN_PER_KG_GAIN = 2.2
_PROTEIN_PER_KG_MAINTAIN = 1.8


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def parse_timeline(text: str) -> int:
    """Convert free text such as ``"8 weeks"`` to a number of days.

    Raises ``ValidationError`` when the number or unit is missing or the
    magnitude falls outside the accepted range for its unit.
    """
    number_match = _NUMBER_PATTERN.search(text or "")
    if number_match is None:
        raise ValidationError(
            "Timeline must include a number, e.g. '8 weeks'",
            field="timeline",
            reason=TimelineIssue.MISSING_NUMBER,
        )
    unit_match = _UNIT_PATTERN.search(text)
    if unit_match is None:
        raise ValidationError(
            "Timeline must include a unit: days, weeks or months",
            field="timeline",
            reason=TimelineIssue.MISSING_UNIT,
        )

    number = int(number_match.group())
    unit = _UNIT_ALIASES[unit_match.group(1).lower()]
    low, high = _ACCEPTED_RANGES[unit]
    if not low <= number <= high:
        raise ValidationError(
            f"Timeline in {unit}s must be between {low} and {high}",
            field="timeline",
            reason=TimelineIssue.OUT_OF_RANGE,
        )
    return number * _DAYS_PER_UNIT[unit]


def resolve_timeline_days(text: str | None) -> int:
    """Return the timeline in days, or the 8-week default when no text is given.

    Any text that is supplied goes through ``parse_timeline`` and its
    validation errors propagate.
    """
    if text is None:
        return DEFAULT_TIMELINE_DAYS
    return parse_timeline(text)


def compute_bmr(
    weight_lb: float, height_in: float, age: float, gender: Gender | None
) -> float:
    """Harris-Benedict basal metabolic rate."""
    _require_positive("weight", weight_lb)
    _require_positive("height", height_in)
    _require_positive("age", age)
    _require_choice("gender", gender)
    kg = lb_to_kg(weight_lb)
    cm = in_to_cm(height_in)
    if Gender(gender) is Gender.MALE:
        return 88.362 + 13.397 * kg + 4.799 * cm - 5.677 * age
    return 447.593 + 9.247 * kg + 3.098 * cm - 4.330 * age


def apply_activity_multiplier(
    bmr: float, activity_level: ActivityLevel | None
) -> int:
    """Scale BMR to maintenance calories."""
    _require_choice("activity_level", activity_level)
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)])


def compute_daily_adjustment(
    weight_lb: float, target_weight_lb: float, days: int
) -> int:
    """Daily calorie change needed to move the weight difference in ``days``."""
    total_adjustment = abs(target_weight_lb - weight_lb) * CALORIES_PER_POUND
    return round_half_up(total_adjustment / days)


def compute_target_calories(
    maintenance: int, weight_lb: float, target_weight_lb: float, days: int
) -> tuple[int, int]:
    """Return ``(target_calories, calculated_deficit)``."""
    is_loss = target_weight_lb - weight_lb < 0
    daily_adjustment = compute_daily_adjustment(weight_lb, target_weight_lb, days)
    if is_loss:
        return max(0, maintenance - daily_adjustment), -daily_adjustment
    return maintenance + daily_adjustment, daily_adjustment


def compute_target_protein(weight_lb: float, is_loss: bool, is_gain: bool) -> int:
    """Daily protein target in grams."""
    if is_loss:
        multiplier = _PROTEIN_PER_KG_LOSS
    elif is_gain:
        multiplier = _PROTEIN_PER_KG_GAIN
    else:
        multiplier = _PROTEIN_PER_KG_MAINTAIN
    return round_half_up(lb_to_kg(weight_lb) * multiplier)


def warn_if_aggressive(is_loss: bool, daily_adjustment: int, days: int) -> str | None:
    """Advisory text when the daily deficit exceeds 1000 kcal."""
    if not is_loss or daily_adjustment <= AGGRESSIVE_DEFICIT_KCAL:
        return None
    extended_days = math.ceil(days * 1.5)
    reduced_deficit = round_half_up(daily_adjustment * 0.67)
    return (
        f"A {daily_adjustment} calorie daily deficit is quite aggressive and may "
        f"not be sustainable. Consider extending your timeline to {extended_days} "
        f"days for a healthier {reduced_deficit} calorie daily deficit."
    )


def calculate_goals(goal_input: GoalInput) -> GoalResult:
    """Derive daily targets from biometrics and the timeline text."""
    _require_positive("target_weight", goal_input.target_weight_lb)
    days = resolve_timeline_days(goal_input.timeline_text)
    bmr = compute_bmr(
        goal_input.weight_lb, goal_input.height_in, goal_input.age, goal_input.gender
    )
    maintenance = apply_activity_multiplier(bmr, goal_input.activity_level)

    weight_diff = goal_input.target_weight_lb - goal_input.weight_lb
    is_loss = weight_diff < 0
    is_gain = weight_diff > 0
    daily_calories, deficit = compute_target_calories(
        maintenance, goal_input.weight_lb, goal_input.target_weight_lb, days
    )
    daily_protein = compute_target_protein(goal_input.weight_lb, is_loss, is_gain)
    warning = warn_if_aggressive(is_loss, abs(deficit), days)
    if warning:
        _logger.warning("Aggressive deficit: %s kcal/day over %s days", -deficit, days)

    _logger.info(
        "Goals calculated: maintenance=%s calories=%s protein=%s days=%s",
        maintenance,
        daily_calories,
        daily_protein,
        days,
    )
    return GoalResult(
        daily_calories=daily_calories,
        daily_protein=daily_protein,
        calculated_deficit=deficit,
        timeline_days=days,
        maintenance_calories=maintenance,
        warning=warning,
    )


def _require_positive(field: str, value: float | None) -> None:
    if value is None or value <= 0:
        raise IncompleteInputError(field)


def _require_choice(field: str, value: object | None) -> None:
    if value is None:
        raise IncompleteInputError(field, f"{field} is required")
