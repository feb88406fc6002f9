"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import date, timedelta
from uuid import UUID

from fastapi import Depends, FastAPI, Header, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse

from nutritrack.api.models import (
    GoalRequest,
    MealCreate,
    MealUpdate,
    RecalculateRequest,
    TargetsBody,
)
from nutritrack.app_logging import configure_logging
from nutritrack.containers import AppContainer
from nutritrack.domain.diary import DayTotal, MonthView, WeeklyStats
from nutritrack.domain.errors import IncompleteInputError, ValidationError
from nutritrack.domain.goals import GoalInput, GoalResult
from nutritrack.domain.meals import MealEntry
from nutritrack.domain.models import GoalTargets
from nutritrack.services import adherence
from nutritrack.services.favorites import FavoriteExistsError
from nutritrack.services.goals import calculate_goals
from nutritrack.services.summaries import (
    generate_meal_summary,
    generate_short_meal_summary,
)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_user(x_user_id: UUID | None = Header(default=None)) -> UUID:
    """Resolve the caller's user id set by the upstream auth layer."""
    if x_user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return x_user_id


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(ValidationError)
    @app.exception_handler(IncompleteInputError)
    async def goal_input_error(
        _request: Request, exc: ValidationError | IncompleteInputError
    ) -> JSONResponse:
        logger.info("Rejected goal input: %s (%s)", exc.field, exc.reason)
        return JSONResponse(
            status_code=422,
            content={
                "detail": {
                    "field": exc.field,
                    "reason": str(getattr(exc.reason, "value", exc.reason)),
                    "message": exc.message,
                }
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/goals/calculate")
    async def calculate(body: GoalRequest) -> dict[str, object]:
        """Calculate targets without persisting them."""
        result = calculate_goals(
            GoalInput(
                weight_lb=body.weight,
                target_weight_lb=body.target_weight,
                height_in=body.height,
                age=body.age,
                gender=body.gender,
                activity_level=body.activity_level,
                timeline_text=body.timeline,
            )
        )
        return _goal_payload(result)

    @app.get("/profile/goals")
    async def get_goals(
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, int]:
        """Return the user's targets with defaults applied."""
        return asdict(state.profile_service.get_targets(user_id))

    @app.put("/profile/goals")
    async def put_goals(
        body: TargetsBody,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, int]:
        """Manually overwrite the user's targets."""
        targets = state.profile_service.set_targets(
            user_id,
            GoalTargets(
                daily_calories=body.daily_calories, daily_protein=body.daily_protein
            ),
        )
        return asdict(targets)

    @app.post("/profile/goals/recalculate")
    async def recalculate_goals(
        body: RecalculateRequest,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Recalculate and persist targets from the stored profile."""
        result = state.profile_service.recalculate(user_id, body.timeline)
        if result is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _goal_payload(result)

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(
        body: MealCreate,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Log a meal."""
        meal = state.meal_service.log_meal(
            user_id,
            body.meal_date,
            body.meal_type,
            body.description,
            macros=body.model_dump(exclude={"meal_date", "meal_type", "description"}),
        )
        return _meal_payload(meal)

    @app.get("/meals")
    async def list_meals(
        start: date,
        end: date | None = None,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """List meals for a date or an inclusive range."""
        if end is None:
            meals = state.meal_service.list_for_date(user_id, start)
        else:
            meals = state.meal_service.list_range(user_id, start, end)
        return {"meals": [_meal_payload(meal) for meal in meals]}

    @app.patch("/meals/{meal_id}")
    async def update_meal(
        meal_id: UUID,
        body: MealUpdate,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Edit a meal's description or macros."""
        macros = body.model_dump(
            exclude={"meal_type", "description"}, exclude_unset=True
        )
        meal = state.meal_service.update_meal(
            user_id,
            meal_id,
            meal_type=body.meal_type,
            description=body.description,
            macros=macros,
        )
        if meal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _meal_payload(meal)

    @app.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_meal(
        meal_id: UUID,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> None:
        """Delete a meal."""
        if not state.meal_service.delete_meal(user_id, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/favorites")
    async def list_favorites(
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Favorite meals, most recently added first."""
        favorites = state.favorite_service.list_favorites(user_id)
        return {
            "favorites": [
                {
                    **_meal_payload(favorite.meal),
                    "favorited_at": favorite.favorited_at.isoformat(),
                }
                for favorite in favorites
            ]
        }

    @app.post("/favorites/{meal_id}", status_code=status.HTTP_201_CREATED)
    async def add_favorite(
        meal_id: UUID,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, str]:
        """Add one of the user's meals to favorites."""
        try:
            added = state.favorite_service.add_favorite(user_id, meal_id)
        except FavoriteExistsError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        if not added:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"meal_id": str(meal_id)}

    @app.delete("/favorites/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def remove_favorite(
        meal_id: UUID,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> None:
        """Remove a meal from favorites."""
        if not state.favorite_service.remove_favorite(user_id, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/diary/date/{day}")
    async def diary_day(
        day: date,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Totals and goal flags for one date."""
        return _day_payload(state.diary_service.get_day(user_id, day))

    @app.get("/diary/week")
    async def diary_week(
        end: date,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Deficit stats for the 7 days ending on ``end``."""
        return _weekly_payload(state.diary_service.get_weekly_stats(user_id, end))

    @app.get("/diary/summary")
    async def diary_summary(
        start: date,
        end: date | None = None,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Totals and logged days for a range, 7 days from ``start`` by default."""
        end = end or start + timedelta(days=adherence.WEEK_DAYS - 1)
        if end < start:
            raise HTTPException(status_code=422, detail="end must not be before start")
        days = state.diary_service.get_range(user_id, start, end)
        return {
            "summary": asdict(adherence.summarize_period(days)),
            "days": [_day_payload(day) for day in days if day.has_data],
        }

    @app.get("/diary/streak")
    async def diary_streak(
        today: date,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, int]:
        """Current adherence streak."""
        return {"streak": state.diary_service.get_streak(user_id, today)}

    @app.get("/diary/progress/{day}")
    async def diary_progress(
        day: date,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Remaining amounts and progress percentages."""
        return asdict(state.diary_service.get_progress(user_id, day))

    @app.get("/diary/projection")
    async def diary_projection(
        end: date,
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Time to target weight at the current weekly pace."""
        projection = state.diary_service.get_projection(user_id, end)
        return {"projection": asdict(projection) if projection else None}

    @app.get("/diary/{year}/{month}")
    async def diary_month(
        year: int,
        month: int = Path(ge=1, le=12),
        user_id: UUID = Depends(require_user),
        state: AppContainer = Depends(get_container),
    ) -> dict[str, object]:
        """Calendar view for a month."""
        return _month_payload(state.diary_service.get_month(user_id, year, month))

    return app


def _goal_payload(result: GoalResult) -> dict[str, object]:
    payload: dict[str, object] = {
        "daily_calories": result.daily_calories,
        "daily_protein": result.daily_protein,
        "calculated_deficit": result.calculated_deficit,
        "timeline_days": result.timeline_days,
        "maintenance_calories": result.maintenance_calories,
    }
    if result.warning:
        payload["warning"] = result.warning
    return payload


def _meal_payload(meal: MealEntry) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "meal_date": meal.meal_date.isoformat(),
        "meal_type": meal.meal_type.value,
        "description": meal.description,
        "summary": generate_meal_summary(meal.description),
        "short_summary": generate_short_meal_summary(meal.description),
        **asdict(meal.macros),
        "created_at": meal.created_at.isoformat(),
    }


def _day_payload(day: DayTotal) -> dict[str, object]:
    payload = asdict(day)
    payload["date"] = day.date.isoformat()
    payload["has_data"] = day.has_data
    payload["status"] = day.status.value
    return payload


def _month_payload(view: MonthView) -> dict[str, object]:
    return {
        "year": view.year,
        "month": view.month,
        "days": [_day_payload(day) for day in view.days],
    }


def _weekly_payload(stats: WeeklyStats) -> dict[str, object]:
    return {
        "start_date": stats.start_date.isoformat() if stats.start_date else None,
        "end_date": stats.end_date.isoformat() if stats.end_date else None,
        "average_daily_deficit": stats.average_daily_deficit,
        "days_with_data": stats.days_with_data,
        "weekly_weight_change": stats.weekly_weight_change,
        "trend": stats.trend,
    }
