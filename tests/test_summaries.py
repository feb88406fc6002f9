"""Tests for meal description summaries."""

from nutritrack.services.summaries import (
    generate_meal_summary,
    generate_short_meal_summary,
)


def test_meal_summary_short_descriptions_are_title_cased() -> None:
    summary = generate_meal_summary("grilled chicken and rice.")
    assert summary == "Grilled Chicken And Rice"


def test_meal_summary_drops_filler_words() -> None:
    summary = generate_meal_summary(
        "a big bowl of pasta with some tomato sauce and cheese on top"
    )
    assert summary == "Bowl Pasta Tomato Sauce Cheese"


def test_meal_summary_blank() -> None:
    assert generate_meal_summary("   ") == "Untitled Meal"
    assert generate_meal_summary(None) == "Untitled Meal"


def test_short_summary_prioritizes_food_words() -> None:
    assert (
        generate_short_meal_summary("homemade grilled salmon on rice")
        == "Grilled Salmon Rice"
    )


def test_short_summary_blank() -> None:
    assert generate_short_meal_summary("a of") == "Meal"
    assert generate_short_meal_summary("") == "Meal"
