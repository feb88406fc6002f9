"""Short titles for free-text meal descriptions."""

import re

_TRAILING_PUNCTUATION = re.compile(r"[.,!?;]+$")

_FILLER_WORDS = frozenset(
    {
        "with", "and", "or", "the", "a", "an", "of", "in", "on", "at", "to",
        "for", "from", "by", "about", "into", "through", "during", "before",
        "after", "above", "below", "up", "down", "out", "off", "over", "under",
        "again", "further", "then", "once", "some", "very", "really", "quite",
        "rather", "pretty", "more", "most", "less", "least", "much", "many",
        "few", "little", "big", "small", "large", "huge", "tiny",
    }
)  # fmt: skip

_FOOD_WORDS = frozenset(
    {
        "chicken", "beef", "pork", "fish", "salmon", "tuna", "turkey", "lamb",
        "rice", "pasta", "bread", "quinoa", "oats", "cereal",
        "salad", "soup", "sandwich", "burger", "pizza", "taco", "wrap",
        "eggs", "cheese", "milk", "yogurt",
        "apple", "banana", "orange", "berry", "fruit",
        "broccoli", "spinach", "carrot", "potato", "tomato", "vegetable",
        "grilled", "baked", "fried", "roasted", "steamed", "boiled",
    }
)  # fmt: skip

SUMMARY_WORDS = 5
SHORT_SUMMARY_WORDS = 3


def generate_meal_summary(description: str | None) -> str:
    """Title of at most five words, dropping filler words when needed."""
    words = _words(description)
    if not words:
        return "Untitled Meal"
    if len(words) > SUMMARY_WORDS:
        words = [word for word in words if word not in _FILLER_WORDS] or words
    return _title(words[:SUMMARY_WORDS])


def generate_short_meal_summary(description: str | None) -> str:
    """Title of at most three words with food words first."""
    words = [word for word in _words(description) if len(word) > 2]
    priority = [word for word in words if word in _FOOD_WORDS]
    rest = [word for word in words if word not in _FOOD_WORDS]
    selected = (priority + rest)[:SHORT_SUMMARY_WORDS]
    if not selected:
        return "Meal"
    return _title(selected)


def _words(description: str | None) -> list[str]:
    cleaned = _TRAILING_PUNCTUATION.sub("", (description or "").strip())
    return cleaned.lower().split()


def _title(words: list[str]) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in words)
