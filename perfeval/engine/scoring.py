"""Final score computation for evaluation scorecards."""

from collections.abc import Mapping

from perfeval.exceptions import InvalidRatingError

RATING_FIELDS: tuple[str, ...] = (
    "quality",
    "productivity",
    "technical",
    "teamwork",
    "initiative",
    "punctuality",
    "leadership",
    "adaptability",
    "communication",
    "values_alignment",
)

RATING_MIN = 1
RATING_MAX = 5


def validate_ratings(ratings: Mapping[str, object]) -> dict[str, int]:
    """
    Check that every rating dimension is present and an integer in 1-5.
    Returns the ratings in canonical order; raises InvalidRatingError on the
    first offending field.
    """
    validated: dict[str, int] = {}
    for field in RATING_FIELDS:
        value = ratings.get(field)
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidRatingError(field, value)
        if not RATING_MIN <= value <= RATING_MAX:
            raise InvalidRatingError(field, value)
        validated[field] = value
    return validated


def compute_final_score(ratings: Mapping[str, object]) -> float:
    """Average of the ten ratings (sum / 10), unrounded."""
    validated = validate_ratings(ratings)
    return sum(validated.values()) / float(len(RATING_FIELDS))
