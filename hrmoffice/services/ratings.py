"""Overall rating arithmetic shared by assessment listings and consensus views.

Ratings live on a 0-5 integer scale where 0 means "not yet rated". Overall
scores are reported with one decimal, rounded half-up.
"""
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP

MIN_RATING = 0
MAX_RATING = 5
UNRATED = 0

ZERO = Decimal("0.0")
_ONE_DECIMAL = Decimal("0.1")


def field(item, name, default=None):
    """Read ``name`` from a model row or a plain mapping."""
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def rating_value(item) -> int:
    value = field(item, "rating", UNRATED)
    return int(value) if value is not None else UNRATED


def is_valid_rating(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_RATING <= value <= MAX_RATING


def round_rating(value) -> Decimal:
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def mean_rating(values) -> Decimal:
    """Average every value given (zeros included); 0.0 for an empty input."""
    values = [Decimal(str(v)) if not isinstance(v, Decimal) else v for v in values]
    if not values:
        return ZERO
    return round_rating(sum(values, Decimal(0)) / len(values))


def compute_overall(ratings) -> Decimal:
    """Overall score of one assessment.

    Unrated entries (value 0) are dropped before averaging, so an assessment
    with nothing rated yet reports 0.0.
    """
    rated = [rating_value(r) for r in ratings or ()]
    rated = [v for v in rated if v != UNRATED]
    return mean_rating(rated)


def completion_progress(ratings, total_competencies: int) -> int:
    """Percentage of the framework's competencies that carry a rating."""
    if not ratings or not total_competencies:
        return 0
    rated = sum(1 for r in ratings if rating_value(r) > UNRATED)
    pct = (Decimal(rated * 100) / total_competencies).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return min(100, int(pct))
