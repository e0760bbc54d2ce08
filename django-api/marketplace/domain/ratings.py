"""Star-rating parsing and per-event aggregation."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from marketplace.domain.errors import ValidationError
from marketplace.domain.value_objects import StarRating


@dataclass(frozen=True)
class RatingStats:
    """Aggregate view of one event's ratings."""

    total_ratings: int
    average_rating: float
    rating_distribution: dict[int, int]

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_ratings": self.total_ratings,
            "average_rating": self.average_rating,
            "rating_distribution": dict(self.rating_distribution),
        }


def parse_star(value: Any) -> int:
    """Return a validated 1-5 star value.

    Raises:
        ValidationError: If the value is not an integer between 1 and 5.
    """
    if isinstance(value, bool):
        raise ValidationError("Rating star must be between 1 and 5")
    try:
        number = Decimal(str(value).strip())
    except ArithmeticError:
        raise ValidationError("Rating star must be between 1 and 5") from None
    # Range check stays on the Decimal; int() of a huge exponent is unbounded work.
    if not number.is_finite() or not StarRating.MIN <= number <= StarRating.MAX:
        raise ValidationError("Rating star must be between 1 and 5")
    if number != number.to_integral_value():
        raise ValidationError("Rating star must be a whole number")
    return StarRating(int(number)).value


def aggregate_ratings(stars: Iterable[int]) -> RatingStats:
    """Count, average (2 decimals, 0 when empty) and 5-bucket distribution."""
    distribution = {star: 0 for star in range(StarRating.MIN, StarRating.MAX + 1)}
    total = 0
    count = 0
    for star in stars:
        distribution[star] = distribution.get(star, 0) + 1
        total += star
        count += 1
    if not count:
        return RatingStats(0, 0, distribution)
    average = (Decimal(total) / count).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return RatingStats(count, float(average), distribution)
