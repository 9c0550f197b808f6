"""Derived rating statistics for foods and restaurants.

Pure functions over review rows already fetched by a repository. Nothing here
touches the database or the cache; stats are recomputed from current rows on
every cache miss.

Value score: average_rating / price, defined only when the food has at least
one review AND a positive price. Otherwise None (never 0).
"""

from collections import defaultdict
from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

Number = int | float | Decimal


@dataclass(frozen=True)
class FoodStats:
    review_count: int
    average_rating: float
    value: float | None


@dataclass(frozen=True)
class RestaurantStats:
    average_rating: float
    review_count: int
    average_value: float | None


def average_rating(ratings: Sequence[Number]) -> float:
    """Arithmetic mean of ratings, 0.0 when there are none."""
    if not ratings:
        return 0.0
    return float(sum(float(r) for r in ratings) / len(ratings))


def food_value(avg_rating: float, review_count: int, price: Number | None) -> float | None:
    if review_count <= 0 or price is None or price <= 0:
        return None
    return avg_rating / float(price)


def food_stats(ratings: Sequence[Number], price: Number | None) -> FoodStats:
    avg = average_rating(ratings)
    count = len(ratings)
    return FoodStats(
        review_count=count,
        average_rating=avg,
        value=food_value(avg, count, price),
    )


def restaurant_stats(
    food_ratings: Mapping[Hashable, Sequence[Number]],
    food_prices: Mapping[Hashable, Number | None],
    general_ratings: Sequence[Number],
) -> RestaurantStats:
    """Aggregate one restaurant.

    Rating and count run over the union of food reviews (for the foods in
    `food_prices`) and general reviews, each review counted once.
    average_value is the mean of the per-food value scores of qualifying
    foods; foods without reviews or without a positive price are excluded.
    """
    all_ratings: list[Number] = list(general_ratings)
    values: list[float] = []
    for food_id, price in food_prices.items():
        ratings = food_ratings.get(food_id, ())
        all_ratings.extend(ratings)
        value = food_stats(ratings, price).value
        if value is not None:
            values.append(value)

    return RestaurantStats(
        average_rating=average_rating(all_ratings),
        review_count=len(all_ratings),
        average_value=sum(values) / len(values) if values else None,
    )


def group_ratings(
    rows: Iterable[Any], key: str, rating_attr: str = "rating"
) -> dict[Any, list[Number]]:
    """Bucket review rows by `key`. Rows with a NULL rating are skipped."""
    grouped: dict[Any, list[Number]] = defaultdict(list)
    for row in rows:
        rating = getattr(row, rating_attr)
        if rating is None:
            continue
        grouped[getattr(row, key)].append(rating)
    return dict(grouped)
