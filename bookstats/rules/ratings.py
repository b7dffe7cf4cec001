"""
Rating histograms: averaged external rating (0-5) and personal rating (1-10).
"""

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Sequence, Tuple

from ..models.book import Book
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode, mean, round_half_up
from .styles import ThemeTokens, border_defaults

NO_RATING = "No Rating"


class RatingRange(NamedTuple):
    label: str
    min: float
    max: float


@dataclass
class RatingStats:
    rating_range: str
    count: int
    average_rating: float


EXTERNAL_RATING_RANGES: Tuple[RatingRange, ...] = (
    RatingRange("1.0-1.9", 1.0, 1.9),
    RatingRange("2.0-2.9", 2.0, 2.9),
    RatingRange("3.0-3.9", 3.0, 3.9),
    RatingRange("4.0-4.5", 4.0, 4.5),
    RatingRange("4.6-5.0", 4.6, 5.0),
)

EXTERNAL_RATING_COLORS = (
    "#DC2626",  # 1.0-1.9
    "#EA580C",  # 2.0-2.9
    "#F59E0B",  # 3.0-3.9
    "#16A34A",  # 4.0-4.5
    "#2563EB",  # 4.6-5.0
)

PERSONAL_RATING_RANGES: Tuple[RatingRange, ...] = tuple(
    RatingRange(str(score), float(score), float(score)) for score in range(1, 11)
)

PERSONAL_RATING_COLORS = (
    "#DC2626", "#EA580C", "#F59E0B", "#EAB308", "#FACC15",
    "#BEF264", "#65A30D", "#16A34A", "#059669", "#2563EB",
)


def effective_external_rating(book: Book) -> float:
    """
    Mean of the named external ratings, else the generic rating, else 0.
    """
    ratings = book.metadata.external_ratings
    if ratings:
        return sum(ratings) / len(ratings)
    return book.metadata.rating or 0


def personal_rating(book: Book) -> float:
    return book.personal_rating or 0


def bucket_ratings(
    values: Sequence[float],
    ranges: Sequence[RatingRange],
    resolution: int,
) -> List[RatingStats]:
    """
    Assign rating values to ranges, first match wins.

    Zero goes straight to "No Rating". Other values are rounded to
    ``resolution`` decimals for the range test only; averages use the raw
    value. A value outside every range is counted under "No Rating" too, so
    the bucket counts always add up to ``len(values)``.

    Returns:
        One RatingStats per range, followed by the "No Rating" bucket
    """
    assigned: Dict[str, List[float]] = {r.label: [] for r in ranges}
    no_rating = 0

    for value in values:
        if not value:
            no_rating += 1
            continue

        probe = round_half_up(value, resolution)
        for rating_range in ranges:
            if rating_range.min <= probe <= rating_range.max:
                assigned[rating_range.label].append(value)
                break
        else:
            no_rating += 1

    stats = [
        RatingStats(
            rating_range=r.label,
            count=len(assigned[r.label]),
            average_rating=mean(assigned[r.label]),
        )
        for r in ranges
    ]
    stats.append(RatingStats(rating_range=NO_RATING, count=no_rating, average_rating=0))
    return stats


def count_external_ratings(books: List[Book]) -> List[RatingStats]:
    """All external rating buckets including the internal "No Rating" one"""
    return bucket_ratings([effective_external_rating(b) for b in books], EXTERNAL_RATING_RANGES, 1)


def count_personal_ratings(books: List[Book]) -> List[RatingStats]:
    """All personal rating buckets including the internal "No Rating" one"""
    return bucket_ratings([personal_rating(b) for b in books], PERSONAL_RATING_RANGES, 0)


def calculate_external_rating_stats(books: List[Book]) -> List[RatingStats]:
    if not books:
        return []
    return [s for s in count_external_ratings(books) if s.rating_range != NO_RATING]


def calculate_personal_rating_stats(books: List[Book]) -> List[RatingStats]:
    if not books:
        return []
    return [s for s in count_personal_ratings(books) if s.rating_range != NO_RATING]


def _series_builder(series_name: str, palette: Sequence[str]):
    def build(stats: List[RatingStats], tokens: ThemeTokens):
        labels = [s.rating_range for s in stats]
        series = ChartSeries(
            name=series_name,
            values=[s.count for s in stats],
            style={"background_color": list(palette), **border_defaults(tokens)},
        )
        return labels, [series]
    return build


BOOK_RATING_RULE = StatisticRule(
    kind=StatKind.BOOK_RATING,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_external_rating_stats,
    build_series=_series_builder("Books by External Rating", EXTERNAL_RATING_COLORS),
    x_title="External Rating Range",
    y_title="Number of Books",
)

PERSONAL_RATING_RULE = StatisticRule(
    kind=StatKind.PERSONAL_RATING,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_personal_rating_stats,
    build_series=_series_builder("Books by Personal Rating", PERSONAL_RATING_COLORS),
    x_title="Personal Rating Range",
    y_title="Number of Books",
)
