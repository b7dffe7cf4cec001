"""
Books per publication year.
"""

import re
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..models.book import Book
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode
from .styles import ThemeTokens

EARLIEST_PUBLICATION_YEAR = 1800

YEAR_PATTERN = re.compile(r"(\d{4})")

LINE_COLOR = "#4ECDC4"
LINE_FILL = "rgba(78, 205, 196, 0.1)"


@dataclass
class PublicationYearStats:
    year: str
    count: int
    decade: str


def extract_year(date_text: Optional[str]) -> Optional[int]:
    """First run of four digits in a free-text date, or None"""
    if not date_text:
        return None
    match = YEAR_PATTERN.search(str(date_text))
    return int(match.group(1)) if match else None


def calculate_publication_year_stats(
    books: List[Book],
    current_year: Optional[int] = None,
) -> List[PublicationYearStats]:
    """
    Count books per publication year.

    Years outside [1800, current_year] are discarded and years without books
    are never filled in.

    Args:
        books: Filtered collection
        current_year: Upper bound, defaults to this year
    """
    latest = current_year or date.today().year

    year_counts = Counter()
    for book in books:
        year = extract_year(book.metadata.published_date)
        if year and EARLIEST_PUBLICATION_YEAR <= year <= latest:
            year_counts[year] += 1

    return [
        PublicationYearStats(year=str(year), count=count, decade=f"{year // 10 * 10}s")
        for year, count in sorted(year_counts.items())
    ]


def build_publication_year_series(stats: List[PublicationYearStats], tokens: ThemeTokens):
    labels = [s.year for s in stats]
    series = ChartSeries(
        name="Books Published",
        values=[s.count for s in stats],
        style={
            "border_color": LINE_COLOR,
            "background_color": LINE_FILL,
            "border_width": 2,
            "point_background_color": LINE_COLOR,
            "point_border_color": tokens.text_color,
            "point_border_width": 2,
            "point_radius": 4,
            "point_hover_radius": 6,
            "fill": True,
            "tension": 0.4,
        },
    )
    return labels, [series]


PUBLICATION_YEAR_RULE = StatisticRule(
    kind=StatKind.PUBLICATION_YEAR,
    chart_type="line",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_publication_year_stats,
    build_series=build_publication_year_series,
    themed_style_fields=("point_border_color",),
    x_title="Publication Year",
    y_title="Number of Books",
)
