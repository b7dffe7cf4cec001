"""
Page-count categories.
"""

import math
from dataclasses import dataclass
from typing import List

from ..models.book import Book
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode, mean, round_half_up
from .styles import ThemeTokens, border_defaults


@dataclass
class PageCountStats:
    category: str
    count: int
    avg_pages: int
    min_pages: int
    max_pages: int


PAGE_CATEGORIES = (
    ("Short (< 200)", 1, 199),
    ("Medium (200-400)", 200, 400),
    ("Long (401-600)", 401, 600),
    ("Very Long (601-800)", 601, 800),
    ("Epic (> 800)", 801, math.inf),
)

PAGE_COUNT_COLORS = {
    "Short (< 200)": "#81C784",
    "Medium (200-400)": "#4FC3F7",
    "Long (401-600)": "#FFB74D",
    "Very Long (601-800)": "#F06292",
    "Epic (> 800)": "#BA68C8",
}


def calculate_page_count_stats(books: List[Book]) -> List[PageCountStats]:
    """
    Bucket books by page count.

    Books without a positive page count are left out entirely, and
    categories nobody falls into are dropped from the result.
    """
    page_counts = [b.metadata.page_count for b in books if b.metadata.page_count and b.metadata.page_count > 0]

    stats = []
    for name, low, high in PAGE_CATEGORIES:
        members = [pages for pages in page_counts if low <= pages <= high]
        if not members:
            continue
        stats.append(PageCountStats(
            category=name,
            count=len(members),
            avg_pages=round_half_up(mean(members)),
            min_pages=min(members),
            max_pages=max(members),
        ))
    return stats


def build_page_count_series(stats: List[PageCountStats], tokens: ThemeTokens):
    labels = [s.category for s in stats]
    series = ChartSeries(
        name="Books by Page Count",
        values=[s.count for s in stats],
        style={"background_color": [PAGE_COUNT_COLORS[s.category] for s in stats], **border_defaults(tokens)},
    )
    return labels, [series]


PAGE_COUNT_RULE = StatisticRule(
    kind=StatKind.PAGE_COUNT,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_page_count_stats,
    build_series=build_page_count_series,
    x_title="Page Count Category",
    y_title="Number of Books",
)
