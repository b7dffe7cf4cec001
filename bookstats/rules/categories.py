"""
Category-based statistics: top categories and reading completion per category.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from ..models.book import Book, ReadStatus
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode, truncate_label
from .styles import ThemeTokens, border_defaults

UNCATEGORIZED = "Uncategorized"
TOP_CATEGORIES = 15
TOP_COMPLETION_CATEGORIES = 25

CATEGORY_COLORS = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FECA57",
    "#FF9FF3", "#54A0FF", "#5F27CD", "#00D2D3", "#FF9F43",
    "#FF6348", "#2ED573", "#3742FA", "#F368E0", "#FF3838",
    "#FF4757", "#5352ED", "#70A1FF", "#7F8FA6", "#40407A",
    "#2C2C54", "#40407A", "#706FD3", "#F97F51", "#F8B500",
)

CATEGORY_HOVER_COLORS = (
    "#FF5252", "#26A69A", "#2196F3", "#66BB6A", "#FFB74D",
    "#E91E63", "#3F51B5", "#9C27B0", "#00BCD4", "#FF9800",
    "#F44336", "#4CAF50", "#2196F3", "#E91E63", "#FF5722",
    "#FF4081", "#3F51B5", "#5C6BC0", "#607D8B", "#303F9F",
    "#1A237E", "#303F9F", "#5E35B1", "#FF6F00", "#E65100",
)

READ_STATUS_COLORS = {
    ReadStatus.READ: "#2ecc71",
    ReadStatus.READING: "#f39c12",
    ReadStatus.RE_READING: "#9b59b6",
    ReadStatus.PARTIALLY_READ: "#e67e22",
    ReadStatus.PAUSED: "#34495e",
    ReadStatus.UNREAD: "#4169e1",
    ReadStatus.WONT_READ: "#95a5a6",
    ReadStatus.ABANDONED: "#e74c3c",
    ReadStatus.UNSET: "#3498db",
}


@dataclass
class CategoryStats:
    category: str
    count: int


@dataclass
class CompletionStats:
    category: str
    read_status_counts: Dict[str, int] = field(default_factory=dict)
    total: int = 0


def book_categories(book: Book) -> List[str]:
    """Distinct, non-empty category labels in their original order"""
    return list(dict.fromkeys(c for c in book.metadata.categories if c))


def calculate_top_category_stats(books: List[Book]) -> List[CategoryStats]:
    counts = Counter()
    for book in books:
        counts.update(book_categories(book))

    # Counter.most_common keeps first-seen order among equal counts
    return [CategoryStats(category=name, count=count) for name, count in counts.most_common(TOP_CATEGORIES)]


def calculate_reading_completion_stats(books: List[Book]) -> List[CompletionStats]:
    """
    Read-status breakdown for the largest categories.

    A book without categories is counted under "Uncategorized"; a book in
    several categories is counted once in each.
    """
    by_category: Dict[str, CompletionStats] = {}

    for book in books:
        status = book.status.value
        for category in book_categories(book) or [UNCATEGORIZED]:
            stats = by_category.get(category)
            if stats is None:
                stats = CompletionStats(
                    category=category,
                    read_status_counts={s.value: 0 for s in ReadStatus},
                )
                by_category[category] = stats
            stats.read_status_counts[status] += 1
            stats.total += 1

    ranked = sorted(
        (s for s in by_category.values() if s.total > 0),
        key=lambda s: s.total,
        reverse=True,
    )
    return ranked[:TOP_COMPLETION_CATEGORIES]


def build_top_category_series(stats: List[CategoryStats], tokens: ThemeTokens):
    labels = [s.category for s in stats]
    series = ChartSeries(
        name="Books",
        values=[s.count for s in stats],
        style={
            "background_color": list(CATEGORY_COLORS),
            "hover_background_color": list(CATEGORY_HOVER_COLORS),
            **border_defaults(tokens),
        },
    )
    return labels, [series]


def build_reading_completion_series(stats: List[CompletionStats], tokens: ThemeTokens):
    labels = [truncate_label(s.category, 20, keep=15, suffix="..") for s in stats]
    series = [
        ChartSeries(
            name=status.display_name,
            values=[s.read_status_counts.get(status.value, 0) for s in stats],
            style={
                "background_color": READ_STATUS_COLORS[status],
                "border_color": tokens.text_color,
                "hover_border_width": 1,
                "hover_border_color": tokens.text_color,
            },
        )
        for status in ReadStatus
    ]
    return labels, series


TOP_CATEGORIES_RULE = StatisticRule(
    kind=StatKind.TOP_CATEGORIES,
    chart_type="bar",
    trigger=TriggerMode.EVERY_EMISSION,
    calculate=calculate_top_category_stats,
    build_series=build_top_category_series,
    index_axis="y",
    x_title="Number of Books",
)

READING_COMPLETION_RULE = StatisticRule(
    kind=StatKind.READING_COMPLETION,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_reading_completion_stats,
    build_series=build_reading_completion_series,
    x_title="Categories",
    y_title="Number of Books",
    stacked=True,
    show_legend=True,
)
