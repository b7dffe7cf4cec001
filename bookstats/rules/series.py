"""
Series statistics: completion progress, series vs standalone split, and the
most collected series.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.book import Book, ReadStatus
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode, mean, round_half_up, truncate_label
from .styles import ThemeTokens, border_defaults, cycle_colors

TOP_COMPLETION_SERIES = 15
TOP_SERIES = 20

READING_PROGRESS_COLOR = "#2ecc71"
COLLECTION_PROGRESS_COLOR = "#3498db"

STANDALONE_COLORS = (
    "#ff6b6b", "#4ecdc4", "#45b7d1", "#96ceb4", "#ffeaa7",
    "#dda0dd", "#98d8c8", "#ff7675", "#74b9ff", "#fdcb6e",
)

TOP_SERIES_COLORS = (
    "#4e79a7", "#f28e2c", "#e15759", "#76b7b2",
    "#59a14f", "#edc949", "#af7aa1", "#ff9da7",
    "#9c755f", "#bab0ab", "#5778a4", "#e69138",
    "#d62728", "#6aa7b8", "#54a24b", "#fdd247",
    "#b07aa1", "#ff9d9a", "#9e6762", "#c9b2d6",
)

STANDALONE_BOOKS = "Standalone Books"
SERIES_BOOKS = "Series Books"
COMPLETE_SERIES = "Complete Series"
INCOMPLETE_SERIES = "Incomplete Series"
UNKNOWN_SERIES = "Unknown Series Status"

CATEGORY_DESCRIPTIONS = {
    STANDALONE_BOOKS: "Books not part of any series",
    SERIES_BOOKS: "Books that are part of a series",
    COMPLETE_SERIES: "Books in complete series",
    INCOMPLETE_SERIES: "Books in incomplete series",
    UNKNOWN_SERIES: "Books with unclear series information",
}


@dataclass
class SeriesCompletionStats:
    series_name: str
    total_books: int
    owned_books: int
    read_books: int
    completion_percentage: int
    collection_percentage: int
    is_complete: bool
    average_rating: float


@dataclass
class SeriesSplitStats:
    category: str
    count: int
    percentage: float
    description: str


@dataclass
class TopSeriesStats:
    series_name: str
    book_count: int


def series_name(book: Book) -> Optional[str]:
    """Trimmed series name, None for standalone books"""
    name = (book.metadata.series_name or "").strip()
    return name or None


def group_by_series(books: List[Book]) -> Dict[str, List[Book]]:
    groups: Dict[str, List[Book]] = {}
    for book in books:
        name = series_name(book)
        if name:
            groups.setdefault(name, []).append(book)
    return groups


def member_rating(book: Book) -> float:
    """Personal rating, falling back to an external rating"""
    return book.personal_rating or book.metadata.goodreads_rating or 0


def summarize_series(name: str, books: List[Book]) -> SeriesCompletionStats:
    declared_totals = [b.metadata.series_total for b in books if b.metadata.series_total and b.metadata.series_total > 0]
    total = max(declared_totals) if declared_totals else len(books)

    owned = len(books)
    read = sum(1 for b in books if b.status == ReadStatus.READ)
    ratings = [r for r in (member_rating(b) for b in books) if r > 0]

    return SeriesCompletionStats(
        series_name=name,
        total_books=total,
        owned_books=owned,
        read_books=read,
        completion_percentage=round_half_up(read / total * 100) if total > 0 else 0,
        collection_percentage=round_half_up(owned / total * 100) if total > 0 else 100,
        is_complete=owned >= total,
        average_rating=round_half_up(mean(ratings), 1) if ratings else 0,
    )


def calculate_series_completion_stats(books: List[Book]) -> List[SeriesCompletionStats]:
    """
    Reading and collecting progress per series.

    Only groups with at least two owned books count as a series. Ranked by
    completion, then collection percentage; top 15.
    """
    stats = [
        summarize_series(name, members)
        for name, members in group_by_series(books).items()
        if len(members) > 1
    ]
    stats.sort(key=lambda s: (s.completion_percentage, s.collection_percentage), reverse=True)
    return stats[:TOP_COMPLETION_SERIES]


def _series_status(members: List[Book]) -> str:
    declared_total = members[0].metadata.series_total
    if declared_total and all(b.metadata.series_number for b in members):
        numbers = {b.metadata.series_number for b in members}
        return COMPLETE_SERIES if len(numbers) == declared_total else INCOMPLETE_SERIES
    return UNKNOWN_SERIES


def calculate_series_split_stats(books: List[Book]) -> List[SeriesSplitStats]:
    """
    Split the collection into standalone books and series books, with series
    books further split by whether their series looks complete.
    """
    if not books:
        return []

    counts = Counter({name: 0 for name in CATEGORY_DESCRIPTIONS})
    groups = group_by_series(books)

    counts[STANDALONE_BOOKS] = sum(1 for b in books if series_name(b) is None)
    for members in groups.values():
        counts[SERIES_BOOKS] += len(members)
        counts[_series_status(members)] += len(members)

    stats = [
        SeriesSplitStats(
            category=name,
            count=counts[name],
            percentage=round_half_up(counts[name] / len(books) * 100, 1),
            description=description,
        )
        for name, description in CATEGORY_DESCRIPTIONS.items()
        if counts[name] > 0
    ]
    stats.sort(key=lambda s: s.count, reverse=True)
    return stats


def calculate_top_series_stats(books: List[Book]) -> List[TopSeriesStats]:
    counts = Counter({name: len(members) for name, members in group_by_series(books).items()})
    return [TopSeriesStats(series_name=name, book_count=count) for name, count in counts.most_common(TOP_SERIES)]


def build_series_completion_series(stats: List[SeriesCompletionStats], tokens: ThemeTokens):
    labels = [truncate_label(s.series_name, 20, keep=17) for s in stats]
    borders = border_defaults(tokens, hover_border_width=1)
    series = [
        ChartSeries(
            name="Reading Progress",
            values=[s.completion_percentage for s in stats],
            style={"background_color": READING_PROGRESS_COLOR, **borders},
        ),
        ChartSeries(
            name="Collection Progress",
            values=[s.collection_percentage for s in stats],
            style={"background_color": COLLECTION_PROGRESS_COLOR, **borders},
        ),
    ]
    return labels, series


def build_series_split_series(stats: List[SeriesSplitStats], tokens: ThemeTokens):
    labels = [s.category for s in stats]
    series = ChartSeries(
        name="Books",
        values=[s.count for s in stats],
        style={
            "background_color": cycle_colors(STANDALONE_COLORS, len(stats)),
            **border_defaults(tokens, border_width=2, hover_border_width=3),
        },
    )
    return labels, [series]


def build_top_series_series(stats: List[TopSeriesStats], tokens: ThemeTokens):
    labels = [truncate_label(s.series_name, 30) for s in stats]
    colors = cycle_colors(TOP_SERIES_COLORS, len(stats))
    series = ChartSeries(
        name="Books",
        values=[s.book_count for s in stats],
        style={
            "background_color": colors,
            "border_color": list(colors),
            "border_width": 1,
            "hover_border_width": 2,
            "hover_border_color": tokens.text_color,
        },
    )
    return labels, [series]


SERIES_COMPLETION_RULE = StatisticRule(
    kind=StatKind.SERIES_COMPLETION,
    chart_type="bar",
    trigger=TriggerMode.EVERY_EMISSION,
    calculate=calculate_series_completion_stats,
    build_series=build_series_completion_series,
    x_title="Series",
    y_title="Completion %",
    show_legend=True,
)

SERIES_STANDALONE_RULE = StatisticRule(
    kind=StatKind.SERIES_STANDALONE,
    chart_type="polarArea",
    trigger=TriggerMode.EVERY_EMISSION,
    calculate=calculate_series_split_stats,
    build_series=build_series_split_series,
    show_legend=True,
)

TOP_SERIES_RULE = StatisticRule(
    kind=StatKind.TOP_SERIES,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_top_series_stats,
    build_series=build_top_series_series,
    themed_style_fields=("hover_border_color",),
    index_axis="y",
    x_title="Number of Books",
)
