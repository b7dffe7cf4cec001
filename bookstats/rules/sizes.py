"""
Largest files in the collection.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..models.book import Book
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode, round_half_up, truncate_label
from .styles import FALLBACK_COLOR, ThemeTokens

TOP_BOOKS_BY_SIZE = 20

BOOK_TYPE_COLORS = {
    "PDF": "#e74c3c",
    "EPUB": "#3498db",
    "CBZ": "#27a153",
    "CBX": "#d4b50f",
    "CBR": "#e67e22",
    "CB7": "#9b59b6",
}


@dataclass
class BookSizeStats:
    title: str
    size_mb: float
    book_type: Optional[str]
    page_count: Optional[int] = None


def book_type_color(book_type: Optional[str]) -> str:
    return BOOK_TYPE_COLORS.get(book_type or "", FALLBACK_COLOR)


def calculate_book_size_stats(books: List[Book]) -> List[BookSizeStats]:
    sized = [
        BookSizeStats(
            title=book.metadata.title or book.file_name or "Unknown Title",
            size_mb=round_half_up(book.file_size_kb / 1024, 2),
            book_type=book.book_type_name,
            page_count=book.metadata.page_count or None,
        )
        for book in books
        if book.file_size_kb and book.file_size_kb > 0
    ]
    sized.sort(key=lambda s: s.size_mb, reverse=True)
    return sized[:TOP_BOOKS_BY_SIZE]


def build_book_size_series(stats: List[BookSizeStats], tokens: ThemeTokens):
    labels = [truncate_label(s.title, 30) for s in stats]
    colors = [book_type_color(s.book_type) for s in stats]
    series = ChartSeries(
        name="File Size",
        values=[s.size_mb for s in stats],
        style={
            "background_color": colors,
            "border_color": list(colors),
            "border_width": 1,
            "hover_border_width": 2,
            "hover_border_color": tokens.text_color,
        },
    )
    return labels, [series]


BOOK_SIZE_RULE = StatisticRule(
    kind=StatKind.BOOK_SIZE,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_book_size_stats,
    build_series=build_book_size_series,
    # Borders carry the per-format colors, only the hover border follows the theme
    themed_style_fields=("hover_border_color",),
    index_axis="y",
    x_title="File Size (MB)",
)
