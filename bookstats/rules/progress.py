"""
Reading-progress histogram across the whole collection.
"""

import math
from dataclasses import dataclass
from typing import List, NamedTuple

from ..models.book import Book
from ..models.view_model import ChartSeries, StatKind
from .base import StatisticRule, TriggerMode
from .styles import ThemeTokens, border_defaults


class ProgressRange(NamedTuple):
    label: str
    min: int
    max: int
    description: str


@dataclass
class ReadingProgressStats:
    progress_range: str
    count: int
    description: str


PROGRESS_RANGES = (
    ProgressRange("0%", 0, 0, "Not Started"),
    ProgressRange("1-25%", 1, 25, "Just Started"),
    ProgressRange("26-50%", 26, 50, "Getting Into It"),
    ProgressRange("51-75%", 51, 75, "Halfway Through"),
    ProgressRange("76-99%", 76, 99, "Almost Finished"),
    ProgressRange("100%", 100, 100, "Completed"),
)

PROGRESS_COLORS = ("#6c757d", "#ffc107", "#fd7e14", "#17a2b8", "#6f42c1", "#28a745")


def book_progress(book: Book) -> float:
    """
    Percentage from the first progress record that has one.

    Records are checked pdf, epub, cbx, koreader, kobo; no record means 0.
    """
    for record in book.progress_records:
        if record is not None and record.percentage is not None:
            return record.percentage
    return 0


def progress_bucket(progress: float) -> ProgressRange:
    """
    Range for a percentage.

    Fractions round down so a bucket never claims more progress than was
    made: 99.6 is still "76-99%", and anything above zero is at least "1-25%".
    """
    progress = min(max(progress, 0), 100)
    probe = 1 if 0 < progress < 1 else math.floor(progress)
    for progress_range in PROGRESS_RANGES:
        if progress_range.min <= probe <= progress_range.max:
            return progress_range
    raise ValueError(f"Progress {progress} fell outside every range")


def calculate_reading_progress_stats(books: List[Book]) -> List[ReadingProgressStats]:
    """Every range is reported, including empty ones"""
    if not books:
        return []

    counts = {r.label: 0 for r in PROGRESS_RANGES}
    for book in books:
        counts[progress_bucket(book_progress(book)).label] += 1

    return [
        ReadingProgressStats(progress_range=r.label, count=counts[r.label], description=r.description)
        for r in PROGRESS_RANGES
    ]


def build_reading_progress_series(stats: List[ReadingProgressStats], tokens: ThemeTokens):
    labels = [s.progress_range for s in stats]
    series = ChartSeries(
        name="Books by Progress",
        values=[s.count for s in stats],
        style={"background_color": list(PROGRESS_COLORS), **border_defaults(tokens)},
    )
    return labels, [series]


READING_PROGRESS_RULE = StatisticRule(
    kind=StatKind.READING_PROGRESS,
    chart_type="bar",
    trigger=TriggerMode.FIRST_LOAD_THEN_FILTER,
    calculate=calculate_reading_progress_stats,
    build_series=build_reading_progress_series,
    x_title="Progress Range",
    y_title="Number of Books",
)
