"""
Common plumbing for statistics rules.

A rule pairs a pure ``calculate(books) -> stats`` function with the mapping
from those stats to chart series. ``StatisticRule.evaluate`` runs the library
filter first, so every rule is effectively ``(collection, filter) -> ViewModel``.
"""

from dataclasses import asdict, dataclass, is_dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..models.book import Book
from ..models.view_model import ChartSeries, RenderConfig, StatKind, ThemeMode, ViewModel
from .filtering import LibraryId, filter_books_by_library
from .styles import ThemeTokens


class TriggerMode(str, Enum):
    """When a controller recomputes a rule"""

    # Wait for the first loaded collection, then follow filter changes only
    FIRST_LOAD_THEN_FILTER = "first_load_then_filter"
    # Recompute on every collection or filter emission (combine-latest)
    EVERY_EMISSION = "every_emission"


SeriesBuilder = Callable[[List[Any], ThemeTokens], Tuple[List[str], List[ChartSeries]]]


@dataclass(frozen=True)
class StatisticRule:
    kind: StatKind
    chart_type: str
    trigger: TriggerMode
    calculate: Callable[[List[Book]], List[Any]]
    build_series: SeriesBuilder
    themed_style_fields: Tuple[str, ...] = ("border_color", "hover_border_color")
    index_axis: str = "x"
    x_title: Optional[str] = None
    y_title: Optional[str] = None
    stacked: bool = False
    show_legend: bool = False

    def evaluate(
        self,
        books: Sequence[Book],
        selected_library_id: Optional[LibraryId] = None,
        theme: ThemeMode = ThemeMode.LIGHT,
    ) -> Tuple[List[Any], ViewModel]:
        """
        Filter, aggregate and shape one statistic.

        Returns:
            (raw stats, view model)
        """
        filtered = filter_books_by_library(books, selected_library_id)
        stats = self.calculate(filtered)
        return stats, self.to_view_model(stats, theme)

    def empty_view_model(self, theme: ThemeMode = ThemeMode.LIGHT) -> ViewModel:
        return ViewModel.empty(self.kind, self.chart_type, ThemeMode(theme))

    def to_view_model(self, stats: List[Any], theme: ThemeMode = ThemeMode.LIGHT) -> ViewModel:
        if not stats:
            return self.empty_view_model(theme)

        tokens = ThemeTokens.for_mode(theme)
        labels, series = self.build_series(stats, tokens)
        return ViewModel(
            kind=self.kind,
            chart_type=self.chart_type,
            labels=labels,
            series=series,
            entries=[stat_to_dict(stat) for stat in stats],
            theme=tokens.mode,
        )

    def render_config(self, theme: ThemeMode = ThemeMode.LIGHT) -> RenderConfig:
        return RenderConfig(
            kind=self.kind,
            chart_type=self.chart_type,
            index_axis=self.index_axis,
            x_title=self.x_title,
            y_title=self.y_title,
            stacked=self.stacked,
            show_legend=self.show_legend,
            colors=ThemeTokens.for_mode(theme).config_colors(),
        )


def stat_to_dict(stat: Any) -> Dict[str, Any]:
    if is_dataclass(stat):
        return asdict(stat)
    return dict(stat)


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with halves going up (2.5 -> 3), unlike the built-in round().

    Goes through the decimal string so 1.005 rounds like it reads.
    """
    exponent = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence"""
    return sum(values) / len(values) if values else 0


def truncate_label(label: str, max_length: int, keep: Optional[int] = None, suffix: str = "...") -> str:
    """
    Shorten a label longer than ``max_length``.

    Args:
        label: Text to shorten
        max_length: Longest label left untouched
        keep: Characters kept before the suffix (defaults to max_length)
        suffix: Appended when the label is cut
    """
    if len(label) <= max_length:
        return label
    return label[: max_length if keep is None else keep] + suffix
