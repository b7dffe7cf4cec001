"""
Chart-agnostic view models published for each statistic.

The numeric payload (labels, series values, per-entry metadata) is kept apart
from the style payload so a theme change can swap styles without touching
counts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class StatKind(str, Enum):
    BOOK_RATING = "book_rating"
    PERSONAL_RATING = "personal_rating"
    PAGE_COUNT = "page_count"
    BOOK_SIZE = "book_size"
    PUBLICATION_YEAR = "publication_year"
    READING_PROGRESS = "reading_progress"
    READING_COMPLETION = "reading_completion"
    SERIES_COMPLETION = "series_completion"
    SERIES_STANDALONE = "series_standalone"
    TOP_CATEGORIES = "top_categories"
    TOP_SERIES = "top_series"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass
class ChartSeries:
    """One dataset: a name, values aligned to the view model labels, and style"""
    name: str
    values: List[float]
    style: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ViewModel:
    """
    Published payload for one statistic.

    ``entries`` carries the raw stat row behind each label so a renderer can
    build tooltips without asking the controller for its last computation.
    """

    kind: StatKind
    chart_type: str
    labels: List[str] = field(default_factory=list)
    series: List[ChartSeries] = field(default_factory=list)
    entries: List[Dict[str, Any]] = field(default_factory=list)
    theme: ThemeMode = ThemeMode.LIGHT

    @classmethod
    def empty(cls, kind: StatKind, chart_type: str = "bar", theme: ThemeMode = ThemeMode.LIGHT) -> "ViewModel":
        return cls(kind=kind, chart_type=chart_type, theme=theme)

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def series_by_name(self, name: str) -> Optional[ChartSeries]:
        for series in self.series:
            if series.name == name:
                return series
        return None

    def to_dashboard_dict(self) -> Dict[str, Any]:
        """JSON-ready dictionary for a renderer or a debug dump"""
        return {
            "kind": self.kind.value,
            "chart_type": self.chart_type,
            "theme": self.theme.value,
            "labels": list(self.labels),
            "series": [
                {"name": s.name, "values": list(s.values), "style": dict(s.style)}
                for s in self.series
            ],
            "entries": [dict(entry) for entry in self.entries],
        }


@dataclass
class RenderConfig:
    """
    Static render configuration for a chart (axes, layout, theme colors).

    Only ``colors`` depends on the theme; everything else is fixed per rule.
    """

    kind: StatKind
    chart_type: str
    index_axis: str = "x"
    x_title: Optional[str] = None
    y_title: Optional[str] = None
    stacked: bool = False
    show_legend: bool = False
    colors: Dict[str, str] = field(default_factory=dict)
