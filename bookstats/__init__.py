# bookstats/__init__.py
"""
Book collection statistics engine.

Primary interfaces:
- StatsDashboard: Wire every statistic to a collection, library filter and theme
- CollectionLoader: Load a collection export (JSON or CSV) into Book records
- RecomputationController: Keep one statistic's view model up to date

Rule interfaces:
- ALL_RULES / get_rule: The pure aggregation rules, one per statistic
"""

from .config import StatsConfig, configure_logging
from .models import (
    Book,
    BookMetadata,
    BookType,
    ChartSeries,
    ReadingProgress,
    ReadStatus,
    RenderConfig,
    StatKind,
    ThemeMode,
    ViewModel,
)
from .pipeline import CollectionLoader, StatsDashboard, StatsLoadError
from .reactive import (
    CollectionState,
    ControllerState,
    RecomputationController,
    StateSource,
    ThemeSignal,
)
from .rules import ALL_RULES, StatisticRule, TriggerMode, filter_books_by_library, get_rule

__version__ = "1.0.0"

__all__ = [
    # Primary interface
    "StatsDashboard",
    "CollectionLoader",
    "StatsLoadError",
    "RecomputationController",
    "ControllerState",
    "StatsConfig",
    "configure_logging",

    # Models
    "Book",
    "BookMetadata",
    "BookType",
    "ReadingProgress",
    "ReadStatus",
    "ChartSeries",
    "RenderConfig",
    "StatKind",
    "ThemeMode",
    "ViewModel",

    # Reactive plumbing
    "CollectionState",
    "StateSource",
    "ThemeSignal",

    # Rules
    "ALL_RULES",
    "StatisticRule",
    "TriggerMode",
    "filter_books_by_library",
    "get_rule"
]
