"""
Data models for the book statistics engine.
"""

from .book import Book, BookMetadata, BookType, ReadingProgress, ReadStatus
from .view_model import ChartSeries, RenderConfig, StatKind, ThemeMode, ViewModel

__all__ = [
    "Book",
    "BookMetadata",
    "BookType",
    "ReadingProgress",
    "ReadStatus",
    "ChartSeries",
    "RenderConfig",
    "StatKind",
    "ThemeMode",
    "ViewModel"
]
