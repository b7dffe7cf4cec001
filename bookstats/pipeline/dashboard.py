"""
Dashboard facade: one recomputation controller per statistic, wired to shared
collection, filter and theme sources.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models.book import Book, ReadStatus
from ..models.view_model import StatKind, ThemeMode, ViewModel
from ..reactive.controller import RecomputationController
from ..reactive.sources import CollectionState, StateSource
from ..reactive.theme import DEFAULT_DARK_CLASS, ThemeSignal
from ..rules import ALL_RULES, StatisticRule, filter_books_by_library
from ..rules.categories import book_categories
from ..rules.filtering import LibraryId
from ..rules.series import group_by_series


class StatsDashboard:
    """
    Owns the shared sources and the per-statistic controllers.

    The collection, filter and theme are pushed in through ``load_books``,
    ``select_library`` and ``set_theme``; each controller decides for itself
    whether that means a recomputation or a restyle.
    """

    def __init__(
        self,
        rules: Sequence[StatisticRule] = ALL_RULES,
        theme: ThemeMode = ThemeMode.LIGHT,
        library_id: Optional[LibraryId] = None,
        dark_class: str = DEFAULT_DARK_CLASS,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)

        self.collection_source: StateSource = StateSource(CollectionState(), name="collection")
        self.filter_source: StateSource = StateSource(library_id, name="library_filter")
        self.theme_signal = ThemeSignal(theme, dark_class=dark_class)

        self.controllers: Dict[StatKind, RecomputationController] = {
            rule.kind: RecomputationController(
                rule,
                self.collection_source,
                self.filter_source,
                theme_source=self.theme_signal,
                theme=theme,
            )
            for rule in rules
        }

    def start(self) -> "StatsDashboard":
        for controller in self.controllers.values():
            controller.start()
        self.logger.info(f"Started {len(self.controllers)} statistics")
        return self

    def stop(self) -> None:
        for controller in self.controllers.values():
            controller.stop()

    def load_books(self, books: Iterable[Book]) -> None:
        books = list(books)
        self.logger.info(f"Collection updated: {len(books)} books")
        self.collection_source.emit(CollectionState(loaded=True, books=books))

    def select_library(self, library_id: Optional[LibraryId]) -> None:
        self.logger.info(f"Library filter: {'all' if library_id is None else library_id}")
        self.filter_source.emit(library_id)

    def set_theme(self, mode: ThemeMode) -> None:
        self.theme_signal.set_mode(mode)

    def controller(self, kind: StatKind) -> RecomputationController:
        return self.controllers[StatKind(kind)]

    def view_models(self) -> Dict[StatKind, ViewModel]:
        return {kind: controller.view_model for kind, controller in self.controllers.items()}

    def filtered_books(self) -> List[Book]:
        state = self.collection_source.value
        return filter_books_by_library(state.books, self.filter_source.value)

    def summary(self) -> Dict[str, Any]:
        """
        Headline numbers for the currently selected library.

        Returns:
            Dictionary with summary statistics
        """
        books = self.filtered_books()
        rated = [b.personal_rating for b in books if b.personal_rating]
        categories = set()
        for book in books:
            categories.update(book_categories(book))

        return {
            "total_books": len(books),
            "read_books": sum(1 for b in books if b.status == ReadStatus.READ),
            "rated_books": len(rated),
            "average_personal_rating": sum(rated) / len(rated) if rated else None,
            "books_with_pages": sum(1 for b in books if b.metadata.page_count),
            "total_pages": sum(b.metadata.page_count for b in books if b.metadata.page_count and b.metadata.page_count > 0),
            "series_count": len(group_by_series(books)),
            "unique_categories": len(categories),
            "libraries": sorted({str(b.library_id) for b in books if b.library_id is not None}),
        }

    def to_dashboard_dict(self) -> Dict[str, Any]:
        """Full JSON-ready snapshot: summary, then each chart with its render config"""
        charts = {}
        for kind, controller in self.controllers.items():
            chart = controller.view_model.to_dashboard_dict()
            config = controller.render_config
            chart["config"] = {
                "index_axis": config.index_axis,
                "x_title": config.x_title,
                "y_title": config.y_title,
                "stacked": config.stacked,
                "show_legend": config.show_legend,
                "colors": dict(config.colors),
            }
            charts[kind.value] = chart

        return {
            "generated_at": datetime.now().isoformat(),
            "theme": self.theme_signal.value.value,
            "selected_library": self.filter_source.value,
            "summary": self.summary(),
            "charts": charts,
        }
