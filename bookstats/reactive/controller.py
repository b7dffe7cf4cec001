"""
Recomputation controller: decides when a rule is re-run and when the published
view model is only restyled.
"""

import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional

from ..models.view_model import RenderConfig, ThemeMode, ViewModel
from ..rules.base import StatisticRule, TriggerMode
from ..rules.filtering import LibraryId
from ..rules.styles import ThemeTokens
from .sources import CollectionState, StateSource, Subscription
from .theme import restyle_render_config, restyle_view_model


class ControllerState(str, Enum):
    IDLE = "idle"
    COMPUTING = "computing"
    PUBLISHED = "published"
    STOPPED = "stopped"


class RecomputationController:
    """
    Keeps one statistic's view model in sync with its sources.

    FIRST_LOAD_THEN_FILTER rules wait for the first loaded collection, drop
    their collection subscription, and recompute on each filter emission
    against the collection's current value. EVERY_EMISSION rules recompute on
    any collection or filter emission once both have delivered a value.
    Theme changes restyle the last view model without re-running the rule.
    """

    def __init__(
        self,
        rule: StatisticRule,
        collection_source: StateSource,
        filter_source: StateSource,
        theme_source: Optional[StateSource] = None,
        theme: ThemeMode = ThemeMode.LIGHT,
    ):
        self.rule = rule
        self.collection_source = collection_source
        self.filter_source = filter_source
        self.theme_source = theme_source
        self.logger = logging.getLogger(self.__class__.__name__)

        self._theme = ThemeMode(theme)
        self._state = ControllerState.IDLE
        self._started = False
        self._subscriptions: Dict[str, Subscription] = {}

        self._first_load_seen = False
        self._latest_collection: Optional[CollectionState] = None
        self._collection_seen = False
        self._latest_filter: Optional[LibraryId] = None
        self._filter_seen = False

        self._queue: Deque[Callable[[], None]] = deque()
        self._draining = False

        self._last_stats: List[Any] = []
        self._render_config = rule.render_config(self._theme)
        self.sink: StateSource = StateSource(
            rule.empty_view_model(self._theme), name=f"{rule.kind.value}_view_model"
        )

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def theme(self) -> ThemeMode:
        return self._theme

    @property
    def view_model(self) -> ViewModel:
        return self.sink.value

    @property
    def last_stats(self) -> List[Any]:
        return list(self._last_stats)

    @property
    def render_config(self) -> RenderConfig:
        return self._render_config

    def start(self) -> "RecomputationController":
        if self._state == ControllerState.STOPPED:
            raise RuntimeError(f"{self.rule.kind.value} controller was stopped and cannot restart")
        if self._started:
            return self
        self._started = True
        self.logger.debug(f"Starting {self.rule.kind.value} ({self.rule.trigger.value})")

        if self.theme_source is not None:
            self._subscriptions["theme"] = self.theme_source.subscribe(
                self._on_theme, lambda e: self._on_upstream_error("theme", e)
            )

        if self.rule.trigger == TriggerMode.FIRST_LOAD_THEN_FILTER:
            subscription = self.collection_source.subscribe(
                self._on_first_collection, lambda e: self._on_upstream_error("collection", e)
            )
            # The replayed value may already have been the first load
            if self._first_load_seen:
                subscription.unsubscribe()
            else:
                self._subscriptions["collection"] = subscription
        else:
            self._subscriptions["collection"] = self.collection_source.subscribe(
                self._on_collection, lambda e: self._on_upstream_error("collection", e)
            )
            self._subscribe_filter()
        return self

    def stop(self) -> None:
        if self._state == ControllerState.STOPPED:
            return
        for subscription in self._subscriptions.values():
            subscription.unsubscribe()
        self._subscriptions.clear()
        self._queue.clear()
        self._state = ControllerState.STOPPED
        self.logger.debug(f"Stopped {self.rule.kind.value}")

    def _subscribe_filter(self) -> None:
        if self._state == ControllerState.STOPPED:
            return
        self._subscriptions["filter"] = self.filter_source.subscribe(
            self._on_filter, lambda e: self._on_upstream_error("filter", e)
        )

    def _on_first_collection(self, collection: CollectionState) -> None:
        if self._first_load_seen or not getattr(collection, "loaded", False):
            return
        self._first_load_seen = True
        subscription = self._subscriptions.pop("collection", None)
        if subscription is not None:
            subscription.unsubscribe()
        self._subscribe_filter()

    def _on_collection(self, collection: CollectionState) -> None:
        self._latest_collection = collection
        self._collection_seen = True
        if self._filter_seen:
            self._schedule(self._recompute)

    def _on_filter(self, selected_library_id: Optional[LibraryId]) -> None:
        self._latest_filter = selected_library_id
        self._filter_seen = True
        if self.rule.trigger == TriggerMode.FIRST_LOAD_THEN_FILTER or self._collection_seen:
            self._schedule(self._recompute)

    def _on_theme(self, mode: ThemeMode) -> None:
        mode = ThemeMode(mode)
        if mode == self._theme:
            return
        self._theme = mode
        self._schedule(self._restyle)

    def _on_upstream_error(self, source_name: str, error: Exception) -> None:
        self.logger.error(f"{self.rule.kind.value}: {source_name} source failed: {error}")
        self.stop()

    def _schedule(self, task: Callable[[], None]) -> None:
        """Run ``task`` now, or after the task currently running"""
        if self._state == ControllerState.STOPPED:
            return
        self._queue.append(task)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue and self._state != ControllerState.STOPPED:
                self._queue.popleft()()
        finally:
            self._draining = False

    def _current_collection(self) -> Optional[CollectionState]:
        if self.rule.trigger == TriggerMode.FIRST_LOAD_THEN_FILTER:
            return self.collection_source.value
        return self._latest_collection

    def _recompute(self) -> None:
        self._state = ControllerState.COMPUTING
        collection = self._current_collection()

        if not _is_usable(collection):
            self._last_stats = []
            self._publish(self.rule.empty_view_model(self._theme))
            return

        try:
            stats, view_model = self.rule.evaluate(collection.books, self._latest_filter, self._theme)
        except Exception as e:
            self.logger.error(f"Error computing {self.rule.kind.value} stats: {e}")
            stats, view_model = [], self.rule.empty_view_model(self._theme)

        self._last_stats = stats
        self._publish(view_model)

    def _restyle(self) -> None:
        tokens = ThemeTokens.for_mode(self._theme)
        self._render_config = restyle_render_config(self._render_config, tokens)
        if self._state != ControllerState.PUBLISHED:
            return
        try:
            view_model = restyle_view_model(self.view_model, tokens, self.rule.themed_style_fields)
        except Exception as e:
            self.logger.error(f"Error restyling {self.rule.kind.value}: {e}")
            return
        self._publish(view_model)

    def _publish(self, view_model: ViewModel) -> None:
        self._state = ControllerState.PUBLISHED
        self.sink.emit(view_model)


def _is_usable(collection: Any) -> bool:
    if isinstance(collection, CollectionState):
        return collection.is_usable
    return False
