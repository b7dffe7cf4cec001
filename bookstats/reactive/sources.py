"""
Observable state sources.

A StateSource holds a current value and pushes every new value to its
subscribers, replaying the current value on subscribe. The collection store,
the library filter, the theme signal and each published view model are all
StateSources.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Generic, List, Optional, TypeVar

from ..models.book import Book

T = TypeVar("T")


@dataclass(frozen=True)
class CollectionState:
    """Snapshot emitted by the collection store"""
    loaded: bool = False
    books: List[Book] = field(default_factory=list)

    @property
    def is_usable(self) -> bool:
        """Loaded and holding at least one book"""
        return self.loaded and isinstance(self.books, list) and len(self.books) > 0


class Subscription:
    """Handle returned by StateSource.subscribe; unsubscribe() is idempotent"""

    def __init__(self, source: "StateSource", observer: "_Observer"):
        self._source = source
        self._observer = observer
        self.closed = False

    def unsubscribe(self) -> None:
        if not self.closed:
            self.closed = True
            self._source._remove(self._observer)


@dataclass(eq=False)
class _Observer(Generic[T]):
    on_next: Callable[[T], None]
    on_error: Optional[Callable[[Exception], None]] = None


class StateSource(Generic[T]):
    """
    Current-value stream with synchronous delivery.

    Subscribers are called in subscription order. A failing subscriber is
    logged and does not stop delivery to the others. ``fail`` ends the stream:
    every subscriber's error callback runs once and no further values flow.
    """

    def __init__(self, initial: T, name: Optional[str] = None):
        self._value = initial
        self._observers: List[_Observer] = []
        self._error: Optional[Exception] = None
        self._pending: Deque[T] = deque()
        self._emitting = False
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def value(self) -> T:
        return self._value

    @property
    def failed(self) -> bool:
        return self._error is not None

    @property
    def subscriber_count(self) -> int:
        return len(self._observers)

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_error: Optional[Callable[[Exception], None]] = None,
        replay: bool = True,
    ) -> Subscription:
        """
        Register a subscriber.

        Args:
            on_next: Called with each value
            on_error: Called once if the source fails
            replay: Deliver the current value immediately

        Returns:
            Subscription handle
        """
        observer = _Observer(on_next=on_next, on_error=on_error)
        subscription = Subscription(self, observer)

        if self._error is not None:
            self._deliver_error(observer, self._error)
            subscription.closed = True
            return subscription

        self._observers.append(observer)
        if replay:
            self._deliver(observer, self._value)
        return subscription

    def emit(self, value: T) -> None:
        """
        Push a new value to every subscriber.

        A value emitted from inside a subscriber is queued and delivered once
        every subscriber has seen the current one.
        """
        if self._error is not None:
            self.logger.warning(f"{self.name}: ignoring value emitted after failure")
            return
        self._pending.append(value)
        if self._emitting:
            return

        self._emitting = True
        try:
            while self._pending and self._error is None:
                current = self._pending.popleft()
                self._value = current
                for observer in list(self._observers):
                    if observer in self._observers:
                        self._deliver(observer, current)
        finally:
            self._emitting = False

    def fail(self, error: Exception) -> None:
        if self._error is not None:
            return
        self._error = error
        self._pending.clear()
        observers, self._observers = self._observers, []
        for observer in observers:
            self._deliver_error(observer, error)

    def _remove(self, observer: _Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _deliver(self, observer: _Observer, value: T) -> None:
        try:
            observer.on_next(value)
        except Exception as e:
            self.logger.error(f"{self.name}: subscriber failed: {e}")

    def _deliver_error(self, observer: _Observer, error: Exception) -> None:
        if observer.on_error is None:
            self.logger.error(f"{self.name}: stream failed with no error handler: {error}")
            return
        try:
            observer.on_error(error)
        except Exception as e:
            self.logger.error(f"{self.name}: error handler failed: {e}")
