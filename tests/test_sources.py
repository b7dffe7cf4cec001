"""
Tests for observable state sources.
"""

import logging

from bookstats.reactive import CollectionState, StateSource

from conftest import make_book


class TestStateSource:
    """Test current-value delivery."""

    def test_subscribe_replays_current_value(self):
        """Test that a new subscriber gets the current value first."""
        source = StateSource(1)
        received = []
        source.subscribe(received.append)
        source.emit(2)
        assert received == [1, 2]
        assert source.value == 2

    def test_subscribe_without_replay(self):
        """Test opting out of the replay."""
        source = StateSource(1)
        received = []
        source.subscribe(received.append, replay=False)
        source.emit(2)
        assert received == [2]

    def test_delivery_in_subscription_order(self):
        """Test that subscribers are called in the order they subscribed."""
        source = StateSource(0)
        calls = []
        source.subscribe(lambda v: calls.append(("first", v)), replay=False)
        source.subscribe(lambda v: calls.append(("second", v)), replay=False)
        source.emit(5)
        assert calls == [("first", 5), ("second", 5)]

    def test_unsubscribe_is_idempotent(self):
        """Test that an unsubscribed callback stops receiving values."""
        source = StateSource(0)
        received = []
        subscription = source.subscribe(received.append, replay=False)
        subscription.unsubscribe()
        subscription.unsubscribe()
        source.emit(1)
        assert received == []
        assert subscription.closed
        assert source.subscriber_count == 0

    def test_failing_subscriber_is_logged(self, caplog):
        """Test that one failing subscriber does not block the others."""
        source = StateSource(0, name="numbers")
        received = []

        def broken(value):
            raise RuntimeError("boom")

        source.subscribe(broken, replay=False)
        source.subscribe(received.append, replay=False)
        with caplog.at_level(logging.ERROR):
            source.emit(3)

        assert received == [3]
        assert "numbers: subscriber failed: boom" in caplog.text

    def test_fail_notifies_once_and_ends_stream(self):
        """Test that failure reaches error handlers and stops values."""
        source = StateSource(0)
        values, errors = [], []
        source.subscribe(values.append, errors.append, replay=False)

        error = ValueError("upstream")
        source.fail(error)
        source.fail(ValueError("again"))
        source.emit(1)

        assert errors == [error]
        assert values == []
        assert source.failed

    def test_subscribe_after_failure(self):
        """Test that late subscribers get the error immediately."""
        source = StateSource(0)
        source.fail(ValueError("gone"))
        errors = []
        subscription = source.subscribe(lambda v: None, errors.append)
        assert len(errors) == 1
        assert subscription.closed

    def test_unsubscribe_during_delivery(self):
        """Test that a subscriber removed mid-delivery is skipped."""
        source = StateSource(0)
        received = []
        holder = {}

        def first(value):
            holder["second"].unsubscribe()

        source.subscribe(first, replay=False)
        holder["second"] = source.subscribe(received.append, replay=False)
        source.emit(1)
        assert received == []

    def test_nested_emit_waits_for_current_delivery(self):
        """Test that a value emitted by a subscriber reaches everyone after the current one."""
        source = StateSource(0)
        first, second = [], []

        def relay(value):
            first.append(value)
            if value == 1:
                source.emit(2)

        def record(value):
            second.append((value, source.value))

        source.subscribe(relay, replay=False)
        source.subscribe(record, replay=False)
        source.emit(1)

        assert first == [1, 2]
        assert second == [(1, 1), (2, 2)]
        assert source.value == 2

    def test_fail_drops_queued_values(self):
        """Test that values queued behind a failure are never delivered."""
        source = StateSource(0)
        received = []

        def fail_on_one(value):
            if value == 1:
                source.emit(2)
                source.fail(RuntimeError("closed"))

        source.subscribe(fail_on_one, lambda e: None, replay=False)
        source.subscribe(received.append, lambda e: None, replay=False)
        source.emit(1)

        assert received == []
        assert source.value == 1


class TestCollectionState:
    """Test collection snapshots."""

    def test_default_is_not_usable(self):
        """Test the initial unloaded state."""
        assert not CollectionState().is_usable

    def test_loaded_but_empty_is_not_usable(self):
        """Test that an empty collection is not usable."""
        assert not CollectionState(loaded=True, books=[]).is_usable

    def test_loaded_with_books(self):
        """Test a usable snapshot."""
        assert CollectionState(loaded=True, books=[make_book()]).is_usable
        assert not CollectionState(loaded=False, books=[make_book()]).is_usable
