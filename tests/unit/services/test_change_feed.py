"""Tests for the data change feed."""

from retail_pos.core.services.change_feed import (
    TOPIC_INVOICES,
    TOPIC_PRODUCTS,
    DataChangeFeed,
    get_change_feed,
    reset_change_feed,
)


class TestDataChangeFeed:
    def test_starts_at_zero(self):
        assert DataChangeFeed().version == 0

    def test_notify_bumps_version(self):
        feed = DataChangeFeed()
        assert feed.notify(TOPIC_INVOICES) == 1
        assert feed.notify(TOPIC_PRODUCTS) == 2
        assert feed.version == 2

    def test_listener_receives_topic_and_version(self):
        feed = DataChangeFeed()
        seen = []
        feed.subscribe(lambda topic, version: seen.append((topic, version)))

        feed.notify(TOPIC_INVOICES)

        assert seen == [(TOPIC_INVOICES, 1)]

    def test_unsubscribe(self):
        feed = DataChangeFeed()
        seen = []
        unsubscribe = feed.subscribe(lambda topic, version: seen.append(version))

        feed.notify(TOPIC_INVOICES)
        unsubscribe()
        feed.notify(TOPIC_INVOICES)

        assert seen == [1]

    def test_unsubscribe_twice_is_harmless(self):
        feed = DataChangeFeed()
        unsubscribe = feed.subscribe(lambda topic, version: None)
        unsubscribe()
        unsubscribe()

    def test_failing_listener_does_not_block_others(self):
        feed = DataChangeFeed()
        seen = []

        def broken(topic, version):
            raise RuntimeError("boom")

        feed.subscribe(broken)
        feed.subscribe(lambda topic, version: seen.append(version))

        assert feed.notify(TOPIC_INVOICES) == 1
        assert seen == [1]


class TestGlobalFeed:
    def test_singleton(self):
        assert get_change_feed() is get_change_feed()

    def test_reset(self):
        first = get_change_feed()
        first.notify(TOPIC_INVOICES)
        reset_change_feed()
        second = get_change_feed()
        assert second is not first
        assert second.version == 0
