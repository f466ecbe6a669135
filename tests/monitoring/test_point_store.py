"""
Tests for PointStore eviction behaviour
"""

import logging

import pytest

from windowstats.models.sample import Sample
from windowstats.monitoring.point_store import PointStore


@pytest.fixture
def store():
    """Store with a 5 minute window."""
    return PointStore(window_seconds=300.0)


class TestAddPoint:
    """Test append + eviction on add_point()"""

    def test_points_inside_window_are_retained(self, store):
        for i in range(5):
            store.add_point(float(i), timestamp=1000.0 + i)

        assert len(store) == 5
        assert store.values() == [0.0, 1.0, 2.0, 3.0, 4.0]

    def test_expired_head_evicted_on_add(self, store):
        store.add_point(10.0, timestamp=0.0)
        store.add_point(20.0, timestamp=360.0)

        assert store.values() == [20.0]

    def test_sample_exactly_at_cutoff_is_evicted(self, store):
        """timestamp <= now - window counts as expired"""
        store.add_point(1.0, timestamp=0.0)
        store.add_point(2.0, timestamp=300.0)

        assert store.values() == [2.0]

    def test_sample_just_inside_cutoff_survives(self, store):
        store.add_point(1.0, timestamp=0.5)
        store.add_point(2.0, timestamp=300.0)

        assert store.values() == [1.0, 2.0]

    def test_scan_stops_at_first_survivor(self, store):
        store.add_point(1.0, timestamp=0.0)
        store.add_point(2.0, timestamp=100.0)
        store.add_point(3.0, timestamp=200.0)
        store.add_point(4.0, timestamp=350.0)

        # cutoff = 50: only the first sample is gone
        assert store.values() == [2.0, 3.0, 4.0]

    def test_all_expired_clears_to_new_sample(self, store):
        """No stale sample survives when every old sample is expired"""
        for i in range(10):
            store.add_point(float(i), timestamp=float(i))

        store.add_point(99.0, timestamp=10_000.0)

        assert store.values() == [99.0]
        assert len(store) == 1

    def test_default_timestamp_uses_wall_clock(self, store, monkeypatch):
        monkeypatch.setattr("windowstats.monitoring.point_store.time.time", lambda: 1234.5)
        store.add_point(3.0)

        assert next(iter(store)) == Sample(timestamp=1234.5, value=3.0)

    def test_values_are_stored_as_floats(self, store):
        store.add_point(3, timestamp=1)
        sample = store.oldest()
        assert isinstance(sample.value, float)
        assert isinstance(sample.timestamp, float)


class TestOutOfOrderTimestamps:
    """Timestamps going backwards are appended without re-sorting"""

    def test_backward_sample_appended_at_tail(self, store):
        store.add_point(1.0, timestamp=1000.0)
        store.add_point(2.0, timestamp=900.0)

        assert store.values() == [1.0, 2.0]

    def test_backward_sample_logged(self, store, caplog):
        store.add_point(1.0, timestamp=1000.0)
        with caplog.at_level(logging.DEBUG, logger="windowstats.monitoring.point_store"):
            store.add_point(2.0, timestamp=900.0)

        assert "Out-of-order sample" in caplog.text


class TestEvictExpired:
    """Test explicit eviction against an arbitrary reference time"""

    def test_returns_evicted_count(self, store):
        for i, ts in enumerate([10.0, 110.0, 210.0, 300.0]):
            store.add_point(float(i), timestamp=ts)

        assert store.evict_expired(now=550.0) == 3
        assert store.values() == [3.0]

    def test_evicts_everything_when_window_passed(self, store):
        store.add_point(1.0, timestamp=0.0)
        store.add_point(2.0, timestamp=10.0)

        assert store.evict_expired(now=10_000.0) == 2
        assert len(store) == 0
        assert store.oldest() is None

    def test_empty_store_is_noop(self, store):
        assert store.evict_expired(now=1e9) == 0


class TestMaxSamples:
    """Test optional sample cap"""

    def test_cap_keeps_newest(self):
        store = PointStore(window_seconds=3600.0, max_samples=3)
        for i in range(6):
            store.add_point(float(i), timestamp=float(i))

        assert store.values() == [3.0, 4.0, 5.0]

    def test_no_cap_by_default(self, store):
        for i in range(1000):
            store.add_point(float(i), timestamp=float(i) * 0.01)

        assert len(store) == 1000


class TestClear:
    def test_clear_empties_store(self, store):
        store.add_point(1.0, timestamp=1.0)
        store.clear()

        assert len(store) == 0
        assert store.values() == []
