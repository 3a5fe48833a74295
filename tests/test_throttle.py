"""Tests for the publish throttle."""

import pytest

from landing_publisher.publish import InMemoryThrottle


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


class TestInMemoryThrottle:
    """Tests for InMemoryThrottle."""

    def test_unknown_slug_not_throttled(self, clock):
        """A slug never published has no cooldown."""
        throttle = InMemoryThrottle(clock=clock)

        assert throttle.remaining("acme") == 0

    def test_cooldown_after_record(self, clock):
        """Recording starts a 15 second cooldown."""
        throttle = InMemoryThrottle(clock=clock)
        throttle.record("acme")
        clock.advance(4.2)

        assert throttle.remaining("acme") == pytest.approx(10.8)
        assert throttle.remaining("other") == 0

    def test_cooldown_expires(self, clock):
        """After the window the slug may publish again."""
        throttle = InMemoryThrottle(clock=clock)
        throttle.record("acme")
        clock.advance(15)

        assert throttle.remaining("acme") == 0

    def test_window_is_configurable(self, clock):
        """The window length comes from configuration."""
        throttle = InMemoryThrottle(window=2, clock=clock)
        throttle.record("acme")
        clock.advance(1)

        assert throttle.remaining("acme") == pytest.approx(1)

    def test_sweep_evicts_stale_entries(self, clock):
        """Entries older than the cleanup age are removed."""
        throttle = InMemoryThrottle(clock=clock)
        throttle.record("old")
        clock.advance(61)
        throttle.record("new")

        assert len(throttle) == 1
        assert throttle.sweep() == 0

    def test_explicit_sweep(self, clock):
        """sweep returns the number of evicted entries."""
        throttle = InMemoryThrottle(window=1, cleanup_after=5, clock=clock)
        throttle.record("a")
        throttle.record("b")
        clock.advance(6)

        assert throttle.sweep() == 2
        assert len(throttle) == 0

    def test_cleanup_never_shorter_than_window(self, clock):
        """Entries are never evicted while still cooling down."""
        throttle = InMemoryThrottle(window=30, cleanup_after=10, clock=clock)
        throttle.record("acme")
        clock.advance(20)

        assert throttle.remaining("acme") == pytest.approx(10)
