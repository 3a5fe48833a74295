"""Short per-slug cooldown between publishes.

This guards against accidental double submission, not abuse. The
in-memory implementation is per process; deployments running several
instances should supply a PublishThrottle backed by a shared store.
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Callable


class PublishThrottle(ABC):
    """Tracks when each slug was last published."""

    @abstractmethod
    def remaining(self, slug: str) -> float:
        """Seconds left in the slug's cooldown, or 0 if it may publish."""
        pass

    @abstractmethod
    def record(self, slug: str) -> None:
        """Start a new cooldown for the slug."""
        pass

    @abstractmethod
    def sweep(self) -> int:
        """Evict stale entries. Returns the number evicted."""
        pass


class InMemoryThrottle(PublishThrottle):
    """Process-local throttle map, swept lazily as it is used.

    Args:
        window: Cooldown in seconds
        cleanup_after: Age in seconds after which entries are evicted
        clock: Monotonic time source, replaceable in tests
    """

    def __init__(
        self,
        window: float = 15.0,
        cleanup_after: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window = window
        self.cleanup_after = max(cleanup_after, window)
        self._clock = clock
        self._last_publish: dict[str, float] = {}
        self._last_sweep = clock()

    def __len__(self) -> int:
        return len(self._last_publish)

    def _maybe_sweep(self) -> None:
        if self._clock() - self._last_sweep >= self.cleanup_after:
            self.sweep()

    def remaining(self, slug: str) -> float:
        self._maybe_sweep()
        last = self._last_publish.get(slug)
        if last is None:
            return 0.0
        return max(0.0, self.window - (self._clock() - last))

    def record(self, slug: str) -> None:
        self._maybe_sweep()
        self._last_publish[slug] = self._clock()

    def sweep(self) -> int:
        now = self._clock()
        stale = [
            slug
            for slug, last in self._last_publish.items()
            if now - last > self.cleanup_after
        ]
        for slug in stale:
            del self._last_publish[slug]
        self._last_sweep = now
        return len(stale)
