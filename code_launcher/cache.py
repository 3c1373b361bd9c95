import logging
import threading
import time
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from cachetools import TTLCache

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 300

_ENTRIES = "entries"


class CatalogCache(Generic[T]):
    """
    Read-through cache holding one catalog's entries for a fixed window.

    Thread-safe: the lock is held across the whole scan-and-replace, so a
    reader either gets the previous entries or waits for the new ones, never
    a partially built list. A failed scan is cached as an empty sequence so
    a broken source is not rescanned on every call.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: TTLCache = TTLCache(maxsize=1, ttl=ttl_seconds, timer=clock)
        self._lock = threading.Lock()
        self._last_refreshed = 0.0

    @property
    def last_refreshed(self) -> float:
        """POSIX time of the last refresh, 0.0 if never refreshed or invalidated."""
        return self._last_refreshed

    def get(self, loader: Callable[[], Sequence[T]]) -> list[T]:
        """
        Return cached entries, calling loader if the window has elapsed.

        Args:
            loader: Performs a full scan of the backing source.

        Returns:
            A fresh list of the cached entries.
        """
        with self._lock:
            entries = self._cache.get(_ENTRIES)
            if entries is not None:
                return list(entries)

            try:
                entries = tuple(loader())
            except Exception as e:
                logger.warning("Catalog scan failed, caching empty result: %s", e)
                entries = ()

            self._cache[_ENTRIES] = entries
            self._last_refreshed = self._clock()
            logger.debug("Catalog cache refreshed with %d entries", len(entries))
            return list(entries)

    def invalidate(self) -> None:
        """Drop cached entries so the next get() rescans."""
        with self._lock:
            self._cache.clear()
            self._last_refreshed = 0.0
