"""Time-bounded cache for notification configuration lookups."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class CacheNamespace(str, Enum):
    """Groups of cached configuration that are invalidated together."""

    EVENT_TYPES = "event_types"
    ROUTES = "routes"
    POLICIES = "policies"
    PREFERENCES = "preferences"


class ConfigurationCache:
    """Cache read-mostly configuration for ``ttl_seconds``.

    Keys are tuples whose first element is a :class:`CacheNamespace`. A TTL of
    ``0`` disables caching so every lookup reaches the loader. Missing values
    (``None``) are cached like any other result.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be zero or positive")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[Hashable, ...], tuple[float, Any]] = {}
        self._generations: dict[CacheNamespace, int] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get_or_load(
        self,
        namespace: CacheNamespace,
        key: tuple[Hashable, ...],
        loader: Callable[[], T],
    ) -> T:
        """Return the cached value for ``key`` or store what ``loader`` returns.

        A value loaded while ``namespace`` was invalidated is returned but not
        stored, so the next lookup reloads it.
        """

        if self._ttl == 0:
            return loader()

        cache_key = (namespace, *key)
        now = self._clock()
        with self._lock:
            cached = self._entries.get(cache_key)
            if cached is not None and cached[0] > now:
                return cached[1]
            generation = self._generations.get(namespace, 0)

        value = loader()
        with self._lock:
            if self._generations.get(namespace, 0) == generation:
                self._entries[cache_key] = (now + self._ttl, value)
        return value

    def invalidate(self, namespace: CacheNamespace | None = None) -> None:
        """Drop ``namespace`` entries, or everything when no namespace is given."""

        with self._lock:
            if namespace is None:
                for member in CacheNamespace:
                    self._generations[member] = self._generations.get(member, 0) + 1
                self._entries.clear()
                return
            self._generations[namespace] = self._generations.get(namespace, 0) + 1
            for cache_key in [k for k in self._entries if k[0] == namespace]:
                del self._entries[cache_key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["CacheNamespace", "ConfigurationCache"]
