# core/cache.py

"""
In-memory TTL cache for data that every page load asks for
(dropdown lookup tables, stored role permissions).

Entries are grouped by key prefix so a write can drop a whole family,
e.g. cache_invalidate_prefix("roles") after a role is edited.
"""

import functools
from datetime import datetime, timedelta
from threading import Lock
from typing import Any, Callable, Optional, Union

from core.logging_config import logger


class CacheEntry:
    """A cached value and the moment it expires."""

    def __init__(self, value: Any, ttl_seconds: int):
        self.value = value
        self.expires_at = datetime.now() + timedelta(seconds=ttl_seconds)

    def is_expired(self) -> bool:
        return datetime.now() >= self.expires_at


class SimpleCache:
    """Thread-safe dict of CacheEntry objects."""

    def __init__(self):
        self._cache: dict[str, CacheEntry] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None if missing or expired."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None

            if entry.is_expired():
                del self._cache[key]
                return None

            return entry.value

    def set(self, key: str, value: Any, ttl_seconds: int = 60):
        # A non-positive TTL means "don't cache"
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._cache[key] = CacheEntry(value, ttl_seconds)

    def delete(self, key: str):
        with self._lock:
            self._cache.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with `prefix`. Returns how many were dropped."""
        with self._lock:
            doomed = [key for key in self._cache if key.startswith(prefix)]
            for key in doomed:
                del self._cache[key]
            return len(doomed)

    def clear(self):
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._cache)


# Global cache instance
_cache = SimpleCache()


def get_cache() -> SimpleCache:
    return _cache


def cached(key_prefix: str, ttl_seconds: Union[int, Callable[[], int]] = 60):
    """
    Decorator to cache function results under "<key_prefix>:<func>:<args>".

    `ttl_seconds` may be a callable so the TTL can follow settings.

    Example:
        @cached("lookups", ttl_seconds=lambda: settings.LOOKUP_CACHE_TTL_SECONDS)
        def get_dropdown_data():
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = f"{key_prefix}:{func.__name__}:{args!r}:{sorted(kwargs.items())!r}"

            cached_value = _cache.get(cache_key)
            if cached_value is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return cached_value

            result = func(*args, **kwargs)
            ttl = ttl_seconds() if callable(ttl_seconds) else ttl_seconds
            _cache.set(cache_key, result, ttl)
            logger.debug(f"Cache miss, stored: {cache_key}")

            return result

        return wrapper
    return decorator


def cache_get(key: str) -> Optional[Any]:
    return _cache.get(key)


def cache_set(key: str, value: Any, ttl_seconds: int = 60):
    _cache.set(key, value, ttl_seconds)


def cache_delete(key: str):
    _cache.delete(key)


def cache_invalidate_prefix(prefix: str) -> int:
    dropped = _cache.delete_prefix(f"{prefix}:")
    if dropped:
        logger.info(f"Cache invalidated: {dropped} '{prefix}' entries")
    return dropped


def cache_clear():
    """Clear all cache entries."""
    _cache.clear()
