"""Caching utilities for weather lookups and generated insights."""

import hashlib
import json
from functools import wraps
from typing import Any, Callable

from cachetools import TTLCache

CACHE_TTL_FORECAST_SECONDS = 1800  # 30 minutes, forecasts update hourly
CACHE_TTL_VERY_LONG_SECONDS = 86400  # 24 hours for archive data and insights

_forecast_cache: TTLCache = TTLCache(maxsize=500, ttl=CACHE_TTL_FORECAST_SECONDS)
# Archive data for past years does not change
_historical_cache: TTLCache = TTLCache(maxsize=1000, ttl=CACHE_TTL_VERY_LONG_SECONDS)
_insights_cache: TTLCache = TTLCache(maxsize=500, ttl=CACHE_TTL_VERY_LONG_SECONDS)


def get_cache_key(*args, **kwargs) -> str:
    """Generate a cache key from function arguments."""
    key_data = json.dumps({"args": args, "kwargs": kwargs}, sort_keys=True, default=str)
    # MD5 is used here only for cache key generation, not for security purposes
    return hashlib.md5(key_data.encode(), usedforsecurity=False).hexdigest()


def _cached_in(cache: TTLCache) -> Callable[[Callable], Callable]:
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = get_cache_key(func.__qualname__, *args, **kwargs)
            if cache_key in cache:
                return cache[cache_key]
            # Exceptions propagate before anything is stored
            result = func(*args, **kwargs)
            cache[cache_key] = result
            return result

        return wrapper

    return decorator


def cached_forecast(func: Callable) -> Callable:
    """Cache decorator for forecast lookups (30-minute TTL)."""
    return _cached_in(_forecast_cache)(func)


def cached_historical(func: Callable) -> Callable:
    """Cache decorator for multi-year historical averages (24-hour TTL)."""
    return _cached_in(_historical_cache)(func)


def get_insights_cache() -> TTLCache:
    """Get the insights cache for direct access."""
    return _insights_cache


def get_historical_cache() -> TTLCache:
    """Get the historical cache for direct access."""
    return _historical_cache


def clear_all_caches() -> None:
    """Clear all caches. Useful for testing."""
    _forecast_cache.clear()
    _historical_cache.clear()
    _insights_cache.clear()
