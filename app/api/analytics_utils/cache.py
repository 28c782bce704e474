"""
In-memory caching for the analytics summary endpoint.

Cache Configuration:
- TTL from STATS_CACHE_TTL_SECONDS (default 5 minutes)
- At most STATS_CACHE_MAX_ENTRIES entries (default 1024), oldest dropped first
- Cache key is (user_id, days, reference_date, basis) so a day rollover or a
  different window never reuses an old entry
- Expired entries are evicted on every write
- A successful append drops every entry of that user (read-your-writes)
- Uses monotonic() for TTL comparison (immune to system clock changes)
"""

import os
from datetime import date
from time import monotonic

STATS_CACHE_TTL_SECONDS = int(os.getenv("STATS_CACHE_TTL_SECONDS", "300"))
STATS_CACHE_MAX_ENTRIES = int(os.getenv("STATS_CACHE_MAX_ENTRIES", "1024"))

# { (user_id, days, reference_date, basis): (timestamp_monotonic, response_dict) }
# insertion order is write order
_stats_cache: dict[tuple, tuple[float, dict]] = {}


def get_cached_summary(user_id: str, days: int, reference_date: date, basis: str) -> dict | None:
    """
    Retrieve a cached summary if it exists and is within TTL.

    Returns:
        Response dict if cache hit, None if miss or expired
    """
    cached = _stats_cache.get((user_id, days, reference_date, basis))
    if cached and monotonic() - cached[0] <= STATS_CACHE_TTL_SECONDS:
        return cached[1]
    return None


def cache_summary(
    user_id: str, days: int, reference_date: date, basis: str, response_dict: dict
) -> None:
    now = monotonic()
    evict_expired(now)

    key = (user_id, days, reference_date, basis)
    # re-insert so a refreshed key moves to the newest position
    _stats_cache.pop(key, None)
    while len(_stats_cache) >= STATS_CACHE_MAX_ENTRIES > 0:
        del _stats_cache[next(iter(_stats_cache))]
    _stats_cache[key] = (now, response_dict)


def evict_expired(now: float | None = None) -> int:
    """Drop entries older than the TTL. Returns how many were dropped."""
    now = monotonic() if now is None else now
    expired = [
        key for key, (stored_at, _) in _stats_cache.items()
        if now - stored_at > STATS_CACHE_TTL_SECONDS
    ]
    for key in expired:
        del _stats_cache[key]
    return len(expired)


def invalidate_user(user_id: str | None) -> None:
    for key in [key for key in _stats_cache if key[0] == user_id]:
        del _stats_cache[key]


def clear_cache() -> None:
    """Clear all cached summaries."""
    _stats_cache.clear()
