"""
Analytics utilities package.

Re-exports the aggregation pipeline, cache and export helpers for convenient importing.
"""

# Cache
from app.api.analytics_utils.cache import (
    get_cached_summary,
    cache_summary,
    evict_expired,
    invalidate_user,
    clear_cache,
)

# Pipeline
from app.api.analytics_utils.aggregator import (
    aggregate,
    aggregate_with_skipped,
    distinct_active_days,
    to_utc_date,
    window_start,
)
from app.api.analytics_utils.totals import (
    totals_of,
    share_percent,
    share_percentages,
    recycling_rate,
    recycling_breakdown,
)
from app.api.analytics_utils.impact import impact_of
from app.api.analytics_utils.achievements import Achievement, evaluate

# Export
from app.api.analytics_utils.export import build_export_document, render_export

__all__ = [
    # Cache
    "get_cached_summary",
    "cache_summary",
    "evict_expired",
    "invalidate_user",
    "clear_cache",
    # Pipeline
    "aggregate",
    "aggregate_with_skipped",
    "distinct_active_days",
    "to_utc_date",
    "window_start",
    "totals_of",
    "share_percent",
    "share_percentages",
    "recycling_rate",
    "recycling_breakdown",
    "impact_of",
    "Achievement",
    "evaluate",
    # Export
    "build_export_document",
    "render_export",
]
