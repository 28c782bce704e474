"""
Window Totals & Shares

Reduces a day series into window totals and the percentage figures the
dashboard cards show. Works on either counts or weights; the caller picks
the basis and must use it consistently.
"""

import math
from typing import Iterable

from app.models.analytics.AnalyticsResponse import (
    AggregateTotals,
    CategoryBreakdown,
    CategoryStats,
    DailyBucket,
    RecyclingBreakdown,
    SharePercentages,
    ShareBasis,
)
from app.models.waste.WasteCategory import CATEGORY_KEYS, WasteCategory

RECYCLABLE_CATEGORIES = (WasteCategory.DRY.value, WasteCategory.EWASTE.value)


def round_half_up(value: float) -> int:
    """Round non-negative values the way the dashboard always has (0.5 -> 1)."""
    return int(math.floor(value + 0.5))


def totals_of(series: Iterable[DailyBucket]) -> AggregateTotals:
    """Element-wise sum of all buckets. An empty series yields all zeros."""
    counts = {key: 0 for key in CATEGORY_KEYS}
    weights = {key: 0.0 for key in CATEGORY_KEYS}

    for bucket in series:
        for key in CATEGORY_KEYS:
            stats = bucket.category(key)
            counts[key] += stats.count
            weights[key] += stats.weight_kg

    return AggregateTotals(
        total=sum(counts.values()),
        total_weight_kg=sum(weights.values()),
        **{
            key: CategoryStats(count=counts[key], weight_kg=weights[key])
            for key in CATEGORY_KEYS
        },
    )


def share_percent(part: float, whole: float) -> int:
    """round(100 * part / whole), or 0 when there is nothing to divide by."""
    if not whole or whole <= 0:
        return 0
    return round_half_up(100 * part / whole)


def share_percentages(
    totals: CategoryBreakdown, basis: ShareBasis = ShareBasis.COUNT
) -> SharePercentages:
    whole = totals.grand_total(basis)
    return SharePercentages(
        **{key: share_percent(totals.value_of(key, basis), whole) for key in CATEGORY_KEYS}
    )


def recycling_rate(totals: CategoryBreakdown, basis: ShareBasis = ShareBasis.COUNT) -> int:
    """Share of dry + e-waste in the window, 0-100."""
    recyclable = sum(totals.value_of(key, basis) for key in RECYCLABLE_CATEGORIES)
    return share_percent(recyclable, totals.grand_total(basis))


def recycling_breakdown(
    totals: CategoryBreakdown, basis: ShareBasis = ShareBasis.COUNT
) -> RecyclingBreakdown:
    return RecyclingBreakdown(
        basis=basis,
        recycled=sum(totals.value_of(key, basis) for key in RECYCLABLE_CATEGORIES),
        composted=totals.value_of(WasteCategory.WET.value, basis),
        landfill=totals.value_of(WasteCategory.HAZARDOUS.value, basis),
    )
