"""
Daily Aggregation

Turns raw waste-scan events into a fixed-length, gap-free series of daily
buckets for one lookback window. Every call recomputes from scratch.
"""

import logging
import math
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable

from app.core.errors import ValidationError
from app.models.analytics.AnalyticsResponse import CategoryStats, DailyBucket
from app.models.waste.WasteCategory import CATEGORY_KEYS, WeightUnit
from app.models.waste.WasteScanModels import StoredEvent
from app.services.event_store import as_utc

logger = logging.getLogger(__name__)

GRAMS_PER_KG = 1000


def to_utc_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def window_bounds(window_days: int, reference_date: date | datetime) -> tuple[date, date]:
    """First and last calendar day (inclusive) of a window ending at reference_date."""
    if window_days < 1:
        raise ValueError("window_days must be at least 1")
    end_date = to_utc_date(reference_date)
    try:
        start_date = end_date - timedelta(days=window_days - 1)
    except OverflowError as e:
        raise ValidationError(
            f"A {window_days} day window ending {end_date.isoformat()} "
            "starts before the first supported date"
        ) from e
    return start_date, end_date


def window_start(window_days: int, reference_date: date | datetime) -> datetime:
    """Midnight UTC of the window's first day, used as the store's `since` filter."""
    start_date, _ = window_bounds(window_days, reference_date)
    return datetime.combine(start_date, time.min, tzinfo=timezone.utc)


def weight_in_kg(weight: float | None, unit: str) -> float | None:
    """Normalize to kilograms. Returns None for an unknown unit."""
    if unit == WeightUnit.G.value:
        return (weight or 0) / GRAMS_PER_KG
    if unit == WeightUnit.KG.value:
        return float(weight or 0)
    return None


def aggregate_with_skipped(
    events: Iterable[StoredEvent], window_days: int, reference_date: date | datetime
) -> tuple[list[DailyBucket], int]:
    """
    Buckets events per UTC day and category.

    Algorithm:
    1. Bucket every in-window event by (day, category), summing counts and kg
    2. Events outside [start, end] are ignored entirely
    3. Events with a category outside the closed set, an unknown unit or a
       negative or non-finite weight are skipped and counted, they never fail
       the whole aggregation
    4. Walk every day of the window and default missing days to zero

    Returns:
        (series, skipped) where series has exactly window_days buckets,
        oldest first, and the last bucket's date equals reference_date
    """
    start_date, end_date = window_bounds(window_days, reference_date)

    # day -> category -> [count, weight_kg]
    data_by_date: dict[date, dict[str, list]] = defaultdict(
        lambda: {key: [0, 0.0] for key in CATEGORY_KEYS}
    )
    skipped = 0

    for event in events:
        day = to_utc_date(event.timestamp)
        if day < start_date or day > end_date:
            continue

        weight_kg = weight_in_kg(event.weight, event.unit)
        malformed = (
            event.category not in CATEGORY_KEYS
            or weight_kg is None
            or not math.isfinite(weight_kg)
            or weight_kg < 0
        )
        if malformed:
            skipped += 1
            logger.warning(
                "Skipping malformed scan %s (category=%r, weight=%r, unit=%r)",
                event.id, event.category, event.weight, event.unit,
            )
            continue

        slot = data_by_date[day][event.category]
        slot[0] += 1
        slot[1] += weight_kg

    series = []
    for offset in range(window_days):
        current_date = start_date + timedelta(days=offset)
        day_data = data_by_date.get(current_date)
        if day_data is None:
            series.append(DailyBucket(date=current_date))
        else:
            categories = {
                key: CategoryStats(count=count, weight_kg=weight_kg)
                for key, (count, weight_kg) in day_data.items()
            }
            series.append(
                DailyBucket(
                    date=current_date,
                    total=sum(stats.count for stats in categories.values()),
                    total_weight_kg=sum(stats.weight_kg for stats in categories.values()),
                    **categories,
                )
            )

    return series, skipped


def aggregate(
    events: Iterable[StoredEvent], window_days: int, reference_date: date | datetime
) -> list[DailyBucket]:
    series, _ = aggregate_with_skipped(events, window_days, reference_date)
    return series


def distinct_active_days(series: Iterable[DailyBucket]) -> int:
    """Days in the window with at least one event."""
    return sum(1 for bucket in series if bucket.total > 0)
