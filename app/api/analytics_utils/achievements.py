"""
Achievements

Fixed-threshold badges derived from event count, active days and totals.
Evaluation is pure; passing the previously unlocked set keeps unlocks
monotonic across refreshes.

WEEK_STREAK counts any 7 distinct active days in the window, not 7
consecutive days.
"""

import enum
from typing import Iterable

from app.models.analytics.AnalyticsResponse import CategoryBreakdown
from app.api.analytics_utils.impact import CO2_KG_PER_RECYCLED_KG


class Achievement(str, enum.Enum):
    FIRST_SCAN = "FIRST_SCAN"
    WEEK_STREAK = "WEEK_STREAK"
    FIFTY_RECYCLED = "FIFTY_RECYCLED"
    CO2_MILESTONE = "CO2_MILESTONE"


FIRST_SCAN_EVENTS = 1
WEEK_STREAK_DAYS = 7
FIFTY_RECYCLED_ITEMS = 50
CO2_MILESTONE_KG = 100


def recycled_items(totals: CategoryBreakdown) -> int:
    return totals.dry.count + totals.ewaste.count


def evaluate(
    event_count: int,
    distinct_active_days: int,
    totals: CategoryBreakdown,
    previously_unlocked: Iterable[Achievement] = (),
) -> frozenset[Achievement]:
    unlocked = set(previously_unlocked)
    recycled = recycled_items(totals)

    if event_count >= FIRST_SCAN_EVENTS:
        unlocked.add(Achievement.FIRST_SCAN)
    if distinct_active_days >= WEEK_STREAK_DAYS:
        unlocked.add(Achievement.WEEK_STREAK)
    if recycled >= FIFTY_RECYCLED_ITEMS:
        unlocked.add(Achievement.FIFTY_RECYCLED)
    # item-count based, unlike the weight-based impact estimate
    if recycled * CO2_KG_PER_RECYCLED_KG >= CO2_MILESTONE_KG:
        unlocked.add(Achievement.CO2_MILESTONE)

    return frozenset(unlocked)
