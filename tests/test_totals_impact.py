import math
from datetime import date

import pytest

from app.api.analytics_utils import (
    impact_of,
    recycling_breakdown,
    recycling_rate,
    share_percent,
    share_percentages,
    totals_of,
)
from app.api.analytics_utils.totals import round_half_up
from app.models.analytics.AnalyticsResponse import (
    AggregateTotals,
    CategoryStats,
    DailyBucket,
    ShareBasis,
)


def make_totals(dry=(0, 0.0), wet=(0, 0.0), ewaste=(0, 0.0), hazardous=(0, 0.0)):
    categories = {
        "dry": CategoryStats(count=dry[0], weight_kg=dry[1]),
        "wet": CategoryStats(count=wet[0], weight_kg=wet[1]),
        "ewaste": CategoryStats(count=ewaste[0], weight_kg=ewaste[1]),
        "hazardous": CategoryStats(count=hazardous[0], weight_kg=hazardous[1]),
    }
    return AggregateTotals(
        total=sum(stats.count for stats in categories.values()),
        total_weight_kg=sum(stats.weight_kg for stats in categories.values()),
        **categories,
    )


def test_totals_of_empty_series_is_zero():
    totals = totals_of([])

    assert totals.total == 0
    assert totals.total_weight_kg == 0
    assert totals.dry == CategoryStats()


def test_totals_of_sums_buckets_element_wise():
    buckets = [
        DailyBucket(date=date(2026, 10, 17), dry=CategoryStats(count=1, weight_kg=2), total=1, total_weight_kg=2),
        DailyBucket(
            date=date(2026, 10, 18),
            dry=CategoryStats(count=2, weight_kg=1),
            hazardous=CategoryStats(count=1, weight_kg=0.5),
            total=3,
            total_weight_kg=1.5,
        ),
    ]

    totals = totals_of(buckets)

    assert totals.dry == CategoryStats(count=3, weight_kg=3)
    assert totals.hazardous == CategoryStats(count=1, weight_kg=0.5)
    assert totals.total == 4
    assert totals.total_weight_kg == 3.5


def test_co2_and_trees_for_ten_kilograms_of_dry_waste():
    impact = impact_of(make_totals(dry=(4, 10.0)))

    assert impact.co2_saved_kg == 7.0
    assert impact.trees_equivalent == 0


def test_impact_uses_weights_with_fixed_coefficients():
    impact = impact_of(make_totals(dry=(10, 20.0), wet=(5, 8.0), ewaste=(1, 10.0), hazardous=(2, 3.0)))

    assert impact.recyclable_weight_kg == 30.0
    assert impact.diverted_weight_kg == 38.0
    assert impact.co2_saved_kg == pytest.approx(21.0)
    assert impact.trees_equivalent == 1
    assert impact.energy_saved_kwh == 75.0
    assert impact.home_days_equivalent == 3  # 2.5 rounds half up
    assert impact.water_saved_liters == 1500
    assert impact.showers_equivalent == 23
    assert impact.landfill_diverted_kg == 19
    assert impact.garbage_bags_equivalent == 4


def test_impact_is_deterministic():
    totals = make_totals(dry=(3, 1.2), ewaste=(1, 0.4))

    assert impact_of(totals) == impact_of(totals)


def test_impact_of_zero_totals():
    impact = impact_of(make_totals())

    assert impact.co2_saved_kg == 0
    assert impact.water_saved_liters == 0
    assert impact.garbage_bags_equivalent == 0


@pytest.mark.parametrize("part", [0, 5, 2.5])
def test_share_percent_guards_division_by_zero(part):
    result = share_percent(part, 0)

    assert result == 0
    assert not math.isnan(result) and not math.isinf(result)


def test_share_percent_rounds_half_up():
    assert share_percent(1, 8) == 13  # 12.5
    assert share_percent(1, 3) == 33
    assert round_half_up(0.5) == 1


def test_share_percentages_by_count_and_weight():
    totals = make_totals(dry=(2, 1.0), wet=(1, 3.0), ewaste=(1, 0.0))

    assert share_percentages(totals, ShareBasis.COUNT).model_dump() == {
        "dry": 50, "wet": 25, "ewaste": 25, "hazardous": 0,
    }
    assert share_percentages(totals, ShareBasis.WEIGHT).model_dump() == {
        "dry": 25, "wet": 75, "ewaste": 0, "hazardous": 0,
    }


def test_share_percentages_of_empty_totals_are_zero():
    assert share_percentages(make_totals(), ShareBasis.WEIGHT).model_dump() == {
        "dry": 0, "wet": 0, "ewaste": 0, "hazardous": 0,
    }


def test_recycling_rate_both_bases():
    totals = make_totals(dry=(3, 1.0), wet=(1, 2.0), ewaste=(0, 0.0), hazardous=(0, 1.0))

    assert recycling_rate(totals, ShareBasis.COUNT) == 75
    assert recycling_rate(totals, ShareBasis.WEIGHT) == 25
    assert recycling_rate(make_totals(), ShareBasis.COUNT) == 0


def test_recycling_breakdown():
    breakdown = recycling_breakdown(make_totals(dry=(3, 1.0), wet=(2, 2.0), ewaste=(1, 0.5), hazardous=(1, 4.0)))

    assert breakdown.basis == ShareBasis.COUNT
    assert (breakdown.recycled, breakdown.composted, breakdown.landfill) == (4, 2, 1)
