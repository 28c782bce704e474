import itertools

from app.api.analytics_utils import Achievement, evaluate
from app.models.analytics.AnalyticsResponse import AggregateTotals, CategoryStats


def totals_with(dry=0, wet=0, ewaste=0, hazardous=0):
    return AggregateTotals(
        dry=CategoryStats(count=dry),
        wet=CategoryStats(count=wet),
        ewaste=CategoryStats(count=ewaste),
        hazardous=CategoryStats(count=hazardous),
        total=dry + wet + ewaste + hazardous,
    )


def test_nothing_unlocked_without_activity():
    assert evaluate(0, 0, totals_with()) == frozenset()


def test_first_scan():
    assert evaluate(1, 1, totals_with(wet=1)) == {Achievement.FIRST_SCAN}


def test_week_streak_needs_seven_active_days():
    assert Achievement.WEEK_STREAK not in evaluate(10, 6, totals_with(wet=10))
    assert Achievement.WEEK_STREAK in evaluate(10, 7, totals_with(wet=10))


def test_fifty_recycled_counts_dry_and_ewaste():
    assert Achievement.FIFTY_RECYCLED not in evaluate(60, 3, totals_with(dry=40, ewaste=9, wet=11))
    assert Achievement.FIFTY_RECYCLED in evaluate(60, 3, totals_with(dry=40, ewaste=10, wet=10))


def test_co2_milestone_at_143_recycled_items():
    # 142 * 0.7 = 99.4, 143 * 0.7 = 100.1
    assert Achievement.CO2_MILESTONE not in evaluate(142, 1, totals_with(dry=142))
    assert Achievement.CO2_MILESTONE in evaluate(143, 1, totals_with(dry=143))


def test_previously_unlocked_are_kept():
    unlocked = evaluate(0, 0, totals_with(), previously_unlocked={Achievement.WEEK_STREAK})

    assert unlocked == {Achievement.WEEK_STREAK}


def test_evaluate_is_monotonic_in_inputs():
    grid = [0, 1, 7, 50, 150]
    for small, big in itertools.combinations(grid, 2):
        lower = evaluate(small, small, totals_with(dry=small, ewaste=small))
        higher = evaluate(big, big, totals_with(dry=big, ewaste=big))
        assert lower <= higher


def test_re_evaluation_is_idempotent():
    totals = totals_with(dry=60, ewaste=5)
    first = evaluate(65, 8, totals)

    assert evaluate(65, 8, totals, previously_unlocked=first) == first
