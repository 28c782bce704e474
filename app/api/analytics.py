import os
from datetime import date, datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from app.api.deps import get_current_user_id, get_event_store
from app.api.analytics_utils import (
    Achievement,
    aggregate_with_skipped,
    build_export_document,
    cache_summary,
    distinct_active_days,
    evaluate,
    get_cached_summary,
    impact_of,
    recycling_breakdown,
    recycling_rate,
    render_export,
    share_percentages,
    to_utc_date,
    totals_of,
    window_start,
)
from app.models.analytics.AnalyticsResponse import (
    AnalyticsResponse,
    AnalyticsSummaryResponse,
    ShareBasis,
)
from app.services.event_store import EventStore

router = APIRouter()

ANALYTICS_DEFAULT_DAYS = int(os.getenv("ANALYTICS_DEFAULT_DAYS", "30"))
ANALYTICS_MAX_DAYS = int(os.getenv("ANALYTICS_MAX_DAYS", "365"))


def _days_query():
    return Query(
        default=ANALYTICS_DEFAULT_DAYS,
        ge=1,
        le=ANALYTICS_MAX_DAYS,
        description="Time window in days, ending at the reference date",
    )


def _reference_query():
    return Query(default=None, description="Last day of the window (UTC). Defaults to today.")


async def _load_series(store: EventStore, user_id: str, days: int, reference_date: date):
    """Query only the window, then bucket. Store failures propagate as TransientFetchError."""
    events = await store.query(user_id=user_id, since=window_start(days, reference_date))
    series, skipped = aggregate_with_skipped(events, days, reference_date)
    return events, series, skipped


def _today() -> date:
    return datetime.now(timezone.utc).date()


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=AnalyticsResponse,
)
async def get_analytics(
    days: int = _days_query(),
    reference_date: Optional[date] = _reference_query(),
    store: EventStore = Depends(get_event_store),
    user_id: str = Depends(get_current_user_id),
):
    """
    GET /api/analytics - Per-day, per-category counts and weights

    Returns exactly `days` buckets, oldest first, zero-filled for days without
    scans. Weights are normalized to kilograms.

    Response:
        {
            "window_days": 7,
            "reference_date": "2026-10-18",
            "series": [{"date": "2026-10-12", "dry": {"count": 1, "weight_kg": 2.0}, ...}, ...],
            "skipped_records": 0
        }
    """
    reference_date = reference_date or _today()
    _, series, skipped = await _load_series(store, user_id, days, reference_date)

    response = AnalyticsResponse(
        window_days=days,
        reference_date=reference_date,
        series=series,
        skipped_records=skipped,
    )
    return JSONResponse(content=response.model_dump(mode="json"))


@router.get(
    "/summary",
    status_code=status.HTTP_200_OK,
    response_model=AnalyticsSummaryResponse,
)
async def get_analytics_summary(
    days: int = _days_query(),
    reference_date: Optional[date] = _reference_query(),
    basis: ShareBasis = Query(
        default=ShareBasis.WEIGHT, description="Basis of the recycling breakdown"
    ),
    store: EventStore = Depends(get_event_store),
    user_id: str = Depends(get_current_user_id),
):
    """
    GET /api/analytics/summary - Dashboard cards computed from the day series

    Everything here is reproducible from GET /api/analytics alone:
    - totals: element-wise sum of the series
    - count_shares / weight_shares: per-category percentages (0 when empty)
    - recycling_rate_by_count / recycling_rate_by_weight: (dry + ewaste) share
    - impact: CO2, energy, water and landfill estimates from weights
    - achievements: unlocked badge ids

    Cached per (user, days, reference_date, basis); logging a scan drops the
    user's entries.
    """
    reference_date = reference_date or _today()

    cached = get_cached_summary(user_id, days, reference_date, basis.value)
    if cached is not None:
        return JSONResponse(content=cached)

    _, series, _ = await _load_series(store, user_id, days, reference_date)

    totals = totals_of(series)
    active_days = distinct_active_days(series)
    unlocked = evaluate(totals.total, active_days, totals)

    response = AnalyticsSummaryResponse(
        window_days=days,
        reference_date=reference_date,
        basis=basis,
        totals=totals,
        count_shares=share_percentages(totals, ShareBasis.COUNT),
        weight_shares=share_percentages(totals, ShareBasis.WEIGHT),
        recycling_rate_by_count=recycling_rate(totals, ShareBasis.COUNT),
        recycling_rate_by_weight=recycling_rate(totals, ShareBasis.WEIGHT),
        recycling_breakdown=recycling_breakdown(totals, basis),
        impact=impact_of(totals),
        active_days=active_days,
        achievements=[achievement.value for achievement in Achievement if achievement in unlocked],
    )

    response_dict = response.model_dump(mode="json")
    cache_summary(user_id, days, reference_date, basis.value, response_dict)
    return JSONResponse(content=response_dict)


@router.get("/export", status_code=status.HTTP_200_OK)
async def export_analytics(
    days: int = _days_query(),
    reference_date: Optional[date] = _reference_query(),
    fmt: Literal["xlsx", "json"] = Query(default="xlsx", alias="format"),
    store: EventStore = Depends(get_event_store),
    user_id: str = Depends(get_current_user_id),
):
    """
    GET /api/analytics/export - Download scans, series and totals as a dated file

    Falls back to JSON when the spreadsheet engine is unavailable.
    """
    reference_date = reference_date or _today()
    events, series, _ = await _load_series(store, user_id, days, reference_date)
    scans = [event for event in events if to_utc_date(event.timestamp) <= reference_date]

    document = build_export_document(scans, series, totals_of(series))
    body, media_type, filename = render_export(document, fmt, _today())

    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
