from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.deps import get_current_user_id, get_event_store
from app.api.analytics_utils import invalidate_user
from app.models.waste.WasteCategory import CATEGORY_KEYS
from app.models.waste.WasteScanModels import (
    StoredEvent,
    WasteScanCreate,
    WasteListResponse,
    WasteStatsResponse,
)
from app.services.event_store import EventStore

router = APIRouter()


@router.post(
    "/scan",
    response_model=StoredEvent,
    status_code=status.HTTP_201_CREATED,
)
async def log_scan(
    scan: WasteScanCreate,
    store: EventStore = Depends(get_event_store),
    user_id: str = Depends(get_current_user_id),
):
    """
    POST /api/waste/scan - Log a confirmed scan with its weight.

    The owner is always the authenticated user, whatever userId the body carries.
    Missing weight/unit default to 0 kg; the server assigns id and timestamp.
    """
    stored = await store.append(scan, user_id=user_id)
    invalidate_user(user_id)
    return JSONResponse(
        content=stored.model_dump(mode="json"),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "",
    response_model=WasteListResponse,
    status_code=status.HTTP_200_OK,
)
async def list_scans(
    store: EventStore = Depends(get_event_store),
    user_id: str = Depends(get_current_user_id),
):
    """GET /api/waste - The user's scan history, newest first."""
    scans = await store.query(user_id=user_id)
    scans.sort(key=lambda scan: scan.timestamp, reverse=True)

    response = WasteListResponse(scans=scans, count=len(scans))
    return JSONResponse(content=response.model_dump(mode="json"))


@router.get(
    "/stats",
    response_model=WasteStatsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_scan_stats(
    store: EventStore = Depends(get_event_store),
    user_id: str = Depends(get_current_user_id),
):
    """
    GET /api/waste/stats - All-time scan counts.

    Response:
        {
            "total_scans": 12,
            "category_wise_count": {"dry": 7, "wet": 3, "ewaste": 1, "hazardous": 1}
        }
    """
    scans = await store.query(user_id=user_id)

    category_wise_count = {key: 0 for key in CATEGORY_KEYS}
    for scan in scans:
        # legacy categories are still counted so the total stays honest
        category_wise_count[scan.category] = category_wise_count.get(scan.category, 0) + 1

    response = WasteStatsResponse(
        total_scans=len(scans), category_wise_count=category_wise_count
    )
    return JSONResponse(content=response.model_dump(mode="json"))
