from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.waste.WasteCategory import WasteCategory, WeightUnit

# upper bound for a single logged item, in whatever unit it was logged in
MAX_SCAN_WEIGHT = 100_000


class ScanImpact(BaseModel):
    """Per-item impact hint shipped with the reference dataset."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    co2_saved: float = Field(default=0, ge=0)
    energy_saved: float = Field(default=0, ge=0)


class WasteScanCreate(BaseModel):
    """Body of POST /api/waste/scan. Accepts camelCase or snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    qr_code: str = Field(min_length=1)
    item_name: str = Field(min_length=1)
    category: WasteCategory
    weight: float = Field(default=0, ge=0, le=MAX_SCAN_WEIGHT, allow_inf_nan=False)
    unit: WeightUnit = WeightUnit.KG
    user_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    impact: Optional[ScanImpact] = None


class StoredEvent(BaseModel):
    """
    A persisted waste-scan event.

    category and unit stay plain strings here: rows written before the
    closed set was enforced can still be read back, and the aggregator
    decides what to do with them.
    """
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: Optional[str] = None
    qr_code: str
    item_name: str
    category: str
    weight: float = 0
    unit: str = WeightUnit.KG.value
    timestamp: datetime
    impact: Optional[ScanImpact] = None


class WasteStatsResponse(BaseModel):
    """All-time scan counts for a user."""
    total_scans: int = Field(ge=0)
    category_wise_count: dict[str, int]


class WasteListResponse(BaseModel):
    scans: List[StoredEvent]
    count: int = Field(ge=0)
