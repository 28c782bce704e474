import enum
from datetime import date
from typing import List

from pydantic import BaseModel, Field


class ShareBasis(str, enum.Enum):
    COUNT = "count"
    WEIGHT = "weight"


class CategoryStats(BaseModel):
    """Count and normalized weight for one waste category."""
    count: int = Field(default=0, ge=0)
    weight_kg: float = Field(default=0.0, ge=0)


class CategoryBreakdown(BaseModel):
    """Per-category stats plus grand totals. Shared by daily buckets and window totals."""
    dry: CategoryStats = Field(default_factory=CategoryStats)
    wet: CategoryStats = Field(default_factory=CategoryStats)
    ewaste: CategoryStats = Field(default_factory=CategoryStats)
    hazardous: CategoryStats = Field(default_factory=CategoryStats)
    total: int = Field(default=0, ge=0)
    total_weight_kg: float = Field(default=0.0, ge=0)

    def category(self, key: str) -> CategoryStats:
        return getattr(self, key)

    def value_of(self, key: str, basis: ShareBasis) -> float:
        stats = self.category(key)
        return stats.count if basis == ShareBasis.COUNT else stats.weight_kg

    def grand_total(self, basis: ShareBasis) -> float:
        return self.total if basis == ShareBasis.COUNT else self.total_weight_kg


class DailyBucket(CategoryBreakdown):
    """Aggregated activity for a single UTC calendar day."""
    date: date


class AggregateTotals(CategoryBreakdown):
    """Element-wise sum of every bucket in a window."""


class ImpactEstimate(BaseModel):
    """Presentation-oriented environmental impact, derived from window totals."""
    recyclable_weight_kg: float = Field(ge=0)
    diverted_weight_kg: float = Field(ge=0)
    co2_saved_kg: float = Field(ge=0)
    trees_equivalent: int = Field(ge=0)
    energy_saved_kwh: float = Field(ge=0)
    home_days_equivalent: int = Field(ge=0)
    water_saved_liters: int = Field(ge=0)
    showers_equivalent: int = Field(ge=0)
    landfill_diverted_kg: int = Field(ge=0)
    garbage_bags_equivalent: int = Field(ge=0)


class RecyclingBreakdown(BaseModel):
    """Where the window's waste ended up: recycled, composted or landfilled."""
    basis: ShareBasis
    recycled: float = Field(ge=0)
    composted: float = Field(ge=0)
    landfill: float = Field(ge=0)


class SharePercentages(BaseModel):
    dry: int = Field(ge=0, le=100)
    wet: int = Field(ge=0, le=100)
    ewaste: int = Field(ge=0, le=100)
    hazardous: int = Field(ge=0, le=100)


class AnalyticsResponse(BaseModel):
    """Response of GET /api/analytics: one bucket per day, oldest first."""
    window_days: int = Field(ge=1, description="Time window in days")
    reference_date: date
    series: List[DailyBucket]
    skipped_records: int = Field(
        default=0, ge=0, description="Stored events ignored because of an unknown category or unit"
    )


class AnalyticsSummaryResponse(BaseModel):
    """Everything the dashboard derives from a series, computed server-side."""
    window_days: int = Field(ge=1)
    reference_date: date
    basis: ShareBasis
    totals: AggregateTotals
    count_shares: SharePercentages
    weight_shares: SharePercentages
    recycling_rate_by_count: int = Field(ge=0, le=100)
    recycling_rate_by_weight: int = Field(ge=0, le=100)
    recycling_breakdown: RecyclingBreakdown
    impact: ImpactEstimate
    active_days: int = Field(ge=0)
    achievements: List[str]


