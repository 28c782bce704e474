"""
Demo data for dashboards without real scans.

MockEventStore is an InMemoryEventStore pre-filled with a deterministic,
seeded history so demos and screenshots are reproducible. It never touches
the aggregation code: the analytics pipeline sees it as any other store.
"""

import random
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from app.models.waste.WasteCategory import WasteCategory, WeightUnit
from app.models.waste.WasteScanModels import StoredEvent
from app.services.event_store import InMemoryEventStore

# qr_code -> (item_name, category); a slice of the scanner's reference dataset
SAMPLE_ITEMS = {
    WasteCategory.DRY: [
        ("PLASTIC_BOTTLE_001", "Plastic Bottle (PET)"),
        ("PAPER_001", "Paper & Cardboard"),
        ("GLASS_BOTTLE_001", "Glass Bottle"),
        ("METAL_CAN_001", "Metal Can (Aluminum)"),
    ],
    WasteCategory.WET: [("FOOD_WASTE_001", "Food Scraps")],
    WasteCategory.EWASTE: [("BATTERY_001", "Lithium Battery")],
    WasteCategory.HAZARDOUS: [("PAINT_CAN_001", "Paint Can (Oil-based)")],
}

MOCK_HISTORY_DAYS = 31


def _daily_counts(rng: random.Random) -> dict[WasteCategory, int]:
    return {
        WasteCategory.DRY: rng.randint(2, 9),
        WasteCategory.WET: rng.randint(3, 8),
        WasteCategory.EWASTE: rng.randint(1, 2) if rng.random() > 0.7 else 0,
        WasteCategory.HAZARDOUS: 1 if rng.random() > 0.85 else 0,
    }


def generate_mock_events(
    user_id: Optional[str],
    today: Optional[date] = None,
    days: int = MOCK_HISTORY_DAYS,
    seed: int = 42,
) -> list[StoredEvent]:
    """Generate `days` days of scans ending at `today` (UTC)."""
    rng = random.Random(seed)
    end = today or datetime.now(timezone.utc).date()
    events = []

    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        for category, count in _daily_counts(rng).items():
            for _ in range(count):
                qr_code, item_name = rng.choice(SAMPLE_ITEMS[category])
                moment = datetime.combine(day, time.min, tzinfo=timezone.utc) + timedelta(
                    seconds=rng.randint(0, 86399)
                )
                # light items logged in grams, the rest in kilograms
                if rng.random() < 0.4:
                    weight, unit = float(rng.randint(50, 900)), WeightUnit.G
                else:
                    weight, unit = round(rng.uniform(0.1, 3.0), 2), WeightUnit.KG
                events.append(
                    StoredEvent(
                        id=uuid.UUID(int=rng.getrandbits(128), version=4),
                        user_id=user_id,
                        qr_code=qr_code,
                        item_name=item_name,
                        category=category.value,
                        weight=weight,
                        unit=unit.value,
                        timestamp=moment,
                    )
                )
    return events


class MockEventStore(InMemoryEventStore):
    def __init__(self, user_id: Optional[str] = None, today: Optional[date] = None, seed: int = 42):
        super().__init__(generate_mock_events(user_id, today=today, seed=seed))
