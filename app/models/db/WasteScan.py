from sqlalchemy import String, DateTime, Float, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
import uuid
from app.database import Base
from app.models.waste.WasteCategory import WeightUnit


class WasteScan(Base):
    """One logged disposal action. Rows are append-only."""

    __tablename__ = "waste_scans"
    __table_args__ = (
        Index("ix_waste_scans_user_timestamp", "user_id", "timestamp"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    # nullable for anonymous / local-only scans
    user_id: Mapped[str | None] = mapped_column(String, nullable=True)

    qr_code: Mapped[str] = mapped_column(String, nullable=False)
    item_name: Mapped[str] = mapped_column(String, nullable=False)

    # plain strings so legacy rows outside the closed set can still be loaded
    category: Mapped[str] = mapped_column(String(16), nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    unit: Mapped[str] = mapped_column(
        String(4), nullable=False, default=WeightUnit.KG.value
    )

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    impact: Mapped[dict | None] = mapped_column(
        JSON, nullable=True
    )  # {"co2_saved": 0.2, "energy_saved": 0.05}
