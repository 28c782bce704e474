"""Event store: append-only persistence of waste-scan events."""
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import TransientFetchError, ValidationError
from app.models.db.WasteScan import WasteScan
from app.models.waste.WasteScanModels import StoredEvent, WasteScanCreate

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_scan(payload: WasteScanCreate | dict) -> WasteScanCreate:
    """Validate an incoming event, raising ValidationError without side effects."""
    if isinstance(payload, WasteScanCreate):
        return payload
    try:
        return WasteScanCreate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid waste scan event",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


class EventStore(ABC):
    """
    Contract consumed by the analytics pipeline.

    - append() is atomic per event and assigns id/timestamp when absent
    - query() returns events unordered; callers sort when order matters
    - clear() is an administrative reset and is not exposed over HTTP
    """

    async def append(
        self, payload: WasteScanCreate | dict, user_id: Optional[str] = None
    ) -> StoredEvent:
        scan = validate_scan(payload)
        owner = user_id if user_id is not None else scan.user_id
        timestamp = as_utc(scan.timestamp) if scan.timestamp else datetime.now(timezone.utc)
        event = StoredEvent(
            id=uuid.uuid4(),
            user_id=owner,
            qr_code=scan.qr_code,
            item_name=scan.item_name,
            category=scan.category.value,
            weight=scan.weight,
            unit=scan.unit.value,
            timestamp=timestamp,
            impact=scan.impact,
        )
        stored = await self._insert(event)
        logger.info(
            "Logged %s scan %s for user %s", stored.category, stored.qr_code, stored.user_id
        )
        return stored

    @abstractmethod
    async def _insert(self, event: StoredEvent) -> StoredEvent: ...

    @abstractmethod
    async def query(
        self, user_id: Optional[str] = None, since: Optional[datetime] = None
    ) -> list[StoredEvent]: ...

    @abstractmethod
    async def clear(self) -> int: ...

    async def ping(self) -> None:
        """Raise TransientFetchError when the backing store is unreachable."""


class InMemoryEventStore(EventStore):
    """Process-local store for anonymous/local-only mode and tests."""

    def __init__(self, events: Optional[list[StoredEvent]] = None):
        self._events: list[StoredEvent] = list(events or [])

    async def _insert(self, event: StoredEvent) -> StoredEvent:
        self._events.append(event)
        return event

    async def query(
        self, user_id: Optional[str] = None, since: Optional[datetime] = None
    ) -> list[StoredEvent]:
        cutoff = as_utc(since) if since else None
        return [
            event
            for event in self._events
            if (user_id is None or event.user_id == user_id)
            and (cutoff is None or as_utc(event.timestamp) >= cutoff)
        ]

    async def clear(self) -> int:
        deleted = len(self._events)
        self._events.clear()
        return deleted


class SqlEventStore(EventStore):
    """Event store backed by the waste_scans table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _insert(self, event: StoredEvent) -> StoredEvent:
        row = WasteScan(
            id=event.id,
            user_id=event.user_id,
            qr_code=event.qr_code,
            item_name=event.item_name,
            category=event.category,
            weight=event.weight,
            unit=event.unit,
            timestamp=event.timestamp,
            impact=event.impact.model_dump() if event.impact else None,
        )
        try:
            self.session.add(row)
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.session.rollback()
            logger.error("Failed to store waste scan: %s", e)
            raise TransientFetchError("Event store unavailable") from e
        return event

    async def query(
        self, user_id: Optional[str] = None, since: Optional[datetime] = None
    ) -> list[StoredEvent]:
        query = select(WasteScan)
        if user_id is not None:
            query = query.where(WasteScan.user_id == user_id)
        if since is not None:
            query = query.where(WasteScan.timestamp >= as_utc(since))

        try:
            result = await self.session.execute(query)
            rows = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to query waste scans: %s", e)
            raise TransientFetchError("Event store unavailable") from e

        return [self._to_event(row) for row in rows]

    async def clear(self) -> int:
        try:
            result = await self.session.execute(delete(WasteScan))
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.session.rollback()
            logger.error("Failed to clear waste scans: %s", e)
            raise TransientFetchError("Event store unavailable") from e
        return result.rowcount or 0

    async def ping(self) -> None:
        try:
            await self.session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            raise TransientFetchError("Event store unavailable") from e

    @staticmethod
    def _to_event(row: WasteScan) -> StoredEvent:
        # SQLite hands back naive datetimes
        return StoredEvent(
            id=row.id,
            user_id=row.user_id,
            qr_code=row.qr_code,
            item_name=row.item_name,
            category=row.category,
            weight=row.weight or 0,
            unit=row.unit,
            timestamp=as_utc(row.timestamp),
            impact=row.impact,
        )
