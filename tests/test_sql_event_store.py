from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.analytics_utils import aggregate_with_skipped
from app.core.errors import TransientFetchError, ValidationError
from app.database import Base
from app.models.db.WasteScan import WasteScan
from app.services.event_store import SqlEventStore
from conftest import at


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


def scan(**overrides):
    payload = {
        "qr_code": "BATTERY_001",
        "item_name": "Lithium Battery",
        "category": "ewaste",
        "weight": 300,
        "unit": "g",
        "impact": {"co2Saved": 2.5, "energySaved": 1.1},
    }
    payload.update(overrides)
    return payload


async def test_append_then_query_round_trip(session):
    store = SqlEventStore(session)

    stored = await store.append(scan(timestamp=at(2026, 10, 18).isoformat()), user_id="user-1")
    events = await store.query(user_id="user-1")

    assert len(events) == 1
    event = events[0]
    assert event.id == stored.id
    assert event.category == "ewaste"
    assert event.weight == 300 and event.unit == "g"
    assert event.timestamp == at(2026, 10, 18)
    assert event.impact.co2_saved == 2.5


async def test_append_is_visible_to_the_next_aggregation(session):
    store = SqlEventStore(session)
    await store.append(scan(timestamp=at(2026, 10, 18).isoformat()), user_id="user-1")

    series, _ = aggregate_with_skipped(await store.query(user_id="user-1"), 1, date(2026, 10, 18))

    assert series[0].ewaste.count == 1
    assert series[0].ewaste.weight_kg == pytest.approx(0.3)


async def test_query_since_and_user_partitioning(session):
    store = SqlEventStore(session)
    await store.append(scan(timestamp=at(2026, 10, 1).isoformat()), user_id="user-1")
    await store.append(scan(timestamp=at(2026, 10, 17).isoformat()), user_id="user-1")
    await store.append(scan(timestamp=at(2026, 10, 17).isoformat()), user_id="user-2")

    assert len(await store.query(user_id="user-1", since=at(2026, 10, 10, 0))) == 1
    assert len(await store.query(since=at(2026, 10, 10, 0))) == 2
    assert len(await store.query()) == 3


async def test_invalid_event_is_not_written(session):
    store = SqlEventStore(session)

    with pytest.raises(ValidationError):
        await store.append(scan(category="glass"))

    assert await store.query() == []


async def test_legacy_rows_load_and_are_skipped_by_aggregation(session):
    await session.execute(
        insert(WasteScan).values(
            qr_code="OLD_001", item_name="Old row", category="plastic", weight=1, unit="kg",
            timestamp=at(2026, 10, 18),
        )
    )
    await session.commit()
    store = SqlEventStore(session)

    events = await store.query()
    series, skipped = aggregate_with_skipped(events, 1, date(2026, 10, 18))

    assert len(events) == 1
    assert skipped == 1
    assert series[0].total == 0


async def test_clear(session):
    store = SqlEventStore(session)
    await store.append(scan())
    await store.append(scan())

    assert await store.clear() == 2
    assert await store.query() == []


async def test_store_failure_raises_transient_fetch_error():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    # no tables created: every statement fails
    async with async_sessionmaker(bind=engine, class_=AsyncSession)() as session:
        store = SqlEventStore(session)
        with pytest.raises(TransientFetchError):
            await store.query(user_id="user-1")
    await engine.dispose()
