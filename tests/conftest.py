import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.analytics_utils import clear_cache
from app.api.deps import get_event_store
from app.core.security import create_access_token
from app.models.waste.WasteScanModels import StoredEvent
from app.services.event_store import InMemoryEventStore
from main import app

USER_ID = "user-1"


def make_event(
    category="dry",
    weight=1.0,
    unit="kg",
    timestamp=None,
    user_id=USER_ID,
    qr_code="PLASTIC_BOTTLE_001",
    item_name="Plastic Bottle (PET)",
):
    return StoredEvent(
        id=uuid.uuid4(),
        user_id=user_id,
        qr_code=qr_code,
        item_name=item_name,
        category=category,
        weight=weight,
        unit=unit,
        timestamp=timestamp or datetime.now(timezone.utc),
    )


def at(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryEventStore()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token(USER_ID)}"}


@pytest.fixture
def client(store):
    clear_cache()
    app.dependency_overrides[get_event_store] = lambda: store
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
    clear_cache()
