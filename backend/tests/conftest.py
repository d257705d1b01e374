"""
Pytest configuration and fixtures for Traffic Monitor tests.
"""
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from datetime import datetime, timezone
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from traffic_monitor.analytics import Aggregator
from traffic_monitor.config import Settings
from traffic_monitor.database import Database
from traffic_monitor.main import create_app
from traffic_monitor.models import VehicleDetectionRecord
from traffic_monitor.store import InMemoryRecordStore, SQLRecordStore


def make_record(
    vehicle_type: str = "car",
    speed: float = 50.0,
    confidence: float = 0.9,
    weather: str = "clear",
    timestamp: datetime = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
) -> VehicleDetectionRecord:
    """Build a record with sensible defaults."""
    return VehicleDetectionRecord(
        vehicle_type=vehicle_type,
        detection_confidence=confidence,
        timestamp=timestamp,
        speed=speed,
        weather_condition=weather,
    )


@pytest.fixture
def sample_records() -> list[VehicleDetectionRecord]:
    """A small mixed collection spread over two days."""
    return [
        make_record("car", 50.0, 0.95, "clear", datetime(2024, 3, 1, 8, 15, tzinfo=timezone.utc)),
        make_record("car", 60.0, 0.65, "rain", datetime(2024, 3, 1, 8, 45, tzinfo=timezone.utc)),
        make_record("truck", 40.0, 0.7, "rain", datetime(2024, 3, 1, 17, 5, tzinfo=timezone.utc)),
        make_record("bus", 35.0, 0.5, "fog", datetime(2024, 3, 2, 8, 30, tzinfo=timezone.utc)),
        make_record("motorcycle", 70.0, 0.88, "clear", datetime(2024, 3, 2, 23, 59, tzinfo=timezone.utc)),
    ]


@pytest.fixture
def memory_store(sample_records) -> InMemoryRecordStore:
    return InMemoryRecordStore(sample_records)


@pytest.fixture
def aggregator(memory_store) -> Aggregator:
    return Aggregator(memory_store)


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """File-backed SQLite database with tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'traffic.db'}")
    await db.init()
    yield db
    await db.close()


@pytest.fixture
async def sql_store(database, sample_records) -> SQLRecordStore:
    store = SQLRecordStore(database)
    await store.add_many(sample_records)
    return store


@pytest.fixture
async def client(memory_store) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against an app serving the in-memory store."""
    app = create_app(Settings(), store=memory_store)
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
