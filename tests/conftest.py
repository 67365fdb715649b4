from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cardcollection.config import Settings
from cardcollection.db.store import CardStore
from cardcollection.main import create_app
from tests.clock import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> CardStore:
    """Fresh store holding the default four seed cards."""
    return CardStore(clock=clock)


@pytest.fixture
def app_settings() -> Settings:
    return Settings(_env_file=None, environment="test", log_level="none")


@pytest.fixture
def app(app_settings: Settings, store: CardStore) -> FastAPI:
    return create_app(app_settings, store=store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client bound to a fresh app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
