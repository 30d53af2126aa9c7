"""
PURPOSE: Pytest fixtures for Cosmocore integration tests.

Provides:
- Settings pointing at a throwaway file-backed SQLite database
- A started application (lifespan run, tables created)
- An httpx AsyncClient bound to the application over ASGI
- Sample webhook payloads
"""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import select

import cosmocore.models  # noqa: F401  registers tables on Base.metadata
from cosmocore.config.settings import Settings
from cosmocore.db.base import Base
from cosmocore.main import create_app
from cosmocore.models.signal import Signal


def make_settings(database_url: str) -> Settings:
    """Build Settings for tests without reading a .env file."""
    return Settings(
        _env_file=None,
        DATABASE_URL=database_url,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def test_settings(tmp_path):
    """
    PURPOSE: Settings override with a per-test SQLite database file.

    A file (rather than :memory:) lets every pooled connection see the same data.

    Returns:
        Settings: Configuration object with test values.
    """
    return make_settings(f"sqlite+aiosqlite:///{tmp_path / 'signals.db'}")


@pytest_asyncio.fixture
async def app(test_settings):
    """
    PURPOSE: Started application with the signals schema in place.

    Runs the real lifespan (pool creation and startup probe), then creates
    the tables the production database has pre-provisioned.
    """
    application = create_app(test_settings)

    async with application.router.lifespan_context(application):
        async with application.state.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        yield application


@pytest_asyncio.fixture
async def bare_app(test_settings):
    """Started application whose database has no tables."""
    application = create_app(test_settings)

    async with application.router.lifespan_context(application):
        yield application


def _client_for(application) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=application)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest_asyncio.fixture
async def client(app):
    """HTTP client for the started application."""
    async with _client_for(app) as ac:
        yield ac


@pytest_asyncio.fixture
async def bare_client(bare_app):
    """HTTP client for the application without tables."""
    async with _client_for(bare_app) as ac:
        yield ac


@pytest.fixture
def btc_payload():
    """
    PURPOSE: The canonical TradingView buy alert.

    Returns:
        dict: Webhook body with price sent as a decimal string.
    """
    return {
        "pair": "BTC/USD",
        "action": "buy",
        "price": "65000.50",
        "source": "TradingView",
    }


@pytest.fixture
def fetch_signals(app):
    """
    PURPOSE: Read back stored signals through a fresh session.

    Returns:
        Callable: Coroutine function returning all Signal rows, oldest first.
    """
    async def _fetch():
        async with app.state.session_factory() as session:
            result = await session.execute(select(Signal).order_by(Signal.created_at))
            return list(result.scalars().all())

    return _fetch
