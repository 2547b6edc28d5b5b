"""Pytest fixtures for ping counter tests."""

from collections.abc import AsyncIterator, Callable
import os

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("REPORT_INTERVAL_SECONDS", "1")
os.environ.setdefault("REPORT_SINK", "stdout")
os.environ.setdefault("TRUST_FORWARDED_HEADERS", "false")

from pingcount.config import Settings
from pingcount.counting.store import CounterStore
from pingcount.main import create_app


@pytest.fixture()
def store() -> CounterStore:
    """Return a fresh, empty counter store."""
    return CounterStore()


@pytest.fixture()
def settings() -> Settings:
    return Settings(report_interval_seconds=0.05, report_sink="stdout", trust_forwarded_headers=False)


@pytest.fixture()
def app(settings: Settings, store: CounterStore) -> FastAPI:
    """Return an application instance bound to the per-test store."""
    return create_app(settings, store=store)


ClientFactory = Callable[[str], AsyncClient]


@pytest_asyncio.fixture()
async def client_from(app: FastAPI) -> AsyncIterator[ClientFactory]:
    """Build `httpx.AsyncClient`s whose requests arrive from a given peer address."""

    clients: list[AsyncClient] = []

    def _factory(host: str) -> AsyncClient:
        transport = ASGITransport(app=app, client=(host, 50000))
        client = AsyncClient(transport=transport, base_url="http://testserver")
        clients.append(client)
        return client

    yield _factory
    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture()
async def async_client(client_from: ClientFactory) -> AsyncClient:
    """Provide a client connecting from 127.0.0.1."""
    return client_from("127.0.0.1")
