"""
Fixtures for route tests.

The app is exercised through FastAPI dependency overrides; no Supabase
client is ever created.
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from app.main import app
from app.repositories.deps import get_campaign_service, get_dispatcher


@pytest.fixture
def mock_service():
    service = MagicMock()
    for name in (
        "preview",
        "create_campaign",
        "list_campaigns",
        "list_delivery_logs",
        "campaign_report",
        "list_campaign_logs",
        "create_customer",
    ):
        setattr(service, name, AsyncMock())
    return service


@pytest.fixture
def mock_dispatcher():
    dispatcher = MagicMock()
    dispatcher.dispatch_campaign = AsyncMock()
    return dispatcher


@pytest.fixture
def client(mock_service, mock_dispatcher):
    app.dependency_overrides[get_campaign_service] = lambda: mock_service
    app.dependency_overrides[get_dispatcher] = lambda: mock_dispatcher
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
