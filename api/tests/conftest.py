"""
Pytest configuration for API tests

Fixtures and configuration for FastAPI endpoint testing.
The Solana service is replaced with an in-memory mock; no RPC node is needed.
"""

import os

import pytest
from fastapi.testclient import TestClient


# Settings are read at import time
os.environ.setdefault("API_KEY_DEV", "test_api_key")
os.environ.setdefault("SOLANA_TOKEN_MINT_ADDRESS", "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")

from api.config import settings  # noqa: E402
from api.dependencies.solana import get_solana_service  # noqa: E402
from api.main import app  # noqa: E402
from api.tests.mocks import MockSolanaService  # noqa: E402


@pytest.fixture
def mock_solana_service():
    """Solana service double shared by the client fixture"""
    return MockSolanaService(mint=settings.solana_token_mint_address)


@pytest.fixture
def client(mock_solana_service):
    """Create FastAPI test client"""
    app.dependency_overrides[get_solana_service] = lambda: mock_solana_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# Auth fixtures
@pytest.fixture
def api_key():
    """API key the app was configured with"""
    return settings.api_key_dev


@pytest.fixture
def auth_headers(api_key):
    """Get authentication headers"""
    return {"X-API-Key": api_key}


# Address fixtures
@pytest.fixture
def recipient_address():
    return "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
