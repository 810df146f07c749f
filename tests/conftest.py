"""Pytest configuration - loads .env for integration tests."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from supabase_management.core import client as client_module
from supabase_management.core.client import APIClient

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


@pytest.fixture(autouse=True)
def fresh_transport(monkeypatch):
    """Give every test its own lazily-created shared transport."""
    monkeypatch.setattr(client_module, "_shared_transport", None)
    monkeypatch.setattr(client_module, "_shared_loop", None)


@pytest.fixture
def no_env(monkeypatch):
    """Hide credentials and URL overrides loaded from the environment."""
    monkeypatch.delenv("SUPABASE_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("SUPABASE_API_URL", raising=False)


@pytest.fixture
def api_client(no_env) -> APIClient:
    return APIClient(access_token="test-token")
