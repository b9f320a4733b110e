"""
Pytest configuration and fixtures for Night Out API tests.

Most tests run against an in-memory Supabase double. Tests marked
requires_supabase talk to a real project and are skipped unless
SUPABASE_URL and SUPABASE_SERVICE_KEY are set.
"""

import os

# Must be set before the settings object is created
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from main import app
from tests.supabase_double import FakeSupabase, make_access_token


def _supabase_configured() -> bool:
    """Check if Supabase is configured for integration tests."""
    return bool(os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_SERVICE_KEY"))


requires_supabase = pytest.mark.skipif(
    not _supabase_configured(),
    reason="SUPABASE_URL and SUPABASE_SERVICE_KEY required for integration tests",
)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client for the FastAPI app."""
    with TestClient(app, base_url="http://test") as c:
        yield c


@pytest.fixture
def api_base() -> str:
    """Base path for API v1 endpoints."""
    return "/api/v1"


@pytest.fixture
def supabase(monkeypatch) -> FakeSupabase:
    """Install an in-memory Supabase in place of the real client."""
    fake = FakeSupabase()
    monkeypatch.setattr("nightout.core.database._supabase_client", fake)
    monkeypatch.setattr("nightout.core.session.get_auth_client", lambda: fake)
    return fake


def auth_headers_for(user_id: str, email: str = None) -> dict:
    return {"Authorization": f"Bearer {make_access_token(user_id, email)}"}


@pytest.fixture
def user_id() -> str:
    return "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def auth_headers(user_id: str) -> dict:
    """Headers carrying a valid access token for ``user_id``."""
    return auth_headers_for(user_id, "owner@example.com")


@pytest.fixture
def other_headers() -> dict:
    return auth_headers_for("22222222-2222-2222-2222-222222222222", "guest@example.com")


@pytest.fixture
def png_bytes() -> bytes:
    import io

    from PIL import Image

    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(147, 51, 234)).save(buffer, format="PNG")
    return buffer.getvalue()
