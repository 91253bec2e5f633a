# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds a fresh app per test on its own SQLite file
# - Replaces Supabase Storage with an in-memory fake
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.main, which builds an app from the
# environment at import time

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./portfolio-test.db")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_storage_service
from app.exceptions import StorageUploadError
from app.main import create_app
from core.services.user_service import UserService

ADMIN_EMAIL = "admin@portfolio.dev"
ADMIN_PASSWORD = "correct-horse-battery"

PUBLIC_URL_PREFIX = "https://test-project.supabase.co/storage/v1/object/public/images/"


# =============================================================================
# Fakes
# =============================================================================

class FakeStorage:
    """
    In-memory stand-in for StorageService.

    Set fail_on_call to make the Nth upload (0-based) fail.
    """

    def __init__(self):
        self.uploads: list[tuple[str, bytes, str]] = []
        self.calls = 0
        self.fail_on_call: int | None = None

    def upload(self, path: str, content: bytes, content_type: str) -> dict:
        call = self.calls
        self.calls += 1
        if call == self.fail_on_call:
            raise StorageUploadError("The resource already exists")
        self.uploads.append((path, content, content_type))
        return {"path": path}

    def get_public_url(self, path: str) -> str:
        return f"{PUBLIC_URL_PREFIX}{path}"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'portfolio.db'}",
        ENVIRONMENT="test",
    )


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def application(settings, fake_storage):
    """FastAPI app with storage replaced by the fake."""
    app = create_app(settings)
    app.dependency_overrides[get_storage_service] = lambda: fake_storage
    return app


@pytest.fixture
def client(application):
    """TestClient with the lifespan running (tables created)."""
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(application):
    """Authorization header carrying a valid admin token."""
    token = application.state.tokens.sign_access_token(user_id="admin-id", email=ADMIN_EMAIL)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(application, client):
    """Admin account stored in the database."""

    async def create_admin():
        async with application.state.database.session() as session:
            return await UserService(session).upsert_admin(ADMIN_EMAIL, ADMIN_PASSWORD)

    return client.portal.call(create_admin)


@pytest.fixture
def project_payload():
    """Valid body for POST /api/projects."""
    return {
        "title": "Portfolio Rebuild",
        "description": "<p>A full rebuild</p>",
        "year": 2024,
        "tags": ["FastAPI", "fastapi", "SQL"],
        "client": "Acme",
        "duration": "3 months",
        "overviewHtml": "<p>Overview</p>",
        "challengeHtml": "<p>Challenge</p>",
        "solutionHtml": "<p>Solution</p>",
        "links": [{"label": "Live", "url": "https://portfolio.dev"}],
        "images": ["https://cdn.portfolio.dev/cover.png"],
    }


@pytest.fixture
def experience_payload():
    """Valid body for POST /api/experiences."""
    return {
        "company": "Acme",
        "role": "Backend Engineer",
        "employmentType": "Full-time",
        "location": "Remote",
        "startMonth": "2021-03",
        "endMonth": "2023-06",
        "isCurrent": False,
        "summaryHtml": "<p>Built APIs</p>",
        "highlights": ["Shipped v2"],
        "techTags": ["Python"],
        "sortOrder": 1,
    }
