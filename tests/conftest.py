"""Pytest configuration and shared fixtures."""

import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

# Settings are read once when the app module is imported
os.environ.setdefault("RENDER_API_KEY", "test-api-key")
os.environ.setdefault("TRUSTED_HOSTS", "testserver,localhost,127.0.0.1")
os.environ.setdefault("WWWROOT", "https://school.example")

from scheduler_renderer.config import Settings  # noqa: E402
from scheduler_renderer.main import app as fastapi_app  # noqa: E402
from scheduler_renderer.models import SchedulerInfo, StudentEntry, StudentList, UserRef  # noqa: E402
from scheduler_renderer.services import CatalogStringLookup, build_host_services  # noqa: E402
from scheduler_renderer.views.scheduler_renderer import SchedulerRenderer  # noqa: E402

API_KEY = "test-api-key"


@pytest.fixture
def test_client():
    """FastAPI test client with lifespan context."""
    with TestClient(fastapi_app) as client:
        yield client


@pytest.fixture
def auth_headers():
    """Authorization header accepted by the render API."""
    return {"Authorization": f"Bearer {API_KEY}"}


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        render_api_key=API_KEY,
        wwwroot="https://school.example/",
        timezone="UTC",
    )


@pytest.fixture
def strings(mock_settings):
    """The bundled English string catalogue."""
    return CatalogStringLookup.from_file(mock_settings.catalogue_path)


@pytest.fixture
def host_services(mock_settings, strings):
    """Default host adapters with a known session key."""
    return build_host_services(mock_settings, strings, sesskey="sess123")


@pytest.fixture
def renderer(host_services, mock_settings):
    """Renderer for a UTC viewer."""
    return SchedulerRenderer(host_services, mock_settings)


@pytest.fixture
def scheduler():
    """A numerically graded scheduler."""
    return SchedulerInfo(id=1, cmid=42, course_id=7, name="Office hours", scale=10, teacher_name="Tutor")


@pytest.fixture
def teacher():
    return UserRef(id=2, firstname="Ada", lastname="Lovelace")


@pytest.fixture
def student():
    return UserRef(id=3, firstname="Bob", lastname="Student")


@pytest.fixture
def student_list(scheduler, student):
    """A read-only list with one graded student."""
    return StudentList(
        scheduler=scheduler,
        students=[StudentEntry(entry_id=5, user=student, grade=7)],
        show_grades=True,
    )


@pytest.fixture
def monday_morning():
    """Start of the first slot used across tests (Monday, 02 March 2026, 09:00 UTC)."""
    return datetime(2026, 3, 2, 9, 0, tzinfo=UTC)
