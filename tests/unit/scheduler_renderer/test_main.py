"""Unit tests for the application factory and its wiring."""

from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded

from scheduler_renderer.exceptions import RendererException
from scheduler_renderer.main import app


class TestExceptionHandlers:
    """Tests for registered exception handlers."""

    def test_renderer_exception_handler_exists(self):
        """Test that RendererException handler is registered."""
        assert RendererException in app.exception_handlers

    def test_rate_limit_exceeded_handler(self):
        """Test that rate limit exceeded handler is registered."""
        assert RateLimitExceeded in app.exception_handlers


class TestLifecycle:
    """Tests for app lifecycle events."""

    def test_app_has_render_routes(self):
        """Test that every widget route is registered."""
        assert len(app.routes) > 0
        paths = app.openapi()["paths"]

        for name in (
            "slot-table",
            "student-list",
            "slot-booker",
            "command-bar",
            "slot-manager",
            "scheduling-list",
            "teacher-tabs",
            "mod-intro",
            "action-message",
            "grade",
            "grading-choices",
        ):
            assert f"/api/render/{name}" in paths

    def test_app_state_has_limiter(self):
        """Test that app has rate limiter configured."""
        assert app.state.limiter is not None
        assert app.state.limiter.enabled

    def test_lifespan_creates_host_services(self):
        """Test startup stores the host services and shutdown clears them."""
        with TestClient(app):
            services = app.state.host_services
            assert services.strings.get_string("date", "scheduler") == "Date"

        assert app.state.host_services is None


class TestOpenApi:
    """Tests for the generated OpenAPI schema."""

    def test_render_routes_require_bearer(self):
        """Test render routes declare the bearer scheme and health routes do not."""
        schema = app.openapi()

        assert "BearerAuth" in schema["components"]["securitySchemes"]
        assert schema["paths"]["/api/render/slot-table"]["post"]["security"] == [{"BearerAuth": []}]
        assert "security" not in schema["paths"]["/health"]["get"]
