"""Tests for dependency injection functions and request logging helpers."""

from unittest.mock import MagicMock

import pytest

from scheduler_renderer.dependencies import get_host_services, get_renderer
from scheduler_renderer.exceptions import InvalidTimezoneException, MissingSessionKeyException
from scheduler_renderer.middleware.logging_middleware import redact_sensitive_data
from scheduler_renderer.views.scheduler_renderer import SchedulerRenderer


class TestDependencies:
    """Tests for dependency injection functions."""

    @pytest.mark.asyncio
    async def test_get_host_services(self, host_services):
        """Test getting host services from app state."""
        mock_request = MagicMock()
        mock_request.app.state.host_services = host_services

        services = await get_host_services(mock_request)

        assert services is host_services

    @pytest.mark.asyncio
    async def test_get_host_services_not_initialized(self):
        """Test a missing bundle is reported as a startup problem."""
        mock_request = MagicMock()
        mock_request.app.state.host_services = None

        with pytest.raises(RuntimeError, match="not initialized"):
            await get_host_services(mock_request)

    @pytest.mark.asyncio
    async def test_get_renderer_uses_request_sesskey(self, host_services, mock_settings):
        """Test each renderer carries the session key of its own request."""
        renderer = await get_renderer(host_services, mock_settings, tz=None, sesskey="from-header")

        assert isinstance(renderer, SchedulerRenderer)
        assert renderer.host.session.sesskey() == "from-header"
        assert renderer.host.strings is host_services.strings
        # The shared bundle keeps its own key
        assert host_services.session.sesskey() == "sess123"

    @pytest.mark.asyncio
    async def test_get_renderer_without_sesskey(self, host_services, mock_settings):
        """Test a request without the header renders with no session key."""
        renderer = await get_renderer(host_services, mock_settings, tz=None, sesskey=None)

        with pytest.raises(MissingSessionKeyException):
            renderer.host.session.sesskey()

    @pytest.mark.asyncio
    async def test_get_renderer_timezone(self, host_services, mock_settings):
        """Test the tz parameter selects the display timezone."""
        renderer = await get_renderer(host_services, mock_settings, tz="America/New_York", sesskey=None)

        assert str(renderer.times.timezone) == "America/New_York"

    @pytest.mark.asyncio
    async def test_get_renderer_invalid_timezone(self, host_services, mock_settings):
        """Test an unknown tz is rejected."""
        with pytest.raises(InvalidTimezoneException):
            await get_renderer(host_services, mock_settings, tz="Atlantis/Capital", sesskey=None)

    @pytest.mark.asyncio
    async def test_renderers_do_not_share_requirements(self, host_services, mock_settings):
        """Test each request collects its own JavaScript requirements."""
        first = await get_renderer(host_services, mock_settings, tz=None, sesskey=None)
        second = await get_renderer(host_services, mock_settings, tz=None, sesskey=None)

        first.requirements.js_init_call("mod_scheduler/saveseen", [1])

        assert second.requirements.calls == []


class TestRedaction:
    """Tests for URL redaction in request logs."""

    def test_sesskey_redacted(self):
        """Test session keys never reach the logs."""
        url = redact_sensitive_data("http://testserver/mod/scheduler/view.php?what=disengage&sesskey=abc123&id=4")

        assert url == "http://testserver/mod/scheduler/view.php?what=disengage&sesskey=***REDACTED***&id=4"

    def test_other_params_kept(self):
        """Test ordinary parameters are left alone."""
        url = "http://testserver/api/render/slot-table?tz=Europe/Amsterdam&format=html"

        assert redact_sensitive_data(url) == url
