"""FastAPI dependencies for dependency injection."""

from dataclasses import replace

from fastapi import Depends, Header, Query, Request

from scheduler_renderer.config import Settings, get_settings
from scheduler_renderer.protocols import HostServices
from scheduler_renderer.services.session import StaticSessionKey
from scheduler_renderer.views.scheduler_renderer import SchedulerRenderer

SESSKEY_HEADER = "X-Scheduler-Sesskey"


async def get_host_services(request: Request) -> HostServices:
    """
    Get the shared host service adapters from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The HostServices bundle created at startup.

    Raises:
        RuntimeError: If host services are not initialized.
    """
    services: HostServices | None = getattr(request.app.state, "host_services", None)

    if services is None:
        raise RuntimeError("Host services not initialized. This should never happen.")

    return services


async def get_renderer(
    services: HostServices = Depends(get_host_services),
    settings: Settings = Depends(get_settings),
    tz: str | None = Query(default=None, description="Viewer's IANA timezone"),
    sesskey: str | None = Header(default=None, alias=SESSKEY_HEADER),
) -> SchedulerRenderer:
    """
    Build a renderer for this request.

    The session key header replaces the shared session adapter so each
    request renders with its own user's key.

    Raises:
        InvalidTimezoneException: If tz is not a known timezone.
    """
    return SchedulerRenderer(replace(services, session=StaticSessionKey(sesskey)), settings, timezone=tz)
