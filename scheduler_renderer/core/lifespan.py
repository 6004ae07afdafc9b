"""Application lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from scheduler_renderer import __version__
from scheduler_renderer.config import get_settings
from scheduler_renderer.exceptions import ConfigurationException
from scheduler_renderer.logging_config import get_logger, log_with_context
from scheduler_renderer.services import build_host_services
from scheduler_renderer.views.template_renderer import TEMPLATES_DIR

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Startup loads the string catalogue once and stores the shared host
    service adapters in app state; per-request renderers are built from
    them by the get_renderer dependency.
    """
    settings = get_settings()

    log_with_context(
        logger,
        "info",
        "Starting scheduler renderer",
        version=__version__,
        language=settings.language,
        timezone=settings.timezone,
        event_type="app_startup",
    )

    if not TEMPLATES_DIR.is_dir():
        raise ConfigurationException(
            f"Templates directory not found: {TEMPLATES_DIR}",
            details={"path": str(TEMPLATES_DIR)},
        )

    app.state.host_services = build_host_services(settings)
    log_with_context(
        logger,
        "info",
        "Host services initialized",
        wwwroot=settings.wwwroot,
        event_type="host_services_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        app.state.host_services = None
        log_with_context(
            logger,
            "info",
            "Shutting down scheduler renderer",
            event_type="app_shutdown",
        )
