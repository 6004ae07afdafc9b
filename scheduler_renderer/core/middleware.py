"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from scheduler_renderer.config import Settings
from scheduler_renderer.logging_config import get_logger, log_with_context
from scheduler_renderer.middleware.logging_middleware import log_requests
from scheduler_renderer.security import get_cors_origins, get_trusted_hosts

logger = get_logger(__name__)


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    cors_origins = get_cors_origins(settings)
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        event_type="security_config",
        origins=cors_origins,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type", "X-Scheduler-Sesskey"],
    )

    # Trusted hosts - prevent host header injection
    trusted_hosts = get_trusted_hosts(settings)
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        event_type="security_config",
        hosts=trusted_hosts,
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )

    # Rate limiter registered for the RateLimitExceeded handler
    limiter = Limiter(key_func=get_remote_address, default_limits=["120/minute"])
    app.state.limiter = limiter

    app.middleware("http")(log_requests)

    return limiter
