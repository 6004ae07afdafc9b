"""API key authentication for the render API."""

import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from scheduler_renderer.config import Settings, get_settings
from scheduler_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(request: Request, reason: str) -> HTTPException:
    """Log a rejected render request and build the 401 to raise."""
    log_with_context(
        logger,
        "warning",
        reason,
        path=request.url.path,
        ip=request.client.host if request.client else "unknown",
        event_type="auth_failure",
    )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=reason,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> None:
    """Check the host's render API key.

    The host page composer sends ``Authorization: Bearer <RENDER_API_KEY>``
    with every render request.

    Raises:
        HTTPException: 401 if the key is missing or does not match
    """
    if credentials is None:
        raise _unauthorized(request, "Missing API key")

    if not secrets.compare_digest(credentials.credentials.encode(), settings.render_api_key.encode()):
        raise _unauthorized(request, "Invalid API key")


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def get_cors_origins(settings: Settings) -> list[str]:
    """Origins allowed to call the API from a browser."""
    return _split_csv(settings.cors_origins)


def get_trusted_hosts(settings: Settings) -> list[str]:
    """Host header values the API answers to."""
    return _split_csv(settings.trusted_hosts)
