"""Request logging middleware with sensitive data redaction."""

import re
import time

from fastapi import Request

from scheduler_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

# Query parameters never written to logs
SENSITIVE_PARAMS = [
    "sesskey",
    "api_key",
    "token",
    "password",
    "secret",
    "key",
    "access_token",
    "authorization",
    "bearer",
]

SENSITIVE_PATTERN = re.compile(rf"\b({'|'.join(SENSITIVE_PARAMS)})=([^&\s\"]+)", re.IGNORECASE)


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    return SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", url)


async def log_requests(request: Request, call_next):
    """Log each request and its outcome with the URL redacted."""
    started = time.perf_counter()
    response = await call_next(request)
    log_with_context(
        logger,
        "info",
        "Render request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
        event_type="http_request",
    )
    return response
