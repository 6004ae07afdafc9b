"""Custom exceptions for the scheduler renderer with HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    RENDERER_ERROR = "RENDERER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Rendering errors
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    UNKNOWN_WIDGET = "UNKNOWN_WIDGET"
    INVALID_TIMEZONE = "INVALID_TIMEZONE"

    # Host service errors
    SESSKEY_MISSING = "SESSKEY_MISSING"
    STRING_CATALOG_ERROR = "STRING_CATALOG_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


class RendererException(Exception):
    """Base exception for renderer errors with HTTP status code support.

    All custom exceptions inherit from this class so the API error
    handler can turn them into structured responses.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RENDERER_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize renderer exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class TemplateRenderException(RendererException):
    """A Jinja2 template failed to load or render."""

    def __init__(self, template: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Failed to render template {template}: {message}",
            code=ErrorCode.TEMPLATE_ERROR,
            status_code=500,
            details={"template": template, **(details or {})},
        )


class UnknownWidgetException(RendererException):
    """No render operation is registered for the given view-model."""

    def __init__(self, widget: object):
        widget_type = type(widget).__name__
        super().__init__(
            f"No renderer registered for {widget_type}",
            code=ErrorCode.UNKNOWN_WIDGET,
            status_code=400,
            details={"widget_type": widget_type},
        )


class InvalidTimezoneException(RendererException):
    """The requested display timezone is not a known IANA zone."""

    def __init__(self, timezone: str):
        super().__init__(
            f"Unknown timezone: {timezone}",
            code=ErrorCode.INVALID_TIMEZONE,
            status_code=422,
            details={"timezone": timezone},
        )


class MissingSessionKeyException(RendererException):
    """A widget needs the session key but the host did not supply one."""

    def __init__(self, message: str = "Session key required but not supplied"):
        super().__init__(message, code=ErrorCode.SESSKEY_MISSING, status_code=400)


class StringCatalogException(RendererException):
    """The language string catalogue could not be loaded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.STRING_CATALOG_ERROR,
            status_code=500,
            details=details,
        )


class ConfigurationException(RendererException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
