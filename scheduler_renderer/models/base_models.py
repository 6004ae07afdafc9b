"""Pydantic models for API request/response envelopes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response with dependency status."""

    status: str = Field(..., description="Overall health status: healthy or unhealthy")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server timestamp")
    checks: dict[str, str] = Field(..., description="Individual health check results")


class JsModuleCall(BaseModel):
    """A client-side module the host page must initialise after inserting a fragment."""

    module: str
    function: str = "init"
    args: list[Any] = Field(default_factory=list)


class RenderedFragment(BaseModel):
    """Rendered HTML plus the JavaScript it depends on."""

    html: str
    js_modules: list[JsModuleCall] = Field(default_factory=list)


class GradeText(BaseModel):
    """A formatted grade."""

    text: str


class GradingChoices(BaseModel):
    """Options for a grade chooser, in display order."""

    choices: dict[int, str]


class ErrorDetail(BaseModel):
    """Error body produced by the API error handlers."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error response."""

    error: ErrorDetail
