"""Health endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from jinja2 import TemplateNotFound

from scheduler_renderer import __version__
from scheduler_renderer.config import Settings, get_settings
from scheduler_renderer.dependencies import get_host_services
from scheduler_renderer.models import DetailedHealthResponse, HealthResponse
from scheduler_renderer.protocols import HostServices
from scheduler_renderer.views.template_renderer import templates

router = APIRouter()

REQUIRED_TEMPLATES = (
    "slot_table.html",
    "student_list.html",
    "slot_booker.html",
    "command_bar.html",
    "slot_manager.html",
    "scheduling_list.html",
    "tabtree.html",
)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(
    services: HostServices = Depends(get_host_services),
    settings: Settings = Depends(get_settings),
):
    """Readiness check: can the renderer serve fragments?

    Checks that every widget template loads and that the string
    catalogue resolves a known string.

    **Returns:**
    - 200: Ready to render
    - 503: A template or the string catalogue is unusable
    """
    checks = {}

    missing = []
    for name in REQUIRED_TEMPLATES:
        try:
            templates.get_template(name)
        except TemplateNotFound:
            missing.append(name)
    checks["templates"] = "ok" if not missing else f"missing: {', '.join(missing)}"

    sample = services.strings.get_string("date", settings.component)
    checks["strings"] = "ok" if not sample.startswith("[[") else "incomplete"

    healthy = all(value == "ok" for value in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
