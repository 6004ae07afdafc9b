"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from scheduler_renderer import __version__
from scheduler_renderer.config import get_settings
from scheduler_renderer.core.lifespan import lifespan
from scheduler_renderer.core.middleware import setup_middleware
from scheduler_renderer.middleware.error_handlers import register_error_handlers
from scheduler_renderer.routers import health_router, render_router


def custom_openapi(app: FastAPI):
    """Generate OpenAPI schema with the bearer security scheme."""
    if app.openapi_schema:
        return app.openapi_schema

    from fastapi.openapi.utils import get_openapi

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        license_info=app.license_info,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "API Key",
            "description": "Render API key configured as RENDER_API_KEY",
        }
    }

    for path, path_item in openapi_schema.get("paths", {}).items():
        if not path.startswith("/api/"):
            continue
        for method, operation in path_item.items():
            if method in ["get", "post"]:
                operation["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Scheduler Renderer API",
        description="""
        Renders appointment scheduler views (slot tables, student lists,
        booking forms, command bars and tabs) as HTML fragments for a host
        page.

        ## Authentication
        All `/api/render` endpoints require `Authorization: Bearer <RENDER_API_KEY>`.

        ## Responses
        - `format=json` (default): `{"html": ..., "js_modules": [...]}`
        - `format=html`: the bare fragment

        ## Per-request context
        - `tz` query parameter: viewer's timezone for slot dates and times
        - `X-Scheduler-Sesskey` header: session key for state-changing links
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "GPL-3.0-or-later",
        },
    )

    setup_middleware(app, settings)

    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(render_router.router, prefix="/api/render", tags=["render"])

    app.openapi = lambda: custom_openapi(app)

    return app
