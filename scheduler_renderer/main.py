"""Main FastAPI application entry point."""

import os
from pathlib import Path

from dotenv import load_dotenv

from scheduler_renderer.core.app_factory import create_app
from scheduler_renderer.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
setup_logging(os.getenv("LOG_LEVEL", "INFO"))

app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    from scheduler_renderer.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "scheduler_renderer.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
