"""Template loading and rendering for HTML fragments."""

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError
from markupsafe import Markup

from scheduler_renderer.exceptions import TemplateRenderException
from scheduler_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.trim_blocks = True
templates.env.lstrip_blocks = True


def render_template(template_name: str, /, **context: Any) -> Markup:
    """Render a fragment template to markup.

    Args:
        template_name: Template path relative to the templates directory
        **context: Template variables; plain strings are escaped,
            Markup values are inserted as they are

    Returns:
        Rendered HTML

    Raises:
        TemplateRenderException: If the template is missing or fails to render
    """
    try:
        html = templates.get_template(template_name).render(**context)
    except TemplateError as e:
        log_with_context(
            logger,
            "error",
            "Template rendering failed",
            template=template_name,
            error=str(e),
            error_type=type(e).__name__,
            event_type="template_error",
        )
        raise TemplateRenderException(template_name, str(e)) from e
    return Markup(html.strip())
