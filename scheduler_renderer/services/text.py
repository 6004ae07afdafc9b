"""Rich text formatting for notes and descriptions."""

from markupsafe import Markup, escape

from scheduler_renderer.models.scheduler import TextFormat


class DefaultTextFormatter:
    """Turns stored text into HTML.

    HTML is passed through as stored; the host is expected to have
    cleaned it on save. Every other format is escaped and its line
    breaks kept.
    """

    def format_text(self, text: str, text_format: TextFormat, context_id: int | None = None) -> Markup:
        if text_format == TextFormat.HTML:
            return Markup(text)

        lines = escape(text.strip()).splitlines()
        return Markup('<div class="text_to_html">{}</div>').format(Markup("<br />").join(lines))
