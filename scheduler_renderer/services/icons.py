"""Icon rendering as plain <img> tags."""

from markupsafe import Markup, escape

from scheduler_renderer.services.urls import SiteUrlBuilder


class PixIconRenderer:
    """Renders icons as ``<img>`` tags served from ``{wwwroot}/pix/{component}/{name}.svg``."""

    def __init__(self, urls: SiteUrlBuilder):
        self.urls = urls

    def icon_url(self, name: str, component: str = "moodle") -> str:
        return self.urls.url(f"/pix/{component}/{name}.svg")

    def pix_icon(
        self,
        name: str,
        alt: str,
        component: str = "moodle",
        attributes: dict[str, str] | None = None,
    ) -> Markup:
        attrs = {"class": "icon", "src": self.icon_url(name, component), "alt": alt}
        if alt:
            attrs["title"] = alt
        for key, value in (attributes or {}).items():
            # Extra classes are appended to the base icon class
            attrs[key] = f"icon {value}" if key == "class" else value

        rendered = " ".join(f'{escape(key)}="{escape(value)}"' for key, value in attrs.items())
        return Markup(f"<img {rendered} />")
