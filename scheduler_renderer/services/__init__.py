"""Default host service adapters."""

from scheduler_renderer.config import Settings
from scheduler_renderer.protocols import HostServices
from scheduler_renderer.services.icons import PixIconRenderer
from scheduler_renderer.services.session import StaticSessionKey
from scheduler_renderer.services.strings import CatalogStringLookup
from scheduler_renderer.services.text import DefaultTextFormatter
from scheduler_renderer.services.urls import SiteUrlBuilder
from scheduler_renderer.services.users import DefaultUserFormatter


def build_host_services(
    settings: Settings,
    strings: CatalogStringLookup | None = None,
    sesskey: str | None = None,
) -> HostServices:
    """Assemble the default adapters for the configured site.

    Args:
        settings: Settings instance
        strings: Preloaded catalogue (loaded from settings when omitted)
        sesskey: Session key of the current user, if known

    Returns:
        HostServices bundle
    """
    if strings is None:
        strings = CatalogStringLookup.from_file(settings.catalogue_path, settings.language)
    urls = SiteUrlBuilder(settings.wwwroot)

    return HostServices(
        strings=strings,
        urls=urls,
        icons=PixIconRenderer(urls),
        users=DefaultUserFormatter(urls, strings),
        text=DefaultTextFormatter(),
        session=StaticSessionKey(sesskey),
    )


__all__ = [
    "CatalogStringLookup",
    "DefaultTextFormatter",
    "DefaultUserFormatter",
    "PixIconRenderer",
    "SiteUrlBuilder",
    "StaticSessionKey",
    "build_host_services",
]
