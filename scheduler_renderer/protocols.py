"""Protocol definitions for the host services the renderer delegates to.

The renderer never builds URLs, looks up strings, resolves icons or
issues session keys itself. A host passes implementations of these
protocols in a HostServices bundle; scheduler_renderer.services ships
default adapters for standalone use and tests.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from markupsafe import Markup

from scheduler_renderer.models.scheduler import TextFormat, UserRef


class StringLookup(Protocol):
    """Localised string lookup."""

    def get_string(self, identifier: str, component: str, a: Any = None) -> str:
        """Return the string for identifier in component.

        Args:
            identifier: String key
            component: Owning component ('moodle' for core strings)
            a: Placeholder value, either a scalar or a mapping of named values

        Returns:
            The localised text (plain text, not HTML)
        """
        ...


class UrlBuilder(Protocol):
    """Host URL construction."""

    def url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Build a URL from a site-relative path or a full URL plus query params."""
        ...


class IconRenderer(Protocol):
    """Icon markup."""

    def pix_icon(
        self,
        name: str,
        alt: str,
        component: str = "moodle",
        attributes: dict[str, str] | None = None,
    ) -> Markup:
        """Render the icon called name (e.g. 't/edit') from component."""
        ...


class UserFormatter(Protocol):
    """User name and picture display."""

    def fullname(self, user: UserRef) -> str: ...

    def user_picture(self, user: UserRef, course_id: int | None = None) -> Markup: ...


class TextFormatter(Protocol):
    """Conversion of stored rich text to safe HTML."""

    def format_text(self, text: str, text_format: TextFormat, context_id: int | None = None) -> Markup: ...


class SessionKeyProvider(Protocol):
    """Anti-CSRF session key of the current user."""

    def sesskey(self) -> str: ...


@dataclass(frozen=True)
class HostServices:
    """The host services one render pass may use."""

    strings: StringLookup
    urls: UrlBuilder
    icons: IconRenderer
    users: UserFormatter
    text: TextFormatter
    session: SessionKeyProvider
