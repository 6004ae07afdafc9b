"""URL building relative to the host site root."""

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def query_params(url: str) -> list[tuple[str, str]]:
    """Return the query parameters of url in order."""
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


class SiteUrlBuilder:
    """Builds absolute URLs under wwwroot, merging query parameters.

    Site-relative paths ("/mod/scheduler/view.php") are prefixed with
    wwwroot; full URLs are used as they are. Parameters override any
    parameter of the same name already present, and None values are
    dropped.
    """

    def __init__(self, wwwroot: str):
        self.wwwroot = wwwroot.rstrip("/")

    def url(self, path: str, params: dict[str, Any] | None = None) -> str:
        if path.startswith("/"):
            path = self.wwwroot + path
        parts = urlsplit(path)

        merged = dict(parse_qsl(parts.query, keep_blank_values=True))
        for key, value in (params or {}).items():
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = str(value)

        return urlunsplit(parts._replace(query=urlencode(merged)))
