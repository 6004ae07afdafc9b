"""String catalogue lookup backed by a JSON language pack."""

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from scheduler_renderer.exceptions import StringCatalogException
from scheduler_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

NAMED_PLACEHOLDER = re.compile(r"\{\$a->(\w+)\}")


def substitute(text: str, a: Any) -> str:
    """Fill ``{$a}`` / ``{$a->name}`` placeholders in a catalogue string."""
    if a is None:
        return text
    if isinstance(a, Mapping):
        return NAMED_PLACEHOLDER.sub(lambda m: str(a.get(m.group(1), m.group(0))), text)
    return text.replace("{$a}", str(a))


class CatalogStringLookup:
    """Looks strings up in a ``{component: {identifier: text}}`` catalogue.

    Missing strings render as ``[[identifier]]`` so a page never fails
    because of an incomplete language pack.
    """

    def __init__(self, catalogue: Mapping[str, Mapping[str, str]], language: str = "en"):
        self._catalogue = catalogue
        self.language = language

    @classmethod
    def from_file(cls, path: Path, language: str = "en") -> "CatalogStringLookup":
        """Load a catalogue from a JSON file.

        Raises:
            StringCatalogException: If the file is missing or malformed
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise StringCatalogException(
                f"String catalogue not found: {path}",
                details={"path": str(path)},
            ) from e
        except json.JSONDecodeError as e:
            raise StringCatalogException(
                f"String catalogue contains invalid JSON: {e}",
                details={"path": str(path)},
            ) from e

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise StringCatalogException(
                "String catalogue must map component names to string tables",
                details={"path": str(path)},
            )

        log_with_context(
            logger,
            "info",
            "String catalogue loaded",
            path=str(path),
            language=language,
            components=sorted(data),
            event_type="strings_loaded",
        )
        return cls(data, language)

    def get_string(self, identifier: str, component: str, a: Any = None) -> str:
        text = self._catalogue.get(component, {}).get(identifier)
        if text is None:
            log_with_context(
                logger,
                "warning",
                "Missing language string",
                identifier=identifier,
                component=component,
                language=self.language,
                event_type="string_missing",
            )
            return f"[[{identifier}]]"
        return substitute(text, a)
