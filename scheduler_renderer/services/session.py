"""Session key supplied by the host with each render request."""

from scheduler_renderer.exceptions import MissingSessionKeyException


class StaticSessionKey:
    """Hands out a session key passed in by the host.

    The key is only checked when a widget actually needs it, so requests
    for widgets without state-changing links may omit it.
    """

    def __init__(self, key: str | None = None):
        self._key = key

    def sesskey(self) -> str:
        if not self._key:
            raise MissingSessionKeyException()
        return self._key
