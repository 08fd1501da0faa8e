from __future__ import annotations

from urllib.parse import urlparse

from rent_board.config import BoardConfig


def remote_available(api_url: str | None) -> bool:
    """Is the remote store plausibly reachable from here?

    True only for ``http``/``https`` endpoints with a host, the counterpart of
    a page served over the network rather than opened from disk. Never raises.
    """
    try:
        u = urlparse(api_url or "")
        return u.scheme in ("http", "https") and bool(u.netloc)
    except Exception:
        return False


class EnvironmentDetector:
    """Zero-argument predicate bound to a config, evaluated fresh on every call."""

    def __init__(self, config: BoardConfig) -> None:
        self.config = config

    def __call__(self) -> bool:
        return remote_available(self.config.api_url)
