from __future__ import annotations

import logging
import re

_DATA_URL_RE = re.compile(r"data:([\w/+.-]*);base64,[A-Za-z0-9+/=]+")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class InlineImageFormatter(logging.Formatter):
    """Formatter that omits base64 image payloads from rendered records.

    Listings carry inline data URLs until they are uploaded; this keeps them
    from flooding the terminal while leaving the rest of the message intact.
    """

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        return _DATA_URL_RE.sub(_placeholder, text)


def _placeholder(m: re.Match) -> str:
    return f"<inline {m.group(1) or 'image'}, {len(m.group(0))} chars>"


def configure_logging(level: str | int = "INFO") -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(InlineImageFormatter(LOG_FORMAT))
    root = logging.getLogger("rent_board")
    root.handlers[:] = [handler]
    root.setLevel(level.upper() if isinstance(level, str) else level)
