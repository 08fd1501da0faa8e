"""Helpers for image references stored on a listing.

A reference is either an inline data URL (``data:image/jpeg;base64,...``)
that carries its own mime type, or an external path returned by the remote
store after upload (``uploads/img_123.jpg``, ``https://...``).
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Iterable, Tuple

DATA_URL_PREFIX = "data:"
DEFAULT_MIME = "image/jpeg"

_HEADER_RE = re.compile(r"^data:([^;,]*)(;[^,]*)?$")

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


def is_inline(ref: str) -> bool:
    return ref.startswith(DATA_URL_PREFIX)


def has_inline(refs: Iterable[str]) -> bool:
    return any(is_inline(r) for r in refs)


def to_data_url(data: bytes, mime: str = DEFAULT_MIME) -> str:
    """Wrap raw image bytes as a self-describing base64 data URL."""
    b64 = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{b64}"


def decode_data_url(ref: str) -> Tuple[str, bytes]:
    """Split a base64 data URL into ``(mime, payload)``.

    A header without a mime type falls back to ``image/jpeg``. Raises
    ``ValueError`` if the reference is not a base64 data URL or the payload
    is empty or not valid base64.
    """
    header, sep, payload = ref.partition(",")
    m = _HEADER_RE.match(header)
    params = (m.group(2) or "")[1:].split(";") if m else []
    if not sep or not m or "base64" not in params:
        raise ValueError("not a base64 data URL")
    mime = m.group(1) or DEFAULT_MIME
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("invalid base64 payload") from exc
    if not data:
        raise ValueError("empty image payload")
    return mime, data


def extension_for(mime: str) -> str:
    return _EXTENSIONS.get(mime.lower(), "jpg")
