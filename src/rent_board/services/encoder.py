"""Image compression for photos attached to a listing.

Photos are decoded, narrowed to a bounded width and re-encoded as JPEG so an
inline listing stays small enough for both stores.
"""

from __future__ import annotations

import asyncio
import io
import logging
from typing import List, Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from rent_board.exceptions import DecodeError, EncodeError
from rent_board.models.image_ref import to_data_url

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 1000
DEFAULT_QUALITY = 80


def target_size(width: int, height: int, max_width: int = DEFAULT_MAX_WIDTH) -> tuple[int, int]:
    """Return the output size for a source of ``width`` x ``height``.

    Only narrows; never upscales. The height follows the same ratio as the
    width, truncated to whole pixels.
    """
    if width <= max_width:
        return width, height
    scale = max_width / width
    return max_width, max(1, int(height * scale))


class ImageEncoder:
    """Turns raw photo bytes into inline ``data:image/jpeg;base64,...`` strings."""

    def __init__(self, max_width: int = DEFAULT_MAX_WIDTH, quality: int = DEFAULT_QUALITY) -> None:
        self.max_width = max_width
        self.quality = quality

    def encode(self, raw: bytes) -> str:
        """Compress ``raw`` and return it as a data URL.

        Raises:
            DecodeError: the bytes are not a readable image.
            EncodeError: the decoded image could not be rendered as JPEG.
        """
        try:
            img = Image.open(io.BytesIO(raw))
            img.load()
            # camera rotation lives in EXIF and is lost on re-encode
            img = ImageOps.exif_transpose(img)
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"cannot decode image: {exc}") from exc

        source = img.size
        try:
            size = target_size(img.width, img.height, self.max_width)
            if size != img.size:
                img = img.resize(size, Image.Resampling.LANCZOS)
            if img.mode != "RGB":
                img = img.convert("RGB")
            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=self.quality)
        except (OSError, ValueError, MemoryError) as exc:
            raise EncodeError(f"cannot render image: {exc}") from exc

        logger.debug("Encoded image %dx%d -> %dx%d", *source, *size)
        return to_data_url(buffer.getvalue(), "image/jpeg")

    async def encode_async(self, raw: bytes) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.encode, raw)

    async def encode_many(self, photos: Sequence[bytes]) -> List[str]:
        """Encode a batch concurrently; results keep the input order."""
        return list(await asyncio.gather(*(self.encode_async(p) for p in photos)))
