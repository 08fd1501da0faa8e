from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Sequence

from rent_board.models.image_ref import decode_data_url, extension_for, is_inline
from rent_board.repositories.remote import RemoteStore, UploadFile

logger = logging.getLogger(__name__)


class ImageTransport:
    """Moves inline images to the remote store and swaps in the stored paths.

    External references pass through untouched and every reference keeps its
    index. Any failure leaves the input as it was: inline entries stay
    inline and the caller decides what that means. No retries.
    """

    def __init__(self, remote: RemoteStore) -> None:
        self.remote = remote

    async def upload(self, images: Sequence[str]) -> List[str]:
        original = list(images)
        pending = [i for i, ref in enumerate(original) if is_inline(ref)]
        if not pending:
            return original

        stamp = int(time.time() * 1000)
        files: List[UploadFile] = []
        for n, i in enumerate(pending):
            try:
                mime, data = decode_data_url(original[i])
            except ValueError as exc:
                logger.warning("Image %d is not a usable data URL (%s); skipping upload", i, exc)
                return original
            files.append((f"img_{stamp}_{n}.{extension_for(mime)}", data, mime))

        loop = asyncio.get_running_loop()
        try:
            paths = await loop.run_in_executor(None, self.remote.upload, files)
        except Exception as exc:
            logger.warning("Image upload failed: %s", exc)
            return original

        if len(paths) != len(pending):
            logger.warning("Upload returned %d paths for %d images", len(paths), len(pending))
            return original

        out = list(original)
        for i, path in zip(pending, paths):
            out[i] = path
        logger.info("Uploaded %d images", len(paths))
        return out
