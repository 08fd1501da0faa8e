"""Listing repository: picks the remote or local store on every call.

The two stores are independent replicas and are never merged. The remote
store is used whenever the environment looks networked and answers; the local
slot takes over silently otherwise.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from rent_board.exceptions import RemoteStoreError
from rent_board.models import Listing
from rent_board.models.image_ref import has_inline

from .base import ListingStore

if TYPE_CHECKING:
    from rent_board.services.transport import ImageTransport

logger = logging.getLogger(__name__)


class ListingRepository:
    def __init__(
        self,
        remote: ListingStore,
        local: ListingStore,
        transport: "ImageTransport",
        detector: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.remote = remote
        self.local = local
        self.transport = transport
        self.detector = detector or (lambda: True)

    def remote_reachable(self) -> bool:
        try:
            return bool(self.detector())
        except Exception:
            return False

    async def _run(self, fn: Callable, *args: object):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn, *args)

    async def _read_local(self) -> List[Listing]:
        try:
            return list(await self._run(self.local.read))
        except Exception as exc:
            logger.warning("Local store unreadable, returning no listings: %s", exc)
            return []

    async def list(self) -> List[Listing]:
        """Return the collection newest-first. Never raises."""
        if self.remote_reachable():
            try:
                return list(await self._run(self.remote.read))
            except Exception as exc:
                logger.warning("Using local store fallback: %s", exc)
        return await self._read_local()

    async def create(self, listing: Listing) -> List[Listing]:
        """Prepend ``listing`` and persist the whole collection.

        On the remote path inline images are uploaded first. If the upload or
        the save fails, the untouched listing goes to the local store instead,
        so no uploaded paths ever reach the local slot.
        """
        current = await self.list()
        if self.remote_reachable():
            try:
                images = await self.transport.upload(listing.images)
                if has_inline(images):
                    raise RemoteStoreError("images were not uploaded")
                stored = listing.model_copy(update={"images": images})
                updated = [stored, *current]
                await self._run(self.remote.write, updated)
                logger.info("Saved listing %s to remote store", listing.id)
                return updated
            except Exception as exc:
                logger.warning("Saving listing %s locally (offline mode): %s", listing.id, exc)
        updated = [listing, *current]
        await self._run(self.local.write, updated)
        return updated

    async def delete(self, listing_id: str) -> List[Listing]:
        """Drop the listing with ``listing_id`` and persist the rest.

        The filtered collection is returned even if neither store accepted it.
        """
        current = await self.list()
        updated = [l for l in current if l.id != listing_id]
        if self.remote_reachable():
            try:
                await self._run(self.remote.write, updated)
                return updated
            except Exception as exc:
                logger.warning("Deleting %s locally (offline mode): %s", listing_id, exc)
        try:
            await self._run(self.local.write, updated)
        except Exception as exc:
            logger.error("Could not persist deletion of %s: %s", listing_id, exc)
        return updated
