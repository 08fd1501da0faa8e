from __future__ import annotations

import hmac
import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from pydantic import BaseModel

from rent_board.config import BoardConfig
from rent_board.exceptions import AdminAuthError, ListingValidationError
from rent_board.models import Listing
from rent_board.repositories import ListingRepository, LocalStore, RemoteStore

from .encoder import ImageEncoder
from .environment import EnvironmentDetector
from .transport import ImageTransport

logger = logging.getLogger(__name__)

MAX_IMAGES = 3

_BASE36 = string.digits + string.ascii_lowercase


def _base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = _BASE36[r] + out
        if n == 0:
            return out


def new_listing_id(now_ms: Optional[int] = None) -> str:
    """Millisecond time in base36 followed by a random base36 suffix."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(11))
    return _base36(now_ms) + suffix


class ListingDraft(BaseModel):
    """Text fields of the posting form."""

    contact_name: str = ""
    contact_phone: str = ""
    location: str = ""
    price: str = ""
    details: str = ""


@dataclass
class SearchQuery:
    text: str = ""

    def matches(self, listing: Listing) -> bool:
        q = self.text.strip().lower()
        if not q:
            return True
        return q in listing.location.lower() or q in listing.details.lower()


class BoardService:
    """What the board pages call: post, browse and admin removal."""

    def __init__(
        self,
        repository: ListingRepository,
        encoder: ImageEncoder,
        config: Optional[BoardConfig] = None,
    ) -> None:
        self.repository = repository
        self.encoder = encoder
        self.config = config or BoardConfig()

    async def browse(self, query: str = "") -> List[Listing]:
        sq = SearchQuery(query or "")
        return [l for l in await self.repository.list() if sq.matches(l)]

    async def submit(self, draft: ListingDraft, photos: Sequence[bytes] = ()) -> List[Listing]:
        """Validate, compress photos and create the listing.

        Image errors propagate before anything is persisted.
        """
        missing = [
            name
            for name, value in (
                ("contact_name", draft.contact_name),
                ("contact_phone", draft.contact_phone),
                ("location", draft.location),
            )
            if not value.strip()
        ]
        if missing:
            raise ListingValidationError(f"missing required fields: {', '.join(missing)}")
        if len(photos) > MAX_IMAGES:
            logger.info("Keeping the first %d of %d photos", MAX_IMAGES, len(photos))
            photos = list(photos)[:MAX_IMAGES]

        images = await self.encoder.encode_many(photos)
        now_ms = int(time.time() * 1000)
        listing = Listing(
            id=new_listing_id(now_ms),
            contact_name=draft.contact_name,
            contact_phone=draft.contact_phone,
            location=draft.location,
            price=draft.price,
            details=draft.details,
            images=images,
            timestamp=now_ms,
        )
        return await self.repository.create(listing)

    def check_admin(self, passphrase: Optional[str]) -> bool:
        expected = self.config.admin_passphrase
        if not expected or passphrase is None:
            return False
        return hmac.compare_digest(passphrase.encode("utf-8"), expected.encode("utf-8"))

    async def remove(self, listing_id: str, passphrase: Optional[str]) -> List[Listing]:
        if not self.check_admin(passphrase):
            raise AdminAuthError("admin passphrase rejected")
        return await self.repository.delete(listing_id)


def build_board(config: Optional[BoardConfig] = None) -> BoardService:
    """Wire the stores, transport and encoder from ``config``."""
    config = config or BoardConfig()
    remote = RemoteStore.from_config(config)
    repository = ListingRepository(
        remote=remote,
        local=LocalStore(config.data_dir, config.storage_key),
        transport=ImageTransport(remote),
        detector=EnvironmentDetector(config),
    )
    encoder = ImageEncoder(max_width=config.max_image_width, quality=config.jpeg_quality)
    return BoardService(repository, encoder, config)
