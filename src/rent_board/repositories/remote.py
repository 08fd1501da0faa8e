from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import requests
from pydantic import ValidationError

from rent_board.config import BoardConfig
from rent_board.exceptions import RemoteStoreError
from rent_board.models import Listing, ListingList, UploadResult
from rent_board.utils import jsonify_listings

from .base import ListingStore

logger = logging.getLogger(__name__)

# (filename, payload, mime type)
UploadFile = Tuple[str, bytes, str]


class RemoteStore(ListingStore):
    """Thin client for the board's HTTP endpoint.

    One URL serves three calls:

    - ``GET`` returns the JSON array of listings.
    - ``POST`` with a JSON array body replaces the whole collection.
    - ``POST`` with multipart ``files[]`` parts stores images and answers
      ``{"paths": [...]}`` in submission order.

    Every failure, including a body that does not match the expected
    schema, is raised as ``RemoteStoreError``.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 10.0,
        user_agent: str = "RentBoard/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: BoardConfig) -> "RemoteStore":
        return cls(config.api_url, timeout=config.timeout_secs, user_agent=config.user_agent)

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}

    def _post(self, **kwargs: object) -> requests.Response:
        try:
            r = self.session.post(self.api_url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise RemoteStoreError(f"POST {self.api_url} failed: {exc}") from exc
        if not r.ok:
            raise RemoteStoreError(f"POST {self.api_url} returned {r.status_code}")
        return r

    def read(self) -> List[Listing]:
        try:
            r = self.session.get(self.api_url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as exc:
            raise RemoteStoreError(f"GET {self.api_url} failed: {exc}") from exc
        if not r.ok:
            raise RemoteStoreError(f"GET {self.api_url} returned {r.status_code}")
        try:
            return ListingList.validate_json(r.content)
        except ValidationError as exc:
            raise RemoteStoreError(f"GET {self.api_url} returned a malformed collection") from exc

    def write(self, listings: Sequence[Listing]) -> None:
        self._post(json=jsonify_listings(listings))
        logger.info("Saved %d listings to %s", len(listings), self.api_url)

    def upload(self, files: Sequence[UploadFile]) -> List[str]:
        parts = [("files[]", (name, data, mime)) for name, data, mime in files]
        r = self._post(files=parts)
        try:
            return UploadResult.model_validate_json(r.content).paths
        except ValidationError as exc:
            raise RemoteStoreError(f"POST {self.api_url} returned a malformed upload result") from exc
