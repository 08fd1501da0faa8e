from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError

from rent_board.config import DEFAULT_STORAGE_KEY
from rent_board.exceptions import LocalStoreError
from rent_board.models import Listing, ListingList
from rent_board.utils import jsonify_listings

from .base import ListingStore

logger = logging.getLogger(__name__)


class LocalStore(ListingStore):
    """On-device fallback store: one JSON slot named by a fixed storage key.

    The slot lives at ``<data_dir>/<storage_key>.json`` and always holds the
    full collection. Reads never fail; an absent or unparsable slot reads as
    an empty collection.
    """

    def __init__(self, data_dir: str | Path, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.path = Path(data_dir) / f"{storage_key}.json"

    def read(self) -> List[Listing]:
        if not self.path.exists():
            return []
        try:
            return ListingList.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.warning("Ignoring unreadable local slot %s: %s", self.path, exc)
            return []

    def write(self, listings: Sequence[Listing]) -> None:
        payload = json.dumps(jsonify_listings(listings), ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".slot-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise LocalStoreError(f"could not write {self.path}: {exc}") from exc
        logger.debug("Wrote %d listings to %s", len(listings), self.path)
