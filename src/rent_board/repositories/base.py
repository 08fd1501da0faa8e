from __future__ import annotations

from typing import List, Sequence

from rent_board.models import Listing


class ListingStore:
    """A place that holds the whole listing collection as one replaceable value."""

    def read(self) -> List[Listing]:
        raise NotImplementedError

    def write(self, listings: Sequence[Listing]) -> None:
        raise NotImplementedError
