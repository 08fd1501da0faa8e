from __future__ import annotations

import io
from typing import List, Optional, Sequence

import pytest
from PIL import Image

from rent_board.exceptions import LocalStoreError, RemoteStoreError
from rent_board.models import Listing
from rent_board.repositories import ListingRepository, ListingStore, LocalStore
from rent_board.services import ImageTransport


class FakeStore(ListingStore):
    """In-memory store that can be told to fail and records every call."""

    def __init__(self, listings: Optional[List[Listing]] = None) -> None:
        self.listings = list(listings or [])
        self.fail_read = False
        self.fail_write = False
        self.fail_upload = False
        self.write_error: Exception = RemoteStoreError("write failed")
        self.calls: List[str] = []
        self.uploaded: List[tuple] = []
        self.paths: Optional[List[str]] = None

    def read(self) -> List[Listing]:
        self.calls.append("read")
        if self.fail_read:
            raise RemoteStoreError("read failed")
        return list(self.listings)

    def write(self, listings: Sequence[Listing]) -> None:
        self.calls.append("write")
        if self.fail_write:
            raise self.write_error
        self.listings = list(listings)

    def upload(self, files: Sequence[tuple]) -> List[str]:
        self.calls.append("upload")
        if self.fail_upload:
            raise RemoteStoreError("upload failed")
        self.uploaded.extend(files)
        if self.paths is not None:
            return list(self.paths)
        return [f"uploads/{name}" for name, _data, _mime in files]


def make_listing(id: str, images: Optional[List[str]] = None, ts: int = 1_700_000_000_000) -> Listing:
    return Listing(
        id=id,
        contact_name="A",
        contact_phone="000",
        location="X",
        price="3500/month",
        details="near campus",
        images=images or [],
        timestamp=ts,
    )


def image_bytes(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    Image.new(mode, (width, height), color=color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def remote() -> FakeStore:
    return FakeStore()


@pytest.fixture
def local(tmp_path) -> LocalStore:
    return LocalStore(tmp_path, "test_slot")


@pytest.fixture
def broken_local() -> FakeStore:
    store = FakeStore()
    store.fail_write = True
    store.write_error = LocalStoreError("disk full")
    return store


@pytest.fixture
def online() -> dict:
    return {"value": True}


@pytest.fixture
def repo(remote: FakeStore, local: LocalStore, online: dict) -> ListingRepository:
    return ListingRepository(
        remote=remote,
        local=local,
        transport=ImageTransport(remote),  # type: ignore[arg-type]
        detector=lambda: online["value"],
    )
