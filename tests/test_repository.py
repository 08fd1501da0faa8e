from __future__ import annotations

import pytest

from rent_board.exceptions import LocalStoreError
from rent_board.models.image_ref import is_inline, to_data_url
from rent_board.repositories import ListingRepository
from rent_board.services import ImageTransport

from conftest import FakeStore, make_listing

INLINE_A = to_data_url(b"first-jpeg-bytes")
INLINE_B = to_data_url(b"second-png-bytes", "image/png")


@pytest.mark.asyncio
async def test_creates_are_listed_newest_first(repo, online):
    online["value"] = False
    for i in range(1, 4):
        await repo.create(make_listing(f"L{i}", ts=i))

    listed = await repo.list()
    assert [l.id for l in listed] == ["L3", "L2", "L1"]


@pytest.mark.asyncio
async def test_creates_are_listed_newest_first_on_remote(repo, remote):
    for i in range(1, 4):
        await repo.create(make_listing(f"L{i}", ts=i))

    assert [l.id for l in await repo.list()] == ["L3", "L2", "L1"]
    assert [l.id for l in remote.listings] == ["L3", "L2", "L1"]


@pytest.mark.asyncio
async def test_delete_of_unknown_id_leaves_collection_unchanged(repo, online):
    online["value"] = False
    await repo.create(make_listing("a"))
    await repo.create(make_listing("b"))

    before = await repo.list()
    after = await repo.delete("missing")
    assert after == before
    assert await repo.list() == before


@pytest.mark.asyncio
async def test_remote_create_replaces_inline_images_in_order(repo, remote, local):
    listing = make_listing("p3", images=[INLINE_A, "uploads/already.jpg", INLINE_B])

    result = await repo.create(listing)

    created = result[0]
    assert not any(is_inline(i) for i in created.images)
    assert created.images[1] == "uploads/already.jpg"
    assert created.images[0].startswith("uploads/img_") and created.images[0].endswith("_0.jpg")
    assert created.images[2].endswith("_1.png")
    assert (await repo.list())[0].images == created.images
    assert remote.calls.count("upload") == 1
    assert local.read() == []


@pytest.mark.asyncio
async def test_remote_write_failure_saves_original_listing_locally(repo, remote, local):
    remote.listings = [make_listing("old")]
    remote.fail_write = True
    listing = make_listing("new", images=[INLINE_A, INLINE_B])

    result = await repo.create(listing)

    assert [l.id for l in result] == ["new", "old"]
    assert result[0].images == [INLINE_A, INLINE_B]
    stored = local.read()
    assert [l.id for l in stored] == ["new", "old"]
    assert stored[0].images == [INLINE_A, INLINE_B]


@pytest.mark.asyncio
async def test_upload_failure_falls_back_to_local(repo, remote, local):
    remote.fail_upload = True
    listing = make_listing("n", images=[INLINE_A])

    result = await repo.create(listing)

    assert result[0].images == [INLINE_A]
    assert "write" not in remote.calls
    assert local.read()[0].images == [INLINE_A]


@pytest.mark.asyncio
async def test_offline_never_touches_remote(repo, remote, online):
    online["value"] = False
    created = await repo.create(make_listing("x", images=[INLINE_A]))
    await repo.list()
    await repo.delete("x")

    assert created[0].images == [INLINE_A]
    assert remote.calls == []


@pytest.mark.asyncio
async def test_list_falls_back_to_local_when_remote_read_fails(repo, remote, local):
    local.write([make_listing("cached")])
    remote.fail_read = True

    assert [l.id for l in await repo.list()] == ["cached"]


@pytest.mark.asyncio
async def test_list_never_raises(remote, online):
    broken = FakeStore()
    broken.fail_read = True
    remote.fail_read = True
    repo = ListingRepository(remote, broken, ImageTransport(remote), lambda: True)  # type: ignore[arg-type]

    assert await repo.list() == []


@pytest.mark.asyncio
async def test_detector_errors_count_as_offline(remote, local):
    def boom() -> bool:
        raise RuntimeError("no window")

    repo = ListingRepository(remote, local, ImageTransport(remote), boom)  # type: ignore[arg-type]
    await repo.create(make_listing("a"))

    assert remote.calls == []
    assert [l.id for l in local.read()] == ["a"]


@pytest.mark.asyncio
async def test_delete_falls_back_to_local_when_remote_write_fails(repo, remote, local):
    remote.listings = [make_listing("a"), make_listing("b")]
    remote.fail_write = True

    result = await repo.delete("a")

    assert [l.id for l in result] == ["b"]
    assert [l.id for l in local.read()] == ["b"]


@pytest.mark.asyncio
async def test_delete_returns_filtered_collection_when_both_stores_fail(remote):
    remote.listings = [make_listing("a"), make_listing("b")]
    remote.fail_write = True
    broken_local = FakeStore()
    broken_local.fail_write = True
    repo = ListingRepository(remote, broken_local, ImageTransport(remote), lambda: True)  # type: ignore[arg-type]

    result = await repo.delete("b")

    assert [l.id for l in result] == ["a"]


@pytest.mark.asyncio
async def test_local_only_scenario(repo, online):
    online["value"] = False
    from rent_board.models import Listing

    listing = Listing(id="lq2x7k", contactName="A", contactPhone="000", location="X", timestamp=1_700_000_000_000)
    await repo.create(listing)

    listed = await repo.list()
    assert len(listed) == 1
    assert listed[0].images == []
    assert listed[0].id
    assert listed[0].timestamp > 0

    await repo.delete(listed[0].id)
    assert await repo.list() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("remote_up", [False, True])
async def test_create_raises_when_local_fallback_cannot_be_written(remote, broken_local, remote_up):
    remote.fail_write = True
    repo = ListingRepository(remote, broken_local, ImageTransport(remote), lambda: remote_up)  # type: ignore[arg-type]

    with pytest.raises(LocalStoreError):
        await repo.create(make_listing("n", images=[INLINE_A]))
    assert remote.listings == []
