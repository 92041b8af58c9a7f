import asyncio
import gc
import os

import pytest

from bandsite.core.errors import ContentNotFound, ContentStoreError, InvalidContentKey
from bandsite.services import content_domains, content_store
from bandsite.services.content_store import FileContentStore, validate_key


@pytest.fixture
def store(tmp_path):
    return FileContentStore(str(tmp_path / "content"))


@pytest.mark.parametrize(
    "key, value",
    [
        ("about", {"members": [{"id": "1", "name": "Rat"}], "bio": ["hi"]}),
        ("music", {"releases": [], "streamingPlatforms": [{"name": "Spotify"}]}),
        ("site-config", {"ogImage": "/uploads/media/og.png"}),
        ("visibility", {"config": {"pages": {"home": False}}, "updatedAt": "2024-01-01T00:00:00.000Z"}),
    ],
)
async def test_write_then_read(store, key, value):
    await store.write(key, value)
    assert await store.read(key) == value
    record = await store.read_record(key)
    assert record["value"] == value
    assert record["updatedAt"].endswith("Z")


async def test_missing_key(store):
    with pytest.raises(ContentNotFound):
        await store.read("shows")
    assert await store.read_or_default("shows", {"upcomingShows": []}) == {"upcomingShows": []}
    assert await store.read_record("shows") == {"key": "shows", "value": None}


async def test_patch_is_shallow(store):
    await store.write("homepage", {"hero": {"title": "A", "tagline": ["x"]}, "featuredShow": {"enabled": True}})
    result = await store.patch("homepage", {"hero": {"title": "B"}})
    assert result == {"hero": {"title": "B"}, "featuredShow": {"enabled": True}}
    assert await store.read("homepage") == result


async def test_append_and_prepend(store):
    await store.append("orders", "orders", {"id": "1"})
    await store.append("orders", "orders", {"id": "2"}, prepend=True)
    assert [o["id"] for o in (await store.read("orders"))["orders"]] == ["2", "1"]


async def test_mutate_failure_leaves_document(store):
    await store.write("media", {"photos": [1]})

    def _boom(doc):
        raise RuntimeError("stop")

    with pytest.raises(RuntimeError):
        await store.mutate("media", _boom)
    assert await store.read("media") == {"photos": [1]}


class SlowReadStore(FileContentStore):
    async def read(self, key):
        value = await super().read(key)
        await asyncio.sleep(0.05)
        return value


async def test_write_waits_for_running_mutate(tmp_path):
    store = SlowReadStore(str(tmp_path / "slow"))
    await store.write("media", {"photos": [1]})

    await asyncio.gather(
        store.append("media", "photos", 2),
        store.write("media", {"photos": []}),
    )
    assert await store.read("media") == {"photos": []}


async def test_idle_locks_are_released(store):
    await store.write("media", {"photos": []})
    await store.patch("media", {"videos": []})
    gc.collect()
    assert not [slot for slot in content_store._locks.keys() if slot[1] == "media"]


async def test_malformed_json(store):
    with open(os.path.join(store.data_dir, "shows.json"), "w") as f:
        f.write("{not json")
    with pytest.raises(ContentStoreError):
        await store.read("shows")


@pytest.mark.parametrize("key", ["../etc/passwd", "", "a b", "x" * 101])
def test_invalid_keys(key):
    with pytest.raises(InvalidContentKey):
        validate_key(key)


async def test_domain_load_normalizes_broken_documents(store):
    await store.write("shows", {"upcomingShows": "oops"})
    doc = await content_domains.load(store, content_domains.SHOWS)
    assert doc == {"upcomingShows": [], "pastShows": []}

    products = await content_domains.load(store, content_domains.PRODUCTS)
    assert products["shippingRates"]["freeShippingThreshold"] == 7500


async def test_domain_update_applies_function(store):
    def _add(doc):
        doc["photos"].append({"id": "p"})
        return doc

    await content_domains.update(store, content_domains.MEDIA, _add)
    assert (await store.read("media"))["photos"] == [{"id": "p"}]
