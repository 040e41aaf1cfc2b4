import json
import pytest
from unittest.mock import AsyncMock, MagicMock
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.session_store import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionBackend,
    StorageUnavailableError,
    build_session_backend,
)
from app.services.form_storage import FormStorage


@pytest.mark.asyncio
async def test_load_without_record_is_empty(form_storage):
    assert await form_storage.load() == {}


@pytest.mark.asyncio
async def test_save_merges_over_existing_record(form_storage):
    await form_storage.save({"fullName": "Ananya", "chooseBCA": "yes"})
    await form_storage.save({"campus": "Kolkata", "chooseBCA": "no"})

    assert await form_storage.load() == {
        "fullName": "Ananya",
        "chooseBCA": "no",
        "campus": "Kolkata",
    }


@pytest.mark.asyncio
async def test_record_is_stored_as_one_json_object(form_storage, memory_store):
    await form_storage.save({"fullName": "Ananya"})
    raw = await memory_store.get("admissionForm")
    assert json.loads(raw) == {"fullName": "Ananya"}


@pytest.mark.asyncio
async def test_clear_is_idempotent(form_storage):
    await form_storage.save({"fullName": "Ananya"})
    await form_storage.clear()
    assert await form_storage.load() == {}
    await form_storage.clear()
    assert await form_storage.load() == {}


@pytest.mark.asyncio
async def test_sessions_do_not_share_records():
    buckets = {}
    first = FormStorage(InMemorySessionStore("one", buckets))
    second = FormStorage(InMemorySessionStore("two", buckets))

    await first.save({"fullName": "Ananya"})

    assert await second.load() == {}
    assert await first.load() == {"fullName": "Ananya"}


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["not json", "[1, 2]", "\"text\""])
async def test_corrupt_record_reads_as_empty(memory_store, raw):
    await memory_store.set("admissionForm", raw)
    assert await FormStorage(memory_store).load() == {}


# ------------------------------------------------------------
# Redis backend (client mocked)
# ------------------------------------------------------------
def make_redis_store(client):
    return RedisSessionStore("abc", client, prefix="admission", ttl_seconds=60)


@pytest.mark.asyncio
async def test_redis_store_namespaces_keys_and_sets_ttl():
    client = MagicMock()
    client.set = AsyncMock()
    client.get = AsyncMock(return_value=b'{"fullName": "Ananya"}')
    client.delete = AsyncMock()
    store = make_redis_store(client)

    await store.set("admissionForm", "{}")
    client.set.assert_awaited_once_with("admission:abc:admissionForm", "{}", ex=60)

    assert await store.get("admissionForm") == '{"fullName": "Ananya"}'

    await store.remove("admissionForm")
    client.delete.assert_awaited_once_with("admission:abc:admissionForm")


@pytest.mark.asyncio
async def test_redis_read_failure_loads_empty():
    client = MagicMock()
    client.get = AsyncMock(side_effect=RedisConnectionError("down"))
    storage = FormStorage(make_redis_store(client))

    assert await storage.load() == {}


@pytest.mark.asyncio
async def test_redis_write_failure_propagates():
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(side_effect=RedisConnectionError("down"))
    storage = FormStorage(make_redis_store(client))

    with pytest.raises(StorageUnavailableError):
        await storage.save({"campus": "Kolkata"})


@pytest.mark.asyncio
async def test_save_after_read_failure_keeps_stored_record():
    stored = {"admission:abc:admissionForm": json.dumps({"fullName": "Ananya", "chooseBCA": "yes"})}

    async def record_set(key, value, ex=None):
        stored[key] = value

    client = MagicMock()
    client.get = AsyncMock(side_effect=RedisConnectionError("blip"))
    client.set = AsyncMock(side_effect=record_set)
    storage = FormStorage(make_redis_store(client))

    with pytest.raises(StorageUnavailableError):
        await storage.save({"campus": "Kolkata"})

    client.set.assert_not_awaited()
    assert json.loads(stored["admission:abc:admissionForm"]) == {"fullName": "Ananya", "chooseBCA": "yes"}


def test_backend_without_url_falls_back_to_memory():
    backend = build_session_backend(None)
    assert backend.name == "memory"
    assert isinstance(backend.for_session("x"), InMemorySessionStore)


def test_backend_with_bad_url_falls_back_to_memory():
    backend = build_session_backend("not-a-redis-url")
    assert backend.name == "memory"


def test_backend_with_client_builds_redis_stores():
    backend = SessionBackend(client=MagicMock())
    assert backend.name == "redis"
    assert isinstance(backend.for_session("x"), RedisSessionStore)
