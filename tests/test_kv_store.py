"""Tests for key-value store backends."""

import os

import pytest

from config.config import Config
from database import InMemoryKeyValueStore, SQLiteKeyValueStore, create_store


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request, tmp_path):
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return SQLiteKeyValueStore(db_path=str(tmp_path / "db" / "kv.db"))


class TestKeyValueStore:

    @pytest.mark.asyncio
    async def test_missing_key_is_none(self, any_store):
        assert await any_store.get("nothing") is None

    @pytest.mark.asyncio
    async def test_set_get_overwrite(self, any_store):
        await any_store.set("key", '{"a": 1}')
        assert await any_store.get("key") == '{"a": 1}'

        await any_store.set("key", "второе значение")
        assert await any_store.get("key") == "второе значение"

    @pytest.mark.asyncio
    async def test_remove(self, any_store):
        await any_store.set("key", "value")
        await any_store.remove("key")
        assert await any_store.get("key") is None

        # Удаление отсутствующего ключа не ошибка
        await any_store.remove("key")

    @pytest.mark.asyncio
    async def test_rejects_non_string_values(self, any_store):
        with pytest.raises(TypeError):
            await any_store.set("key", {"a": 1})


class TestInMemoryKeyValueStore:

    @pytest.mark.asyncio
    async def test_initial_values_and_keys(self):
        store = InMemoryKeyValueStore({"a": "1"})
        await store.set("b", "2")
        assert store.keys() == ["a", "b"]
        assert await store.get("a") == "1"


class TestSQLiteKeyValueStore:

    @pytest.mark.asyncio
    async def test_creates_directory_and_persists(self, tmp_path):
        db_path = str(tmp_path / "nested" / "connectai.db")
        await SQLiteKeyValueStore(db_path).set("k", "v")

        assert os.path.exists(db_path)
        assert await SQLiteKeyValueStore(db_path).get("k") == "v"


def test_create_store_selects_backend(tmp_path):
    base = dict(
        LOG_LEVEL="INFO",
        LOG_FILE="",
        DB_PATH=str(tmp_path / "kv.db"),
        RESPONSE_DELAY_SECONDS=0,
        ADMIN_DELAY_SECONDS=0,
        MAX_CHAT_HISTORY=50,
    )
    assert isinstance(create_store(Config(STORAGE_BACKEND="memory", **base)), InMemoryKeyValueStore)

    store = create_store(Config(STORAGE_BACKEND="sqlite", **base))
    assert isinstance(store, SQLiteKeyValueStore)
    assert store.db_path == str(tmp_path / "kv.db")
