"""
Key-value хранилище для конфигурации, корпуса и истории чата.

Значения - строки (JSON), запись целиком, последний писатель побеждает.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

import aiosqlite

from utils.logger import setup_logger

logger = setup_logger(name="kv_store", level=logging.INFO)

# Ошибки бэкендов, которые сервисы обрабатывают на своей границе
STORAGE_ERRORS = (OSError, aiosqlite.Error)


class KeyValueStore(ABC):
    """Абстракция хранилища: get/set/remove по строковому ключу."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def remove(self, key: str) -> None:
        ...

    async def close(self) -> None:
        return None


class InMemoryKeyValueStore(KeyValueStore):
    """Хранилище в памяти процесса (тесты, демо)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Value for '{key}' must be str, got {type(value).__name__}")
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class SQLiteKeyValueStore(KeyValueStore):
    """
    Хранилище в SQLite.

    Одна таблица kv_store, запись через INSERT OR REPLACE.
    """

    def __init__(self, db_path: str = "db/connectai.db"):
        self.db_path = db_path
        self._initialized = False

    async def init_db(self):
        """Инициализация таблицы в БД."""
        if self._initialized:
            return

        db_dir = os.path.dirname(self.db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)
            logger.info(f"Создана директория: {db_dir}")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            await db.commit()

        self._initialized = True
        logger.info(f"SQLiteKeyValueStore инициализирован: {self.db_path}")

    async def get(self, key: str) -> Optional[str]:
        await self.init_db()

        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,)
            ) as cursor:
                row = await cursor.fetchone()

        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Value for '{key}' must be str, got {type(value).__name__}")
        await self.init_db()

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("""
                INSERT OR REPLACE INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
            """, (key, value))
            await db.commit()

    async def remove(self, key: str) -> None:
        await self.init_db()

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            await db.commit()


def create_store(config) -> KeyValueStore:
    """Выбор хранилища по Config.STORAGE_BACKEND."""
    if config.STORAGE_BACKEND == "sqlite":
        return SQLiteKeyValueStore(db_path=config.DB_PATH)
    return InMemoryKeyValueStore()
