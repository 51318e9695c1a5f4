from .kv_store import (
    KeyValueStore,
    InMemoryKeyValueStore,
    SQLiteKeyValueStore,
    create_store,
    STORAGE_ERRORS,
)

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "create_store",
    "STORAGE_ERRORS",
]
