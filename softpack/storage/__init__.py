from .kv_store import KeyValueStore, MemoryStore, JsonFileStore, create_store

__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore", "create_store"]
