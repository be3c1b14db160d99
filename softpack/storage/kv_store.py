"""
Key-value storage port with JSON-file and in-memory backends.

Every store in SoftPack persists through this interface:
    get(key)        -> stored value, or None when the key is absent
    set(key, value) -> replace the value (JSON-compatible data only)
    remove(key)     -> drop the key; missing keys are ignored
"""

import copy
import json
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.exceptions import StorageError


class KeyValueStore(ABC):
    """Abstract storage port"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryStore(KeyValueStore):
    """Dict-backed store for tests and throwaway processes"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[Any]:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class JsonFileStore(KeyValueStore):
    """One JSON document per key under data_dir, written atomically"""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(exist_ok=True, parents=True)

    def _path(self, key: str) -> Path:
        safe = "".join(c if c.isalnum() or c in "-_." else "_" for c in key)
        return self.data_dir / f"{safe}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {key} from {path}: {str(e)}")

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        self._atomic_write(path, value)

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            if path.exists():
                path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to remove {key} at {path}: {str(e)}")

    def _atomic_write(self, path: Path, data: Any) -> None:
        """Write JSON file atomically"""
        temp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w", dir=str(path.parent), delete=False, encoding="utf-8"
            ) as tf:
                temp_path = Path(tf.name)
                json.dump(data, tf, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to serialize data for {path}: {str(e)}")

        try:
            # Atomic move/replace
            shutil.move(str(temp_path), str(path))
        except Exception as e:
            # Clean up temp file if move failed
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Failed to save data to {path}: {str(e)}")


def create_store(storage_settings) -> KeyValueStore:
    """Build the backend named in StorageSettings"""
    if storage_settings.backend == "memory":
        return MemoryStore()
    return JsonFileStore(Path(storage_settings.data_dir))
