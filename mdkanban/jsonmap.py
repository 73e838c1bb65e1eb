"""
JSON object file used as a logical-path -> value map.

Backs tags.json (tag colors) and sort.json (lane/card ordering). Reads are
tolerant: a missing, unreadable or malformed file reads as {}. Writes hold
a per-store lock across load -> modify -> persist, so two writers in the
same process never lose each other's keys. Writers in other processes
still race (last write wins).
"""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Union

from .errors import StorageError
from .paths import atomic_write

logger = logging.getLogger(__name__)


class JsonMapStore:
    """Read-modify-write accessor for a single JSON object file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> Dict[str, Any]:
        """Return the whole map, or {} if the file is absent or bad."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unreadable {self.path.name}, treating as empty: {e}")
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed {self.path.name}, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"{self.path.name} is not a JSON object, treating as empty")
            return {}
        return data

    def get(self, key: str) -> Any:
        """Value stored under key, {} if absent. Never raises."""
        return self.load().get(key, {})

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite one key and persist the whole map."""
        with self._lock:
            data = self.load()
            data[key] = value
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                atomic_write(self.path, json.dumps(data, ensure_ascii=False))
            except OSError as e:
                raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug(f"{self.path.name}: set {key!r}")
