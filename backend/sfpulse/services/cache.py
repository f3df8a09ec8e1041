"""
Small key/value caches for upstream responses.

Social-search quota is tiny, so evidence posts are cached per
``(topic, sentiment)`` for a week by default. Services receive a ``Cache``
instance instead of reaching for a module global; tests pass ``MemoryCache``.
"""
import json
import re
import time
from pathlib import Path
from typing import Any, Callable, Optional, Protocol
from loguru import logger


class Cache(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ...


class MemoryCache:
    """In-process cache, mostly for tests"""

    def __init__(self, default_ttl: float = 7 * 24 * 60 * 60, clock: Callable[[], float] = time.time):
        self.default_ttl = default_ttl
        self.clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self.clock() > expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = (self.clock() + ttl, value)


class FileCache:
    """One JSON file per key under ``cache_dir``"""

    def __init__(self, cache_dir: str, default_ttl: float = 7 * 24 * 60 * 60, clock: Callable[[], float] = time.time):
        self.cache_dir = Path(cache_dir)
        self.default_ttl = default_ttl
        self.clock = clock

    def _path(self, key: str) -> Path:
        sanitized = re.sub(r"[^a-zA-Z0-9]", "_", key)
        return self.cache_dir / f"{sanitized}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None

        age = self.clock() - entry.get("timestamp", 0)
        if age > entry.get("ttl", self.default_ttl):
            logger.info(f"Cache expired for {key} (age: {round(age / 60)} minutes)")
            return None

        logger.info(f"Using cached data for {key} (age: {round(age / 60)} minutes)")
        return entry.get("data")

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        entry = {
            "key": key,
            "data": value,
            "timestamp": self.clock(),
            "ttl": self.default_ttl if ttl is None else ttl,
        }
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(json.dumps(entry, indent=2), encoding="utf-8")
            logger.info(f"Cached data for {key}")
        except OSError as e:
            logger.error(f"Error caching data for {key}: {e}")

    def clear(self) -> None:
        for path in self.cache_dir.glob("*.json"):
            path.unlink(missing_ok=True)
        logger.info("Cache cleared")
