import os
import json
import re
from abc import ABC, abstractmethod
from datetime import datetime
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Best-effort string store. Implementations never raise from get/put."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return stored content for key, or None on miss or read failure"""
        pass

    @abstractmethod
    def put(self, key: str, content: str) -> None:
        """Store content under key; failures are logged, not raised"""
        pass

    @abstractmethod
    def clear(self, prefix: str = "") -> int:
        """Remove entries whose key starts with prefix. Returns count removed"""
        pass


class CacheHelper(KeyValueStore):
    """JSON files on disk, one per key, kept until cleared."""

    DEFAULT_CACHE_DIR = "~/.vaktija/cache"

    def __init__(self, cache_dir: Optional[str] = None, component_name: str = ""):
        """Initialize cache helper with specific cache directory
        Args:
            cache_dir: Base cache directory from config, if None uses DEFAULT_CACHE_DIR
            component_name: Optional subdirectory
        """
        base_dir = os.path.expanduser(cache_dir or self.DEFAULT_CACHE_DIR)
        self.cache_dir = os.path.join(base_dir, component_name) if component_name else base_dir
        os.makedirs(self.cache_dir, exist_ok=True)

    def _get_cache_file(self, key: str) -> str:
        """Map key to a filename inside cache_dir"""
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return os.path.join(self.cache_dir, f"{safe_key}.json")

    def get(self, key: str) -> Optional[str]:
        try:
            cache_file = self._get_cache_file(key)
            if not os.path.exists(cache_file):
                return None

            with open(cache_file, 'r', encoding='utf-8') as f:
                cached = json.load(f)

            return cached['content']

        except Exception as e:
            logger.error(f"Error reading cache entry {key}: {e}")
            return None

    def put(self, key: str, content: str) -> None:
        try:
            cache_data = {
                'key': key,
                'saved_at': datetime.now().isoformat(timespec='seconds'),
                'content': content
            }

            cache_file = self._get_cache_file(key)
            with open(cache_file, 'w', encoding='utf-8') as f:
                json.dump(cache_data, f, ensure_ascii=False)

        except Exception as e:
            logger.error(f"Error saving cache entry {key}: {e}")

    def clear(self, prefix: str = "") -> int:
        removed = 0
        safe_prefix = re.sub(r"[^A-Za-z0-9_.-]", "_", prefix)
        for name in os.listdir(self.cache_dir):
            if not name.endswith(".json") or not name.startswith(safe_prefix):
                continue
            try:
                os.remove(os.path.join(self.cache_dir, name))
                removed += 1
            except OSError as e:
                logger.error(f"Error removing cache file {name}: {e}")
        return removed


class DatabaseKeyValueStore(KeyValueStore):
    """Cache entries kept in the cache_entries table. Requires init_db()."""

    def get(self, key: str) -> Optional[str]:
        from vaktija.core.models import get_cache_value
        try:
            return get_cache_value(key)
        except Exception as e:
            logger.error(f"Error reading cache entry {key} from database: {e}")
            return None

    def put(self, key: str, content: str) -> None:
        from vaktija.core.models import put_cache_value
        try:
            put_cache_value(key, content)
        except Exception as e:
            logger.error(f"Error saving cache entry {key} to database: {e}")

    def clear(self, prefix: str = "") -> int:
        from vaktija.core.models import delete_cache_values
        return delete_cache_values(prefix)


def create_store(config_data: Optional[Dict[str, Any]] = None) -> KeyValueStore:
    """Build the store named by cache.backend ("file" or "database")."""
    cache_config = (config_data or {}).get("cache") or {}
    backend = str(cache_config.get("backend", "file")).lower()
    if backend == "database":
        from vaktija.core.db import init_db
        init_db(config_data)
        return DatabaseKeyValueStore()
    if backend != "file":
        logger.warning(f"Unknown cache backend {backend!r}, using file cache")
    return CacheHelper(cache_config.get("directory"))
