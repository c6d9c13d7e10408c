"""
Persistent result cache backed by diskcache
"""

import logging
from typing import Optional

import diskcache

from jsonrpc_client.cache.base import CacheAdapter
from jsonrpc_client.models import CachedResult

logger = logging.getLogger(__name__)


class DiskCache(CacheAdapter):
    """Stores cached results on disk so they survive process restarts"""

    def __init__(self, directory: str, default_ttl: int = 60):
        """
        Args:
            directory: Cache directory, created if missing
            default_ttl: Expiration in minutes used when a call does not specify one
        """
        super().__init__(default_ttl)
        self.directory = directory
        self._cache = diskcache.Cache(directory)
        logger.info(f"Disk cache opened at {directory}")

    def lookup(self, key: str) -> Optional[CachedResult]:
        value = self._cache.get(key, default=None)
        if value is None:
            return None
        return CachedResult(*value)

    def store(self, key: str, ttl: Optional[int], result: CachedResult) -> None:
        minutes = self.resolve_ttl(ttl)
        # expire=0 stores an entry that is already expired
        self._cache.set(key, tuple(result), expire=minutes * 60)

    def forget(self, key: str) -> None:
        self._cache.delete(key)

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()
