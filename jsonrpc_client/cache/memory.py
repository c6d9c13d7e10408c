"""
In-process result cache
"""

import copy
import logging
import time
from typing import Dict, Optional, Tuple

from jsonrpc_client.cache.base import CacheAdapter
from jsonrpc_client.models import CachedResult

logger = logging.getLogger(__name__)


class MemoryCache(CacheAdapter):
    """Dictionary-backed cache with per-entry expiry, local to one process"""

    def __init__(self, default_ttl: int = 60, clock=time.monotonic):
        super().__init__(default_ttl)
        self._clock = clock
        self._entries: Dict[str, Tuple[float, CachedResult]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, key: str) -> Optional[CachedResult]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, result = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None
        return copy.deepcopy(result)

    def store(self, key: str, ttl: Optional[int], result: CachedResult) -> None:
        minutes = self.resolve_ttl(ttl)
        self._entries[key] = (self._clock() + minutes * 60, copy.deepcopy(CachedResult(*result)))
        logger.debug(f"Cached result {key} for {minutes} minutes")

    def forget(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
