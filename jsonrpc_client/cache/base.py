"""
Cache adapter interface

Defines the contract every result cache implements so the client can short-circuit
cacheable calls without knowing where results are stored.
"""

import abc
import hashlib
import json
from typing import Optional

from jsonrpc_client.models import CachedResult, CallRecord


def fingerprint(record: CallRecord) -> str:
    """Deterministic cache key for a call

    Derived from the service name, method and params. Mapping keys are sorted,
    positional params keep their order.
    """
    canonical = json.dumps(
        [record.service_name, record.method, record.params],
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class CacheAdapter(abc.ABC):
    """Key/value store for finalized call results"""

    def __init__(self, default_ttl: int = 60):
        """
        Args:
            default_ttl: Expiration in minutes used when a call does not specify one
        """
        self.default_ttl = default_ttl

    def resolve_ttl(self, ttl: Optional[int]) -> int:
        """Map None or a negative TTL to the adapter default"""
        if ttl is None or ttl < 0:
            return self.default_ttl
        return ttl

    @abc.abstractmethod
    def lookup(self, key: str) -> Optional[CachedResult]:
        """Return the stored result, or None when absent or expired"""
        pass

    @abc.abstractmethod
    def store(self, key: str, ttl: Optional[int], result: CachedResult) -> None:
        """Persist a result

        Args:
            key: Call fingerprint
            ttl: Minutes until expiry; None or negative means the adapter default
            result: (success, data, error) tuple
        """
        pass

    @abc.abstractmethod
    def forget(self, key: str) -> None:
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        pass
