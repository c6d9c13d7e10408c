"""
Result cache adapters

Cacheable calls are looked up under a deterministic fingerprint before dispatch
and stored after a successful reply:
- memory: in-process dictionary with expiry
- disk: persistent cache backed by diskcache
"""

from .base import CacheAdapter, fingerprint
from .memory import MemoryCache
from .disk import DiskCache

__all__ = [
    "CacheAdapter",
    "DiskCache",
    "MemoryCache",
    "fingerprint",
]
