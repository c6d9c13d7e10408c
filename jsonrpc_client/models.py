"""
Call records and result slots

A CallRecord describes one logical remote call; its ResultSlot is the handle the
caller keeps and which is filled in once the owning cycle executes.
"""

import uuid
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from jsonrpc_client.errors import RpcError

JSONRPC_VERSION = "2.0"

# Value persisted by cache adapters
CachedResult = namedtuple("CachedResult", ["success", "data", "error"])


def new_call_id() -> str:
    return uuid.uuid4().hex


@dataclass
class CallRecord:
    """One logical RPC call"""
    method: str
    params: Any = None
    service_name: Optional[str] = None
    client_label: Optional[str] = None
    # None = not cacheable, negative = adapter default, otherwise minutes
    cache_ttl: Optional[int] = None
    id: str = field(default_factory=new_call_id)

    @property
    def wants_cache(self) -> bool:
        return self.cache_ttl is not None

    def to_payload(self) -> Dict[str, Any]:
        """Render the JSON-RPC 2.0 request object"""
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "method": self.method,
            "params": self.params if self.params is not None else {},
            "id": self.id,
        }
        if self.client_label:
            payload["client"] = self.client_label
        return payload


class ResultSlot:
    """
    Eventual outcome of a CallRecord.

    ``success`` is None while the slot is pending, then True or False. A slot is
    finalized exactly once; further resolution attempts raise RuntimeError.
    """

    def __init__(self, call_id: str):
        self.call_id = call_id
        self._success: Optional[bool] = None
        self._data: Any = None
        self._error: Optional[RpcError] = None

    @property
    def success(self) -> Optional[bool]:
        return self._success

    @property
    def data(self) -> Any:
        return self._data

    @property
    def error(self) -> Optional[RpcError]:
        return self._error

    @property
    def pending(self) -> bool:
        return self._success is None

    def resolve(self, success: bool, data: Any = None, error: Optional[RpcError] = None) -> None:
        """Finalize the slot

        Args:
            success: Whether the call succeeded
            data: Result payload, kept only on success
            error: Structured error, kept only on failure

        Raises:
            RuntimeError: The slot was already finalized
        """
        if not self.pending:
            raise RuntimeError(f"Result slot {self.call_id} is already resolved")

        self._success = bool(success)
        if self._success:
            self._data = data
        else:
            self._error = error

    def as_cached(self) -> CachedResult:
        return CachedResult(self._success, self._data, self._error)

    def resolve_from_cache(self, cached: CachedResult) -> None:
        self.resolve(cached.success, cached.data, cached.error)

    def __repr__(self) -> str:
        if self.pending:
            state = "pending"
        elif self._success:
            state = f"success data={self._data!r}"
        else:
            state = f"failure error={self._error!r}"
        return f"<ResultSlot {self.call_id} {state}>"
