"""
JSON-RPC 2.0 batch client

Turns logical remote calls into single or batched JSON-RPC 2.0 exchanges:

1. Calls: each ``invoke`` yields a ResultSlot the caller keeps
2. Batching: ``begin_batch`` defers calls until ``execute`` sends them in one request
3. Correlation: replies are matched to slots by id, never by position
4. Caching: calls marked with ``with_cache`` are served from a CacheAdapter when possible
5. Transports: HTTP (httpx) and ZeroMQ

Execution cycles are traced with OpenTelemetry.
"""

from jsonrpc_client.client import Client
from jsonrpc_client.config import ClientConfig, ConnectionConfig, ConnectionSettings
from jsonrpc_client.errors import (
    ConfigurationError,
    ErrorCode,
    JsonRpcClientError,
    RpcError,
    TransportError,
)
from jsonrpc_client.models import CallRecord, ResultSlot

__version__ = "0.1.0"

__all__ = [
    "CallRecord",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "ConnectionConfig",
    "ConnectionSettings",
    "ErrorCode",
    "JsonRpcClientError",
    "ResultSlot",
    "RpcError",
    "TransportError",
]
