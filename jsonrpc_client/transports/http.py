"""
HTTP transport

Posts JSON-RPC 2.0 payloads to the connection host with httpx.
"""

import json
import logging
import time
from typing import Any, Dict, Optional

import httpx

from jsonrpc_client.config import ConnectionSettings
from jsonrpc_client.errors import TransportError
from jsonrpc_client.telemetry.metrics import increment_counter, record_latency
from jsonrpc_client.transports.transport_interface import Payload, TransportInterface

logger = logging.getLogger(__name__)


class HttpTransport(TransportInterface):
    """Synchronous HTTP transport sharing one httpx client across calls"""

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.Client] = None):
        """
        Args:
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (e.g. with a custom transport)
        """
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def send(self,
             service_name: str,
             settings: ConnectionSettings,
             payload: Payload,
             headers: Dict[str, str]) -> Any:
        body = json.dumps(payload)
        start_time = time.time()
        attributes = {"service": service_name, "transport": "http"}

        try:
            logger.debug(f"POST {settings.host}: {body[:200]}")
            increment_counter("rpc.transport.requests", 1, attributes)
            response = self._client.post(settings.host, content=body.encode("utf-8"), headers=headers)
        except httpx.TimeoutException as e:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "timeout"})
            raise TransportError(f"HTTP request to {settings.host} timed out: {e}") from e
        except httpx.InvalidURL as e:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "invalid_url"})
            raise TransportError(f"Invalid URL {settings.host!r}: {e}") from e
        except httpx.HTTPError as e:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "network"})
            raise TransportError(f"HTTP request to {settings.host} failed: {e}") from e

        latency_ms = (time.time() - start_time) * 1000
        record_latency("rpc.transport.latency", latency_ms, attributes)
        logger.debug(f"HTTP {response.status_code} from {settings.host} in {latency_ms:.2f}ms")

        if not response.is_success:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "http_status"})
            raise TransportError(
                f"HTTP {response.status_code} from {settings.host}",
                status_code=response.status_code,
            )

        if not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "malformed_json"})
            raise TransportError(f"Malformed JSON from {settings.host}: {e}",
                                 status_code=response.status_code) from e
