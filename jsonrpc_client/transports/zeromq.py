"""
ZeroMQ transport

Sends JSON-RPC 2.0 payloads over a ZeroMQ REQ socket and waits for the reply frame.
"""

import json
import logging
import time
from typing import Any, Dict

import zmq

from jsonrpc_client.config import ConnectionSettings
from jsonrpc_client.errors import TransportError
from jsonrpc_client.telemetry.metrics import increment_counter, record_latency
from jsonrpc_client.transports.transport_interface import Payload, TransportInterface

logger = logging.getLogger(__name__)


class ZeroMQTransport(TransportInterface):
    """
    ZeroMQ transport, one REQ socket per host.

    ZeroMQ has no header concept: with ``send_headers`` enabled the headers travel
    as a JSON object in a first frame ahead of the request body, otherwise they
    are not sent.
    """

    def __init__(self, timeout_ms: int = 5000, send_headers: bool = False):
        """
        Args:
            timeout_ms: Receive timeout in milliseconds
            send_headers: Whether to send headers as a leading frame
        """
        self.timeout_ms = timeout_ms
        self.send_headers = send_headers
        self.context = zmq.Context()
        self._sockets: Dict[str, zmq.Socket] = {}

    def __del__(self):
        self.close()

    def close(self) -> None:
        for socket in getattr(self, "_sockets", {}).values():
            socket.close(linger=0)
        if hasattr(self, "_sockets"):
            self._sockets.clear()
        if hasattr(self, "context") and self.context and not self.context.closed:
            self.context.term()

    def _socket_for(self, address: str) -> zmq.Socket:
        socket = self._sockets.get(address)
        if socket is None:
            socket = self.context.socket(zmq.REQ)
            socket.setsockopt(zmq.RCVTIMEO, self.timeout_ms)
            socket.setsockopt(zmq.LINGER, 0)
            socket.connect(address)
            self._sockets[address] = socket
            logger.info(f"ZeroMQ transport connected to {address}")
        return socket

    def _discard_socket(self, address: str) -> None:
        # A REQ socket that missed its reply cannot send again
        socket = self._sockets.pop(address, None)
        if socket is not None:
            socket.close(linger=0)

    def send(self,
             service_name: str,
             settings: ConnectionSettings,
             payload: Payload,
             headers: Dict[str, str]) -> Any:
        address = settings.host
        body = json.dumps(payload).encode("utf-8")
        attributes = {"service": service_name, "transport": "zeromq"}
        start_time = time.time()

        try:
            socket = self._socket_for(address)
            logger.debug(f"Sending request to {address}: {body[:200]!r}")
            increment_counter("rpc.transport.requests", 1, attributes)
            if self.send_headers:
                socket.send_multipart([json.dumps(headers).encode("utf-8"), body])
            else:
                socket.send(body)
            reply = socket.recv()
        except zmq.error.Again as e:
            latency_ms = (time.time() - start_time) * 1000
            logger.error(f"Request to {address} timed out after {latency_ms:.2f}ms")
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "timeout"})
            self._discard_socket(address)
            raise TransportError(f"ZeroMQ request timed out ({self.timeout_ms}ms)") from e
        except zmq.error.ZMQError as e:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "zmq_error"})
            self._discard_socket(address)
            raise TransportError(f"ZeroMQ error: {e}") from e

        latency_ms = (time.time() - start_time) * 1000
        record_latency("rpc.transport.latency", latency_ms, attributes)
        logger.debug(f"Reply from {address} in {latency_ms:.2f}ms")

        if not reply.strip():
            return None

        try:
            return json.loads(reply.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            increment_counter("rpc.transport.errors", 1, {**attributes, "type": "malformed_json"})
            raise TransportError(f"Malformed JSON from {address}: {e}") from e
