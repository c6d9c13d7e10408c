"""
Transport factory

Creates transport instances (HTTP, ZeroMQ) from a type name and options, so the
transport can be chosen from configuration.
"""

from typing import Any, Dict

from jsonrpc_client.transports.http import HttpTransport
from jsonrpc_client.transports.transport_interface import TransportInterface
from jsonrpc_client.transports.zeromq import ZeroMQTransport


class TransportType:
    """Transport type constants"""
    HTTP = "http"
    ZEROMQ = "zeromq"


class TransportFactory:
    """Transport factory, used to create transport instances"""

    @staticmethod
    def create(transport_type: str, config: Dict[str, Any] = None) -> TransportInterface:
        """Create a transport

        Args:
            transport_type: Transport type, "http" or "zeromq"
            config: Transport options

        Returns:
            TransportInterface: Transport instance

        Raises:
            ValueError: Unknown transport type
        """
        if config is None:
            config = {}

        if transport_type.lower() == TransportType.HTTP:
            return HttpTransport(timeout=config.get("timeout", 30.0))
        elif transport_type.lower() == TransportType.ZEROMQ:
            return ZeroMQTransport(
                timeout_ms=config.get("timeout_ms", 5000),
                send_headers=config.get("send_headers", False),
            )
        else:
            raise ValueError(f"Invalid transport type: {transport_type}")
