"""
Transport interface

Defines the unified interface implemented by every transport (HTTP, ZeroMQ).
The client only depends on this contract, so the wire mechanism can change
without touching request batching or reply correlation.
"""

import abc
from typing import Any, Dict, List, Union

from jsonrpc_client.config import ConnectionSettings

Payload = Union[Dict[str, Any], List[Dict[str, Any]]]


class TransportInterface(abc.ABC):
    """Transport interface, defines the methods every transport must implement"""

    @abc.abstractmethod
    def send(self,
             service_name: str,
             settings: ConnectionSettings,
             payload: Payload,
             headers: Dict[str, str]) -> Any:
        """Send a JSON-RPC request (or batch) and wait for the reply

        Args:
            service_name: Name of the remote service, used for logging and metrics
            settings: Resolved connection settings, ``settings.host`` is the target
            payload: A single request object or a list of request objects
            headers: Outbound headers

        Returns:
            The decoded reply: a dict, a list of dicts, or None for an empty body

        Raises:
            TransportError: Network failure, non-2xx status or malformed JSON
        """
        pass

    @abc.abstractmethod
    def close(self) -> None:
        """Close connections and release resources"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
