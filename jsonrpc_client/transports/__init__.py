"""
Transport Module

Transport implementations that carry serialized JSON-RPC payloads to a service:
- http: JSON over HTTP POST (httpx)
- zeromq: JSON frames over a ZeroMQ REQ socket

All transports report failures as TransportError so the client can treat them uniformly.
"""

from .transport_factory import TransportFactory, TransportType
from .transport_interface import TransportInterface

__all__ = [
    "TransportFactory",
    "TransportType",
    "TransportInterface",
]
