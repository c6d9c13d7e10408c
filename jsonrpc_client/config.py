"""
Configuration settings for the JSON-RPC client
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from jsonrpc_client.errors import ConfigurationError


@dataclass
class ConnectionConfig:
    """Configuration for one named connection"""
    url: Optional[str] = None
    key: Optional[str] = None
    auth_header_name: Optional[str] = None
    additional_headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionConfig":
        if not isinstance(data, dict):
            raise ConfigurationError(f"Connection entry must be a mapping, got {type(data).__name__}")
        headers = data.get("additional_headers") or {}
        if not isinstance(headers, dict):
            raise ConfigurationError("additional_headers must be a mapping")
        return cls(
            url=data.get("url"),
            key=data.get("key"),
            auth_header_name=data.get("auth_header_name"),
            additional_headers=dict(headers),
        )


@dataclass(frozen=True)
class ConnectionSettings:
    """Connection options resolved for one execution cycle"""
    host: Optional[str]
    key: Optional[str] = None
    auth_header: Optional[str] = None
    additional_headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ClientConfig:
    """Main configuration for a JSON-RPC client instance"""
    default_service: str = "default"
    client_name: Optional[str] = None
    additional_headers: Dict[str, str] = field(default_factory=dict)
    connections: Dict[str, ConnectionConfig] = field(default_factory=dict)
    timeout: float = 30.0  # Transport timeout in seconds

    # Tracing configuration
    propagate_trace_context: bool = True

    def get_connection_settings(self, name: str) -> ConnectionSettings:
        """Resolve the settings of a named connection

        Unknown connections resolve to settings without a host.
        """
        connection = self.connections.get(name)
        if connection is None:
            return ConnectionSettings(host=None, additional_headers=dict(self.additional_headers))

        headers = dict(self.additional_headers)
        headers.update(connection.additional_headers)
        return ConnectionSettings(
            host=connection.url,
            key=connection.key,
            auth_header=connection.auth_header_name,
            additional_headers=headers,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        """Create config from a plain mapping (e.g. a parsed YAML document)"""
        if not isinstance(data, dict):
            raise ConfigurationError("Client configuration must be a mapping")

        connections = data.get("connections") or {}
        if not isinstance(connections, dict):
            raise ConfigurationError("connections must be a mapping of name to connection")

        try:
            timeout = float(data.get("timeout", 30.0))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid timeout: {data.get('timeout')!r}") from exc

        return cls(
            default_service=data.get("default_service", "default"),
            client_name=data.get("client_name"),
            additional_headers=dict(data.get("additional_headers") or {}),
            connections={
                name: ConnectionConfig.from_dict(entry)
                for name, entry in connections.items()
            },
            timeout=timeout,
            propagate_trace_context=bool(data.get("propagate_trace_context", True)),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "ClientConfig":
        """Create config from a YAML file"""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Cannot load configuration from {path}: {exc}") from exc
        return cls.from_dict(data or {})

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create config with a single default connection from environment variables"""
        service = os.getenv("JSONRPC_CLIENT_DEFAULT", "default")
        connection = ConnectionConfig(
            url=os.getenv("JSONRPC_CLIENT_URL"),
            key=os.getenv("JSONRPC_CLIENT_KEY"),
            auth_header_name=os.getenv("JSONRPC_CLIENT_AUTH_HEADER"),
        )
        return cls(
            default_service=service,
            client_name=os.getenv("JSONRPC_CLIENT_NAME"),
            connections={service: connection},
            timeout=float(os.getenv("JSONRPC_CLIENT_TIMEOUT", "30")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "default_service": self.default_service,
            "client_name": self.client_name,
            "additional_headers": dict(self.additional_headers),
            "connections": {
                name: {
                    "url": connection.url,
                    "key": connection.key,
                    "auth_header_name": connection.auth_header_name,
                    "additional_headers": dict(connection.additional_headers),
                }
                for name, connection in self.connections.items()
            },
            "timeout": self.timeout,
            "propagate_trace_context": self.propagate_trace_context,
        }
