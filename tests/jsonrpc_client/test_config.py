"""
Tests for client configuration
"""
import os
import pytest
from unittest.mock import patch

from jsonrpc_client.config import ClientConfig, ConnectionConfig
from jsonrpc_client.errors import ConfigurationError


class TestConnectionSettings:
    """Resolution of named connections"""

    def test_headers_are_merged(self, config):
        settings = config.get_connection_settings("billing")
        assert settings.host == "http://billing.local/rpc"
        assert settings.key == "secret-key"
        assert settings.auth_header == "X-Api-Key"
        assert settings.additional_headers == {"X-Global": "global", "X-Region": "eu"}

    def test_connection_header_overrides_global(self):
        config = ClientConfig(
            additional_headers={"X-Env": "prod"},
            connections={"svc": ConnectionConfig(url="http://svc", additional_headers={"X-Env": "stage"})},
        )
        assert config.get_connection_settings("svc").additional_headers == {"X-Env": "stage"}

    def test_unknown_connection_has_no_host(self, config):
        settings = config.get_connection_settings("unknown")
        assert settings.host is None


class TestLoading:
    """Loading from mappings, YAML and environment"""

    def test_from_dict(self):
        config = ClientConfig.from_dict({
            "default_service": "users",
            "client_name": "frontend",
            "timeout": "5",
            "connections": {
                "users": {"url": "http://users/rpc", "key": "k", "auth_header_name": "X-Key"},
            },
        })
        assert config.default_service == "users"
        assert config.client_name == "frontend"
        assert config.timeout == 5.0
        assert config.connections["users"].auth_header_name == "X-Key"
        assert config.propagate_trace_context is True

    @pytest.mark.parametrize("document", [
        ["not", "a", "mapping"],
        {"connections": ["users"]},
        {"connections": {"users": "http://users/rpc"}},
        {"connections": {"users": {"url": "x", "additional_headers": ["X-A"]}}},
        {"timeout": "soon"},
    ])
    def test_from_dict_rejects_malformed(self, document):
        with pytest.raises(ConfigurationError):
            ClientConfig.from_dict(document)

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "jsonrpc.yaml"
        path.write_text(
            "default_service: orders\n"
            "additional_headers:\n"
            "  X-Client: shop\n"
            "connections:\n"
            "  orders:\n"
            "    url: http://orders/rpc\n"
            "    additional_headers:\n"
            "      X-Region: us\n"
        )
        config = ClientConfig.from_yaml(str(path))
        settings = config.get_connection_settings("orders")
        assert settings.host == "http://orders/rpc"
        assert settings.additional_headers == {"X-Client": "shop", "X-Region": "us"}

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ClientConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_from_env(self):
        with patch.dict(os.environ, {
            "JSONRPC_CLIENT_DEFAULT": "payments",
            "JSONRPC_CLIENT_URL": "http://payments/rpc",
            "JSONRPC_CLIENT_KEY": "k-123",
            "JSONRPC_CLIENT_AUTH_HEADER": "X-Access-Key",
            "JSONRPC_CLIENT_NAME": "worker",
        }, clear=True):
            config = ClientConfig.from_env()
        settings = config.get_connection_settings("payments")
        assert config.default_service == "payments"
        assert config.client_name == "worker"
        assert settings.host == "http://payments/rpc"
        assert settings.key == "k-123"
        assert settings.auth_header == "X-Access-Key"
        assert config.timeout == 30.0

    def test_round_trip_through_dict(self, config):
        assert ClientConfig.from_dict(config.to_dict()) == config
