"""
Shared fixtures for client tests
"""
import pytest

from jsonrpc_client.cache import MemoryCache
from jsonrpc_client.config import ClientConfig, ConnectionConfig

from fakes import RecordingTransport


@pytest.fixture
def config():
    return ClientConfig(
        default_service="billing",
        client_name="test-suite",
        additional_headers={"X-Global": "global"},
        connections={
            "billing": ConnectionConfig(
                url="http://billing.local/rpc",
                key="secret-key",
                auth_header_name="X-Api-Key",
                additional_headers={"X-Region": "eu"},
            ),
            "reports": ConnectionConfig(url="http://reports.local/rpc"),
            "broken": ConnectionConfig(url=None),
        },
        propagate_trace_context=False,
    )


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def cache():
    return MemoryCache(default_ttl=5)
