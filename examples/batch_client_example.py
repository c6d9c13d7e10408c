#!/usr/bin/env python
"""
Batch Client Example

Demonstrates single calls, a JSON-RPC batch and cached calls against an HTTP service.

Usage:
    python examples/batch_client_example.py jsonrpc.yaml
"""

import argparse
import logging

from jsonrpc_client import Client, ClientConfig
from jsonrpc_client.cache import MemoryCache
from jsonrpc_client.telemetry import setup_metrics, setup_tracer
from jsonrpc_client.transports import TransportFactory, TransportType

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def report(label, slot):
    if slot.success:
        logger.info(f"{label}: {slot.data!r}")
    else:
        logger.error(f"{label} failed: [{slot.error.code}] {slot.error.message}")


def main():
    parser = argparse.ArgumentParser(description="JSON-RPC batch client example")
    parser.add_argument("config", help="Path to the client YAML configuration")
    parser.add_argument("--transport", default=TransportType.HTTP, choices=[TransportType.HTTP, TransportType.ZEROMQ])
    parser.add_argument("--otlp-endpoint", default=None, help="Export spans and metrics to this OTLP endpoint")
    args = parser.parse_args()

    if args.otlp_endpoint:
        setup_tracer("jsonrpc-client-example", args.otlp_endpoint)
        setup_metrics("jsonrpc-client-example", args.otlp_endpoint)

    config = ClientConfig.from_yaml(args.config)
    transport = TransportFactory.create(args.transport, {"timeout": config.timeout})
    client = Client(config, transport, cache=MemoryCache(default_ttl=5))

    try:
        report("ping", client.invoke("ping"))

        client.begin_batch()
        add = client.invoke("add", [1, 2])
        divide = client.invoke("divide", {"a": 1, "b": 0})
        rates = client.with_cache(10).invoke("rates", {"currency": "EUR"})
        client.execute()

        report("add", add)
        report("divide", divide)
        report("rates", rates)

        # Served from the cache, no request is sent
        report("rates (cached)", client.with_cache(10).invoke("rates", {"currency": "EUR"}))
    finally:
        transport.close()


if __name__ == "__main__":
    main()
