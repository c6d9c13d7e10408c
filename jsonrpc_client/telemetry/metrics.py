"""
OpenTelemetry Metrics Collection

Counters and latency histograms for client calls, cache hits and transport round trips.
Instruments are created lazily against whichever MeterProvider is installed; without
``setup_metrics`` the OpenTelemetry API falls back to a no-op provider.
"""

import logging
from typing import Dict, Any

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

logger = logging.getLogger(__name__)

# Instruments keyed by (kind, name)
_instruments = {}


def setup_metrics(service_name: str, otlp_endpoint: str = "localhost:4317", export_interval_ms: int = 5000):
    """Configure OpenTelemetry metrics export over OTLP

    Args:
        service_name: Service name
        otlp_endpoint: OTLP receiver address
        export_interval_ms: Metrics export interval in milliseconds
    """
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=otlp_endpoint),
        export_interval_millis=export_interval_ms
    )
    metrics.set_meter_provider(MeterProvider(metric_readers=[reader]))

    logger.info(f"OpenTelemetry metrics configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")

    return metrics.get_meter(service_name)


def _instrument(kind: str, name: str, unit: str):
    key = (kind, name)
    if key not in _instruments:
        meter = metrics.get_meter("jsonrpc_client")
        if kind == "counter":
            _instruments[key] = meter.create_counter(name=name, description=f"Counter for {name}", unit=unit)
        else:
            _instruments[key] = meter.create_histogram(name=name, description=f"Latency histogram for {name}", unit=unit)
    return _instruments[key]


def increment_counter(name: str, amount: int = 1, attributes: Dict[str, Any] = None):
    """Increment counter value

    Args:
        name: Counter name
        amount: Amount to increment
        attributes: Attribute labels
    """
    _instrument("counter", name, "1").add(amount, attributes or {})


def record_latency(name: str, value_ms: float, attributes: Dict[str, Any] = None):
    """Record a latency sample in milliseconds"""
    _instrument("histogram", name, "ms").record(value_ms, attributes or {})
