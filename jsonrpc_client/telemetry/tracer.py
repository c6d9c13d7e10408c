"""
OpenTelemetry Trace Context Management

Provides span creation and trace context propagation so a batch of calls can be
followed across the client and the remote service.
"""

import logging
from typing import Any, Dict, Optional

from opentelemetry import propagate, trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

logger = logging.getLogger(__name__)


def setup_tracer(service_name: str, otlp_endpoint: str = "localhost:4317"):
    """Configure OpenTelemetry tracer

    Args:
        service_name: Service name
        otlp_endpoint: OTLP receiver address
    """
    # Create TracerProvider
    provider = TracerProvider(
        sampler=ALWAYS_ON,
        resource=Resource.create({"service.name": service_name}),
    )

    # Export spans in batches over OTLP
    otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
    provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    # Set global TracerProvider
    trace.set_tracer_provider(provider)

    tracer = trace.get_tracer(service_name)

    logger.info(f"OpenTelemetry trace configured, service name: {service_name}, OTLP endpoint: {otlp_endpoint}")

    return tracer


def inject_trace_headers(carrier: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Inject the current trace context into a header mapping

    Uses the globally configured propagator (W3C ``traceparent`` by default).
    Nothing is added when there is no active span.

    Args:
        carrier: Mapping to inject into, a new dict if None

    Returns:
        Dict[str, str]: The carrier
    """
    if carrier is None:
        carrier = {}
    propagate.inject(carrier)
    return carrier


def create_span(name: str, attributes: Dict[str, Any] = None):
    """Create new span

    Args:
        name: Span name
        attributes: Span attributes

    Returns:
        Context manager yielding the span
    """
    tracer = trace.get_tracer(__name__)
    return tracer.start_as_current_span(
        name,
        attributes=attributes or {},
        kind=trace.SpanKind.CLIENT,
    )
