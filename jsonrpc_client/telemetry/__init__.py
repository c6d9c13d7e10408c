"""
OpenTelemetry Integration Module

Provides distributed tracing and metrics collection capabilities:
- tracer: span creation and trace context propagation into outbound headers
- metrics: counters and latency histograms

Every execution cycle of the client runs inside a span so batches can be traced end to end.
"""

from .tracer import (
    setup_tracer,
    create_span,
    inject_trace_headers,
)
from .metrics import (
    setup_metrics,
    increment_counter,
    record_latency,
)

# Alias for compatibility
get_tracer = setup_tracer

__all__ = [
    "setup_tracer",
    "get_tracer",
    "create_span",
    "inject_trace_headers",
    "setup_metrics",
    "increment_counter",
    "record_latency",
]
