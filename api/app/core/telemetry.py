"""
Telemetry module for OpenTelemetry tracing.

Configures distributed tracing for the chat gateway. Spans are exported
over OTLP/HTTP when an endpoint is configured.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

SERVICE_NAME = "shipment-tracking-assistant"

_tracer: trace.Tracer | None = None


def setup_telemetry(otlp_endpoint: str) -> None:
    """
    Initialize OpenTelemetry with an optional OTLP exporter.

    Args:
        otlp_endpoint: OTLP/HTTP traces endpoint.
                       If empty, spans are recorded but not exported (local dev).
    """
    global _tracer

    resource = Resource.create({"service.name": SERVICE_NAME})
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=otlp_endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("OTLP trace export enabled (%s).", otlp_endpoint)
    else:
        logger.info("No OTLP endpoint provided. Telemetry export disabled.")

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(SERVICE_NAME)


def get_tracer() -> trace.Tracer:
    """Return the application tracer, initializing a no-op if not set up."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(SERVICE_NAME)
    return _tracer
