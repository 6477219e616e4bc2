"""
OpenTelemetry Distributed Tracing

Configures OpenTelemetry for the Sellora services. Spans are exported over
OTLP/HTTP to a collector (Jaeger, Tempo, ...).
"""

import logging
from typing import Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.django import DjangoInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

_initialized = False


def setup_tracing(
    service_name: str = "sellora-backend",
    endpoint: Optional[str] = None,
    enable: bool = True,
) -> None:
    """
    Initialize OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        endpoint: OTLP/HTTP traces endpoint, e.g. http://collector:4318/v1/traces
        enable: Enable/disable tracing

    Without ``enable`` the global no-op provider stays in place, so spans created
    through ``tracer`` cost nothing.
    """
    global _initialized

    if _initialized:
        logger.warning("Tracing already initialized. Skipping.")
        return

    if not enable:
        logger.info("Tracing disabled via configuration")
        return

    resource = Resource(attributes={SERVICE_NAME: service_name})
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(tracer_provider)

    # Auto-instrument Django (traces all HTTP requests)
    DjangoInstrumentor().instrument()

    _initialized = True
    logger.info(f"OpenTelemetry tracing initialized for service: {service_name} -> {endpoint or 'default endpoint'}")


def get_tracer(name: str = "sellora") -> trace.Tracer:
    """Get a tracer for custom spans (``with tracer.start_as_current_span(...)``)."""
    return trace.get_tracer(name)


# Proxy tracer: resolves against whichever provider is installed when a span starts
tracer = get_tracer("sellora")
