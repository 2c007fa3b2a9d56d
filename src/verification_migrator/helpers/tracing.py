"""
Distributed Tracing for the Verification Migrator

OpenTelemetry-based tracing for the stages of each contract migration
(fetch, convert, submit, poll).

Installation:
    pip install "verification-migrator[tracing]"

Optional exporters:
    pip install opentelemetry-exporter-otlp  # For OTLP/gRPC
"""

import logging
import os
from contextlib import contextmanager
from typing import Any, Dict, Optional

try:
    from opentelemetry import trace
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import (
        BatchSpanProcessor,
        ConsoleSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource, SERVICE_NAME
    from opentelemetry.trace import Status, StatusCode
    OTEL_AVAILABLE = True
except ImportError:
    OTEL_AVAILABLE = False

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "verification-migrator"


class TracingClient:
    """
    Tracing client for migration stages

    Supports two exporters:
    - Console (stdout, for debugging)
    - OTLP (for production observability platforms)

    A disabled client hands out ``None`` spans, so callers never need to
    check whether tracing is on.
    """

    def __init__(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        exporter_type: str = "console",  # console, otlp
        otlp_endpoint: Optional[str] = None,
        enabled: bool = True,
    ):
        self.service_name = service_name
        self.tracer = None
        self.enabled = enabled and OTEL_AVAILABLE

        if enabled and not OTEL_AVAILABLE:
            logger.warning(
                "OpenTelemetry not installed. Tracing disabled. "
                "Install with: pip install opentelemetry-api opentelemetry-sdk"
            )
        if not self.enabled:
            return

        resource = Resource(attributes={
            SERVICE_NAME: service_name,
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        })
        provider = TracerProvider(resource=resource)

        if exporter_type == "otlp":
            try:
                from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
                endpoint = otlp_endpoint or "http://localhost:4317"
                exporter = OTLPSpanExporter(endpoint=endpoint)
                logger.info("OTLP exporter configured: %s", endpoint)
            except ImportError:
                logger.warning("OTLP exporter not installed, falling back to console")
                exporter = ConsoleSpanExporter()
        else:
            exporter = ConsoleSpanExporter()
            logger.info("Console exporter configured (stdout)")

        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer = trace.get_tracer(__name__)
        logger.info("Tracing enabled for service: %s", service_name)

    @contextmanager
    def start_span(self, name: str, attributes: Optional[Dict[str, Any]] = None):
        """
        Start a new span with context manager

        Example:
            with tracing.start_span("migration.submit", {"address": "0x..."}):
                outcome = submit(request, client)
        """
        if not self.enabled or not self.tracer:
            yield None
            return

        with self.tracer.start_as_current_span(name) as span:
            if attributes:
                span.set_attributes({k: str(v) for k, v in attributes.items()})
            try:
                yield span
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise


# Global tracing client, disabled until configure_tracing() is called
_global_tracer: TracingClient = TracingClient(enabled=False)


def configure_tracing(enabled: bool = True, exporter_type: Optional[str] = None) -> TracingClient:
    """Replace the global tracing client (reads OTEL_EXPORTER / OTLP_ENDPOINT)."""
    global _global_tracer
    _global_tracer = TracingClient(
        exporter_type=exporter_type or os.getenv("OTEL_EXPORTER", "console"),
        otlp_endpoint=os.getenv("OTLP_ENDPOINT"),
        enabled=enabled,
    )
    return _global_tracer


def get_tracer() -> TracingClient:
    return _global_tracer


def trace_stage(stage: str, address: str):
    """Span for one pipeline stage of one contract."""
    return get_tracer().start_span(f"migration.{stage}", {"contract.address": address, "migration.stage": stage})
