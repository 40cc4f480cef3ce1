from __future__ import annotations

import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.resources import DEPLOYMENT_ENVIRONMENT, SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from barpos.infrastructure.settings import Settings

logger = logging.getLogger(__name__)

# the global tracer provider can only be set once per process
_provider: TracerProvider | None = None


def build_tracer_provider(
    service_name: str,
    app_env: str,
    endpoint: str | None = None,
) -> TracerProvider:
    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: service_name, DEPLOYMENT_ENVIRONMENT: app_env})
    )
    if endpoint:
        exporter = OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("otel_exporter_enabled", extra={"endpoint": endpoint})
    return provider


def configure_otel(app: FastAPI, settings: Settings) -> TracerProvider:
    """Trace every request of ``app``; spans are only exported when an OTLP endpoint is set."""
    global _provider
    if _provider is None:
        _provider = build_tracer_provider(
            settings.otel_service_name,
            settings.app_env,
            settings.otel_exporter_endpoint,
        )
        trace.set_tracer_provider(_provider)
        set_global_textmap(TraceContextTextMapPropagator())
    FastAPIInstrumentor.instrument_app(app, tracer_provider=_provider)
    return _provider
