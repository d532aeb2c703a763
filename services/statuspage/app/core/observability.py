from typing import Optional

from prometheus_client import Counter
from starlette_exporter import PrometheusMiddleware, handle_metrics

try:
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import (
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    _HAS_OTEL = True
except Exception:  # pragma: no cover
    _HAS_OTEL = False


# Registered once per process; the default registry rejects duplicates.
INCIDENT_UPDATES_TOTAL = Counter(
    "statuspage_incident_updates_total",
    "Incident updates written through the API",
    ["action", "status"],
)
INCIDENTS_TOTAL = Counter(
    "statuspage_incidents_total",
    "Incidents written through the API",
    ["action"],
)


def add_prometheus(app, app_name: str = "statuspage") -> None:
    app.add_middleware(
        PrometheusMiddleware,
        app_name=app_name,
        prefix=app_name,
        group_paths=True,
        skip_paths=["/metrics", "/health"],
    )
    app.add_route("/metrics", handle_metrics)
    app.state.metrics = {
        "incident_updates_total": INCIDENT_UPDATES_TOTAL,
        "incidents_total": INCIDENTS_TOTAL,
    }


def record_incident_update(action: str, status: int | None) -> None:
    INCIDENT_UPDATES_TOTAL.labels(action=action, status=str(status)).inc()


def record_incident(action: str) -> None:
    INCIDENTS_TOTAL.labels(action=action).inc()


def add_tracing(app, app_name: str, endpoint: Optional[str]) -> None:
    if not _HAS_OTEL:
        return
    resource = Resource.create({"service.name": app_name})
    provider = TracerProvider(resource=resource)
    if endpoint:
        processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint))
        provider.add_span_processor(processor)
    else:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app)
