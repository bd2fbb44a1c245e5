"""Tracer provider construction for a workflow run export."""

from __future__ import annotations
import logging
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import (
    SERVICE_INSTANCE_ID,
    SERVICE_NAME,
    SERVICE_NAMESPACE,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from actions_trace.config import ExporterSettings
from actions_trace.models import WorkflowRun


_logger = logging.getLogger(__name__)

TRACER_NAME = "actions_trace"


def build_resource(settings: ExporterSettings, run: WorkflowRun) -> Resource:
    """Describe the workflow run as the service emitting the spans."""
    repository = run.repository.full_name
    instance_id = "/".join(
        str(part) for part in (repository, run.workflow_id, run.id, run.run_attempt)
    )
    return Resource.create(
        {
            SERVICE_NAME: settings.service_name or run.name or repository,
            SERVICE_INSTANCE_ID: instance_id,
            SERVICE_NAMESPACE: repository,
            SERVICE_VERSION: run.head_sha,
        }
    )


def _build_exporter(settings: ExporterSettings) -> SpanExporter | None:
    """Instantiate the exporter selected in the settings."""
    if settings.exporter == "none":
        return None
    if settings.exporter == "console":
        return ConsoleSpanExporter()
    if not settings.endpoint:
        _logger.warning(
            "OTLP exporter selected but no endpoint configured; "
            "spans will not be exported."
        )
        return None
    if settings.authorization_header() is None:
        _logger.warning(
            "Grafana instance id or access token missing; "
            "exporting without an Authorization header."
        )
    return OTLPSpanExporter(
        endpoint=settings.endpoint,
        headers=settings.export_headers() or None,
        timeout=settings.timeout,
    )


def create_tracer_provider(
    settings: ExporterSettings,
    run: WorkflowRun,
    *,
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Build a tracer provider that ships each span once, as it ends.

    The provider is not installed globally; callers obtain tracers from it
    directly.
    """
    provider = TracerProvider(resource=build_resource(settings, run))
    span_exporter = exporter or _build_exporter(settings)
    if span_exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider


__all__ = ["TRACER_NAME", "build_resource", "create_tracer_provider"]
