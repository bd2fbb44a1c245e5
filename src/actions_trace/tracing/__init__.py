"""Span tree construction for workflow runs."""

from actions_trace.tracing.attributes import (
    build_job_attributes,
    build_root_attributes,
    build_step_attributes,
    remove_unset_attributes,
)
from actions_trace.tracing.jobs import JobTraceResult, process_job
from actions_trace.tracing.orchestrator import (
    RunTraceSummary,
    build_run_trace,
    compute_aggregate_success,
    latest_completion_time,
)
from actions_trace.tracing.provider import create_tracer_provider
from actions_trace.tracing.spans import set_span_status
from actions_trace.tracing.steps import process_steps


__all__ = [
    "JobTraceResult",
    "RunTraceSummary",
    "build_job_attributes",
    "build_root_attributes",
    "build_run_trace",
    "build_step_attributes",
    "compute_aggregate_success",
    "create_tracer_provider",
    "latest_completion_time",
    "process_job",
    "process_steps",
    "remove_unset_attributes",
    "set_span_status",
]
