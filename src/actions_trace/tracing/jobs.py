"""Spans for the jobs of a workflow run."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import Tracer
from actions_trace.errors import JobProcessingError
from actions_trace.models import Job
from actions_trace.tracing.attributes import (
    build_job_attributes,
    remove_unset_attributes,
)
from actions_trace.tracing.spans import (
    resolve_end_time,
    set_span_status,
    to_epoch_nanos,
)
from actions_trace.tracing.steps import process_steps


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JobTraceResult:
    """Outcome of tracing a single job."""

    job_id: int
    job_name: str
    step_count: int = 0
    error: JobProcessingError | None = None

    @property
    def failed(self) -> bool:
        """Return whether the job could not be traced completely."""
        return self.error is not None


async def process_job(
    job: Job, tracer: Tracer, parent_context: Context
) -> JobTraceResult:
    """Emit the span for ``job`` and the child spans for its steps.

    The job status reflects only ``job.conclusion``; step outcomes never
    change it. Errors raised while tracing the steps are recorded on the
    job span and returned in the result instead of being raised. The span is
    closed on every path.
    """
    result = JobTraceResult(job_id=job.id, job_name=job.name)
    span = tracer.start_span(
        f"Job: {job.name}",
        context=parent_context,
        start_time=to_epoch_nanos(job.started_at),
    )
    try:
        span.set_attributes(remove_unset_attributes(build_job_attributes(job)))
        set_span_status(span, job.succeeded, f"conclusion: {job.conclusion}")

        if job.steps:
            job_context = trace.set_span_in_context(span, parent_context)
            result.step_count = process_steps(job.steps, tracer, job_context)
    except Exception as exc:
        logger.exception("Failed to trace steps for job %s (%s)", job.id, job.name)
        span.record_exception(exc)
        error = JobProcessingError(f"Job '{job.name}' ({job.id}): {exc}")
        error.__cause__ = exc
        result.error = error
    finally:
        end_time = resolve_end_time(job.started_at, job.completed_at)
        span.end(end_time=to_epoch_nanos(end_time))
    return result


__all__ = ["JobTraceResult", "process_job"]
