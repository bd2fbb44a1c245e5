"""Root span construction for a whole workflow run."""

from __future__ import annotations
import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import Tracer
from opentelemetry.trace.span import format_trace_id
from actions_trace.errors import JobProcessingError
from actions_trace.models import Job
from actions_trace.tracing.attributes import AttributeMap, remove_unset_attributes
from actions_trace.tracing.jobs import JobTraceResult, process_job
from actions_trace.tracing.spans import (
    resolve_end_time,
    set_span_status,
    to_epoch_nanos,
)


logger = logging.getLogger(__name__)

JobProcessor = Callable[[Job, Tracer, Context], Awaitable[JobTraceResult]]
"""Coroutine function that traces one job under the given parent context."""


@dataclass(slots=True)
class RunTraceSummary:
    """Outcome of tracing a workflow run."""

    trace_id: str | None
    success: bool
    end_time: datetime | None = None
    job_results: list[JobTraceResult] = field(default_factory=list)

    @property
    def failed_jobs(self) -> list[JobTraceResult]:
        """Return the jobs whose spans could not be built completely."""
        return [result for result in self.job_results if result.failed]


def compute_aggregate_success(jobs: Sequence[Job]) -> bool:
    """Return ``True`` unless some job concluded with anything but success."""
    return all(job.succeeded for job in jobs)


def latest_completion_time(jobs: Sequence[Job]) -> datetime | None:
    """Return the latest ``completed_at`` among completed jobs, if any."""
    completed = [
        job.completed_at
        for job in jobs
        if job.status == "completed" and job.completed_at is not None
    ]
    return max(completed, default=None)


async def build_run_trace(
    tracer: Tracer,
    *,
    run_started_at: datetime | None,
    jobs: Sequence[Job],
    root_attributes: AttributeMap,
    name: str = "root",
    job_processor: JobProcessor = process_job,
) -> RunTraceSummary:
    """Emit the full span tree for a workflow run.

    The root span carries the aggregate status of every job. One task is
    created per job and failures are contained to the task that raised
    them. The root span ends at the latest completion time of the
    completed jobs, or at the tracer's current time when none completed.
    """
    root_span = tracer.start_span(
        name,
        context=Context(),
        start_time=to_epoch_nanos(run_started_at),
    )
    end_time: datetime | None = None
    try:
        success = compute_aggregate_success(jobs)
        unsuccessful = sum(1 for job in jobs if not job.succeeded)
        set_span_status(
            root_span,
            success,
            f"{unsuccessful} of {len(jobs)} jobs did not succeed",
        )
        root_span.set_attributes(remove_unset_attributes(root_attributes))
        span_context = root_span.get_span_context()
        summary = RunTraceSummary(
            trace_id=format_trace_id(span_context.trace_id)
            if span_context.trace_id
            else None,
            success=success,
        )

        root_context = trace.set_span_in_context(root_span, Context())

        async def _run_job(job: Job) -> JobTraceResult:
            try:
                return await job_processor(job, tracer, root_context)
            except Exception as exc:
                logger.exception("Job %s (%s) could not be traced", job.id, job.name)
                error = JobProcessingError(f"Job '{job.name}' ({job.id}): {exc}")
                error.__cause__ = exc
                return JobTraceResult(job_id=job.id, job_name=job.name, error=error)

        tasks = [asyncio.create_task(_run_job(job)) for job in jobs]
        summary.job_results = list(await asyncio.gather(*tasks))

        end_time = resolve_end_time(run_started_at, latest_completion_time(jobs))
        if end_time is None:
            logger.warning(
                "No completed job reported a completion time; "
                "the root span ends at export time."
            )
        summary.end_time = end_time
    finally:
        root_span.end(end_time=to_epoch_nanos(end_time))
    return summary


__all__ = [
    "JobProcessor",
    "RunTraceSummary",
    "build_run_trace",
    "compute_aggregate_success",
    "latest_completion_time",
]
