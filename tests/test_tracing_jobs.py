"""Tests for job span creation."""

from __future__ import annotations
from unittest.mock import MagicMock, patch
import pytest
from opentelemetry.context import Context
from opentelemetry.trace import StatusCode
from actions_trace.errors import JobProcessingError
from actions_trace.tracing.jobs import process_job
from actions_trace.tracing.spans import to_epoch_nanos
from tests.factories import SpanCapture, make_job, make_step


@pytest.mark.asyncio
async def test_process_job_creates_job_and_step_spans(capture: SpanCapture) -> None:
    job = make_job(123, name="someJob", steps=[make_step(1).model_dump()])

    result = await process_job(job, capture.tracer, Context())

    assert result.step_count == 1
    assert not result.failed
    spans = capture.finished()
    assert len(spans) == 2
    job_span = capture.by_name("Job: someJob")
    step_span = capture.by_name("Step: step1")
    assert step_span.parent is not None
    assert step_span.parent.span_id == job_span.context.span_id
    assert job_span.parent is None
    assert job_span.attributes["job.id"] == 123
    assert job_span.attributes["job.status"] == "completed"
    assert job_span.status.status_code is StatusCode.OK
    assert job_span.start_time == to_epoch_nanos(job.started_at)
    assert job_span.end_time == to_epoch_nanos(job.completed_at)


@pytest.mark.asyncio
async def test_job_without_steps_has_no_children(capture: SpanCapture) -> None:
    job = make_job(1, conclusion="cancelled", steps=[])

    result = await process_job(job, capture.tracer, Context())

    assert result.step_count == 0
    (span,) = capture.finished()
    assert span.name == "Job: job-1"
    assert span.status.status_code is StatusCode.ERROR
    assert span.status.description == "conclusion: cancelled"


@pytest.mark.asyncio
async def test_job_status_ignores_step_outcomes(capture: SpanCapture) -> None:
    steps = [make_step(1, conclusion="failure").model_dump()]
    job = make_job(1, conclusion="success", steps=steps)

    await process_job(job, capture.tracer, Context())

    assert capture.by_name("Job: job-1").status.status_code is StatusCode.OK
    assert capture.by_name("Step: step1").status.status_code is StatusCode.ERROR


@pytest.mark.asyncio
async def test_job_without_completion_time_still_closes(
    capture: SpanCapture,
) -> None:
    job = make_job(1, status="in_progress", conclusion=None, completed_at=None)

    await process_job(job, capture.tracer, Context())

    (span,) = capture.finished()
    assert span.end_time is not None
    assert span.status.status_code is StatusCode.ERROR


@pytest.mark.asyncio
async def test_step_failure_is_contained_and_job_span_closed(
    capture: SpanCapture,
) -> None:
    job = make_job(5, steps=[make_step(1).model_dump()])

    with patch(
        "actions_trace.tracing.jobs.process_steps",
        side_effect=RuntimeError("step exploded"),
    ):
        result = await process_job(job, capture.tracer, Context())

    assert result.failed
    assert isinstance(result.error, JobProcessingError)
    assert isinstance(result.error.__cause__, RuntimeError)
    assert "step exploded" in str(result.error)
    (span,) = capture.finished()
    assert span.name == "Job: job-5"
    assert span.status.status_code is StatusCode.OK
    assert any(event.name == "exception" for event in span.events)


@pytest.mark.asyncio
async def test_process_job_opens_and_closes_every_span_once() -> None:
    tracer = MagicMock()
    job = make_job(1, steps=[make_step(1).model_dump(), make_step(2).model_dump()])

    await process_job(job, tracer, Context())

    assert tracer.start_span.call_count == 3
    assert tracer.start_span.return_value.end.call_count == 3
