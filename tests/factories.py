"""Builders for GitHub payloads and models used across tests."""

from __future__ import annotations
from typing import Any
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)
from opentelemetry.trace import Tracer
from actions_trace.models import Job, Step


class SpanCapture:
    """Tracer backed by an in-memory exporter."""

    def __init__(self) -> None:
        self.exporter = InMemorySpanExporter()
        self.provider = TracerProvider()
        self.provider.add_span_processor(SimpleSpanProcessor(self.exporter))
        self.tracer: Tracer = self.provider.get_tracer("tests")

    def finished(self) -> tuple[ReadableSpan, ...]:
        return self.exporter.get_finished_spans()

    def by_name(self, name: str) -> ReadableSpan:
        return next(span for span in self.finished() if span.name == name)


def make_step(number: int, **overrides: Any) -> Step:
    payload: dict[str, Any] = {
        "number": number,
        "name": f"step{number}",
        "status": "completed",
        "conclusion": "success",
        "started_at": f"2023-01-01T00:0{number}:00Z",
        "completed_at": f"2023-01-01T00:0{number}:30Z",
    }
    payload.update(overrides)
    return Step.model_validate(payload)


def make_job(job_id: int, **overrides: Any) -> Job:
    payload: dict[str, Any] = {
        "id": job_id,
        "name": f"job-{job_id}",
        "status": "completed",
        "conclusion": "success",
        "started_at": "2023-01-01T00:00:00Z",
        "completed_at": "2023-01-01T00:10:00Z",
        "html_url": f"https://github.com/octo/repo/actions/runs/1/job/{job_id}",
        "steps": [],
    }
    payload.update(overrides)
    return Job.model_validate(payload)


def workflow_run_payload(**overrides: Any) -> dict[str, Any]:
    run: dict[str, Any] = {
        "id": 456,
        "name": "CI",
        "head_sha": "abcd1234",
        "head_branch": "main",
        "repository": {
            "full_name": "octo/repo",
            "html_url": "https://github.com/octo/repo",
        },
        "head_repository": {
            "full_name": "fork/repo",
            "html_url": "https://github.com/fork/repo",
        },
        "workflow_id": 789,
        "run_number": 12,
        "run_attempt": 1,
        "event": "push",
        "status": "completed",
        "conclusion": "failure",
        "created_at": "2023-01-01T00:00:00Z",
        "updated_at": "2023-01-01T00:20:00Z",
        "run_started_at": "2023-01-01T00:00:05Z",
        "url": "https://api.github.com/repos/octo/repo/actions/runs/456",
        "html_url": "https://github.com/octo/repo/actions/runs/456",
        "jobs_url": "https://api.github.com/repos/octo/repo/actions/runs/456/jobs",
        "logs_url": "https://api.github.com/repos/octo/repo/actions/runs/456/logs",
        "check_suite_url": "https://api.github.com/repos/octo/repo/check-suites/1",
        "artifacts_url": (
            "https://api.github.com/repos/octo/repo/actions/runs/456/artifacts"
        ),
        "cancel_url": "https://api.github.com/repos/octo/repo/actions/runs/456/cancel",
        "rerun_url": "https://api.github.com/repos/octo/repo/actions/runs/456/rerun",
        "workflow_url": "https://api.github.com/repos/octo/repo/actions/workflows/789",
    }
    run.update(overrides)
    return {
        "action": "completed",
        "workflow_run": run,
        "repository": {"full_name": "octo/repo"},
    }


def jobs_payload() -> dict[str, Any]:
    return {
        "total_count": 2,
        "jobs": [
            {
                "id": 1,
                "name": "build",
                "status": "completed",
                "conclusion": "success",
                "started_at": "2023-01-01T00:00:10Z",
                "completed_at": "2023-01-01T00:05:00Z",
                "steps": [
                    {
                        "number": 1,
                        "name": "checkout",
                        "status": "completed",
                        "conclusion": "success",
                        "started_at": "2023-01-01T00:00:10Z",
                        "completed_at": "2023-01-01T00:00:20Z",
                    }
                ],
            },
            {
                "id": 2,
                "name": "test",
                "status": "completed",
                "conclusion": "failure",
                "started_at": "2023-01-01T00:00:10Z",
                "completed_at": "2023-01-01T00:09:00Z",
                "steps": None,
            },
        ],
    }
