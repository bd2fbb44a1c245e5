"""Attribute maps attached to run, job and step spans."""

from __future__ import annotations
from collections.abc import Mapping
from actions_trace.models import Job, Step, WorkflowRun
from actions_trace.tracing.spans import format_timestamp


AttributeValue = str | bool | int | float
"""Primitive values accepted as span attributes."""

AttributeMap = Mapping[str, AttributeValue | None]
"""Attribute mapping where ``None`` marks an unset entry."""


def remove_unset_attributes(
    attributes: AttributeMap,
) -> dict[str, AttributeValue]:
    """Return a copy of ``attributes`` without the entries that are unset."""
    return {key: value for key, value in attributes.items() if value is not None}


def build_root_attributes(
    run: WorkflowRun, *, total_count: int
) -> dict[str, AttributeValue | None]:
    """Collect the attributes describing a whole workflow run."""
    head_repository = run.head_repository
    return {
        "jobs.total_count": total_count,
        "workflow_run.id": run.id,
        "workflow_run.name": run.name,
        "workflow_run.head_sha": run.head_sha,
        "workflow_run.repository": run.repository.full_name,
        "workflow_run.workflow_id": run.workflow_id,
        "workflow_run.run_number": run.run_number,
        "workflow_run.run_attempt": run.run_attempt,
        "workflow_run.event": run.event,
        "workflow_run.status": run.status,
        "workflow_run.conclusion": run.conclusion,
        "workflow_run.created_at": format_timestamp(run.created_at),
        "workflow_run.updated_at": format_timestamp(run.updated_at),
        "workflow_run.run_started_at": format_timestamp(run.run_started_at),
        "workflow_run.url": run.url,
        "workflow_run.html_url": run.html_url,
        "workflow_run.jobs_url": run.jobs_url,
        "workflow_run.logs_url": run.logs_url,
        "workflow_run.check_suite_url": run.check_suite_url,
        "workflow_run.artifacts_url": run.artifacts_url,
        "workflow_run.cancel_url": run.cancel_url,
        "workflow_run.rerun_url": run.rerun_url,
        "workflow_run.workflow_url": run.workflow_url,
        "workflow_run.head_branch": run.head_branch,
        "workflow_run.head_repository": (
            head_repository.full_name if head_repository else None
        ),
        "workflow_run.head_repository_url": (
            head_repository.html_url if head_repository else None
        ),
    }


def build_job_attributes(job: Job) -> dict[str, AttributeValue | None]:
    """Collect the attributes describing a single job."""
    return {
        "job.id": job.id,
        "job.status": job.status,
        "job.conclusion": job.conclusion,
        "job.html_url": job.html_url,
    }


def build_step_attributes(step: Step) -> dict[str, AttributeValue | None]:
    """Collect the attributes describing a single step."""
    return {
        "step.number": step.number,
        "step.status": step.status,
        "step.started_at": format_timestamp(step.started_at),
        "step.conclusion": step.conclusion,
    }


__all__ = [
    "AttributeMap",
    "AttributeValue",
    "build_job_attributes",
    "build_root_attributes",
    "build_step_attributes",
    "remove_unset_attributes",
]
