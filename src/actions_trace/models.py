"""Pydantic models for the GitHub payloads consumed by the exporter."""

from __future__ import annotations
from datetime import UTC, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class _GitHubModel(BaseModel):
    """Base model that ignores fields the exporter does not use."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value: object) -> object:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class Repository(_GitHubModel):
    """Repository reference embedded in workflow run payloads."""

    full_name: str
    html_url: str | None = None


class Step(_GitHubModel):
    """Single step executed by a job."""

    number: int
    name: str
    status: str
    conclusion: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


class Job(_GitHubModel):
    """Job belonging to a workflow run, with its ordered steps."""

    id: int
    name: str
    status: str
    conclusion: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    html_url: str | None = None
    steps: list[Step] = Field(default_factory=list)

    @field_validator("steps", mode="before")
    @classmethod
    def _default_steps(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def succeeded(self) -> bool:
        """Return whether the job concluded successfully."""
        return self.conclusion == "success"


class JobsPage(_GitHubModel):
    """Jobs listed for a workflow run together with the reported total."""

    total_count: int
    jobs: list[Job] = Field(default_factory=list)


class WorkflowRun(_GitHubModel):
    """The workflow run described by a ``workflow_run`` event."""

    id: int
    name: str | None = None
    head_sha: str
    head_branch: str | None = None
    repository: Repository
    head_repository: Repository | None = None
    workflow_id: int
    run_number: int
    run_attempt: int = 1
    event: str
    status: str | None = None
    conclusion: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    run_started_at: datetime | None = None
    url: str | None = None
    html_url: str | None = None
    jobs_url: str | None = None
    logs_url: str | None = None
    check_suite_url: str | None = None
    artifacts_url: str | None = None
    cancel_url: str | None = None
    rerun_url: str | None = None
    workflow_url: str | None = None

    @property
    def started_at(self) -> datetime:
        """Return the run start time, falling back to its creation time."""
        return self.run_started_at or self.created_at


class WorkflowRunEvent(_GitHubModel):
    """Webhook payload delivered to runs triggered by ``workflow_run``."""

    action: str
    workflow_run: WorkflowRun
    repository: Repository | None = None


__all__ = [
    "Job",
    "JobsPage",
    "Repository",
    "Step",
    "WorkflowRun",
    "WorkflowRunEvent",
]
