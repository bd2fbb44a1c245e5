"""Loading the ``workflow_run`` event that triggered the export."""

from __future__ import annotations
import json
from pathlib import Path
from pydantic import ValidationError
from actions_trace.errors import EventPayloadError
from actions_trace.models import WorkflowRunEvent


WORKFLOW_RUN_EVENT = "workflow_run"
COMPLETED_ACTION = "completed"


def load_workflow_run_event(
    path: Path | str | None, *, event_name: str | None
) -> WorkflowRunEvent:
    """Read and validate the event payload written by the Actions runner."""
    if event_name != WORKFLOW_RUN_EVENT:
        msg = "This action only works with workflow_run events"
        raise EventPayloadError(msg)
    if path is None:
        msg = "GITHUB_EVENT_PATH is not set; cannot read the workflow_run payload."
        raise EventPayloadError(msg)

    event_path = Path(path)
    try:
        raw = json.loads(event_path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Unable to read event payload from {event_path}: {exc}"
        raise EventPayloadError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Event payload at {event_path} is not valid JSON."
        raise EventPayloadError(msg) from exc

    try:
        event = WorkflowRunEvent.model_validate(raw)
    except ValidationError as exc:
        msg = f"Event payload at {event_path} is not a workflow_run event: {exc}"
        raise EventPayloadError(msg) from exc

    if event.action != COMPLETED_ACTION:
        msg = (
            f"Only completed workflow runs can be exported; got '{event.action}'."
        )
        raise EventPayloadError(msg)
    return event


def resolve_repository(
    event: WorkflowRunEvent, repository: str | None
) -> tuple[str, str]:
    """Return ``(owner, repo)`` from ``GITHUB_REPOSITORY`` or the payload."""
    candidate = repository
    if not candidate:
        source = event.repository or event.workflow_run.repository
        candidate = source.full_name
    owner, _, repo = candidate.partition("/")
    if not owner or not repo or "/" in repo:
        msg = f"Repository must look like 'owner/repo'; got '{candidate}'."
        raise EventPayloadError(msg)
    return owner, repo


__all__ = [
    "COMPLETED_ACTION",
    "WORKFLOW_RUN_EVENT",
    "load_workflow_run_event",
    "resolve_repository",
]
