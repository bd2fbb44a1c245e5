"""GitHub collaborators: the triggering event and the jobs listing."""

from actions_trace.github.client import GitHubClient
from actions_trace.github.event import load_workflow_run_event, resolve_repository


__all__ = ["GitHubClient", "load_workflow_run_event", "resolve_repository"]
