"""Exception hierarchy for the workflow run exporter."""

from __future__ import annotations
import httpx


class ActionsTraceError(RuntimeError):
    """Base class for errors raised by the exporter."""


class OrchestrationError(ActionsTraceError):
    """Raised when a run cannot be traced at all."""


class EventPayloadError(OrchestrationError):
    """Raised when the triggering event is missing, malformed or unsupported."""


class GitHubAPIError(OrchestrationError):
    """Raised when the jobs of a workflow run cannot be listed."""

    def __init__(self, message: str, *, response: httpx.Response | None = None) -> None:
        """Initialise the error with optional HTTP response context."""
        super().__init__(message)
        self.response = response


class JobProcessingError(ActionsTraceError):
    """Raised when the span tree for a single job cannot be built."""


__all__ = [
    "ActionsTraceError",
    "EventPayloadError",
    "GitHubAPIError",
    "JobProcessingError",
    "OrchestrationError",
]
