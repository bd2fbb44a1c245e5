"""End-to-end export of one completed workflow run."""

from __future__ import annotations
import logging
from opentelemetry.sdk.trace import TracerProvider
from actions_trace.config import ExporterSettings, GitHubSettings
from actions_trace.github import (
    GitHubClient,
    load_workflow_run_event,
    resolve_repository,
)
from actions_trace.tracing import (
    RunTraceSummary,
    build_root_attributes,
    build_run_trace,
    create_tracer_provider,
)
from actions_trace.tracing.provider import TRACER_NAME


logger = logging.getLogger(__name__)


async def export_workflow_run(
    exporter_settings: ExporterSettings,
    github_settings: GitHubSettings,
    *,
    tracer_provider: TracerProvider | None = None,
    client: GitHubClient | None = None,
) -> RunTraceSummary:
    """Trace the workflow run described by the triggering event.

    Everything up to the root span is fatal and raised as an
    :class:`~actions_trace.errors.OrchestrationError`. A provider created
    here is flushed and shut down before returning.
    """
    event = load_workflow_run_event(
        github_settings.event_path, event_name=github_settings.event_name
    )
    run = event.workflow_run
    owner, repo = resolve_repository(event, github_settings.repository)

    owns_provider = tracer_provider is None
    provider = tracer_provider or create_tracer_provider(exporter_settings, run)
    try:
        logger.debug("Fetching jobs for %s/%s run %s", owner, repo, run.id)
        github = client or GitHubClient(
            token=github_settings.token,
            base_url=github_settings.api_url,
            per_page=github_settings.per_page,
        )
        try:
            listing = await github.list_workflow_run_jobs(owner, repo, run.id)
        finally:
            if client is None:
                await github.aclose()

        tracer = provider.get_tracer(TRACER_NAME)
        summary = await build_run_trace(
            tracer,
            run_started_at=run.started_at,
            jobs=listing.jobs,
            root_attributes=build_root_attributes(
                run, total_count=listing.total_count
            ),
            name=run.name or "root",
        )
    finally:
        if owns_provider:
            provider.force_flush()
            provider.shutdown()

    logger.info(
        "Exported trace %s for run %s with %d jobs",
        summary.trace_id,
        run.id,
        len(summary.job_results),
    )
    return summary


__all__ = ["export_workflow_run"]
