"""Tests for the end-to-end export pipeline."""

from __future__ import annotations
from pathlib import Path
import httpx
import pytest
import respx
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)
from opentelemetry.trace import StatusCode
from actions_trace.config import ExporterSettings, GitHubSettings
from actions_trace.errors import EventPayloadError, GitHubAPIError
from actions_trace.export import export_workflow_run
from tests.factories import jobs_payload


JOBS_URL = "https://api.github.com/repos/octo/repo/actions/runs/456/jobs"


def _provider() -> tuple[TracerProvider, InMemorySpanExporter]:
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider, exporter


def _github_settings(event_file: Path, **overrides: object) -> GitHubSettings:
    values: dict[str, object] = {
        "token": "ghs_token",
        "event_name": "workflow_run",
        "event_path": event_file,
        "repository": "octo/repo",
    }
    values.update(overrides)
    return GitHubSettings.model_validate(values)


@pytest.mark.asyncio
async def test_export_builds_the_full_tree(event_file: Path) -> None:
    provider, exporter = _provider()

    with respx.mock(assert_all_called=True) as router:
        router.get(JOBS_URL).mock(
            return_value=httpx.Response(200, json=jobs_payload())
        )
        summary = await export_workflow_run(
            ExporterSettings(exporter="none"),
            _github_settings(event_file),
            tracer_provider=provider,
        )

    spans = {span.name: span for span in exporter.get_finished_spans()}
    assert set(spans) == {"CI", "Job: build", "Job: test", "Step: checkout"}
    root = spans["CI"]
    assert root.status.status_code is StatusCode.ERROR
    assert root.attributes["jobs.total_count"] == 2
    assert root.attributes["workflow_run.repository"] == "octo/repo"
    assert spans["Job: test"].status.status_code is StatusCode.ERROR
    assert spans["Job: build"].status.status_code is StatusCode.OK
    assert summary.success is False
    assert summary.end_time is not None
    assert summary.end_time.isoformat() == "2023-01-01T00:09:00+00:00"
    assert summary.failed_jobs == []


@pytest.mark.asyncio
async def test_export_rejects_other_events_before_fetching(
    event_file: Path,
) -> None:
    provider, exporter = _provider()

    with respx.mock(assert_all_called=False) as router:
        route = router.get(JOBS_URL)
        with pytest.raises(EventPayloadError):
            await export_workflow_run(
                ExporterSettings(exporter="none"),
                _github_settings(event_file, event_name="push"),
                tracer_provider=provider,
            )

    assert not route.called
    assert exporter.get_finished_spans() == ()


@pytest.mark.asyncio
async def test_export_surfaces_listing_failures(event_file: Path) -> None:
    provider, exporter = _provider()

    with respx.mock(assert_all_called=True) as router:
        router.get(JOBS_URL).mock(return_value=httpx.Response(500))
        with pytest.raises(GitHubAPIError):
            await export_workflow_run(
                ExporterSettings(exporter="none"),
                _github_settings(event_file),
                tracer_provider=provider,
            )

    assert exporter.get_finished_spans() == ()


@pytest.mark.asyncio
async def test_export_uses_payload_repository_when_unset(event_file: Path) -> None:
    provider, _ = _provider()

    with respx.mock(assert_all_called=True) as router:
        route = router.get(JOBS_URL).mock(
            return_value=httpx.Response(200, json={"total_count": 0, "jobs": []})
        )
        summary = await export_workflow_run(
            ExporterSettings(exporter="none"),
            _github_settings(event_file, repository=None),
            tracer_provider=provider,
        )

    assert route.called
    assert summary.success is True
    assert summary.end_time is None
