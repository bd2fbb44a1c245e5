"""Command line entry point for exporting workflow run traces."""

from __future__ import annotations
import asyncio
import logging
import sys
from pathlib import Path
from typing import Annotated, NoReturn
import click
import typer
from rich.console import Console
from actions_trace.config import ExporterSettings, GitHubSettings, get_settings
from actions_trace.errors import ActionsTraceError
from actions_trace.export import export_workflow_run
from actions_trace.logging_config import configure_logging
from actions_trace.tracing import RunTraceSummary


logger = logging.getLogger(__name__)
app = typer.Typer(help="Export GitHub Actions workflow runs as OpenTelemetry traces.")


@app.callback()
def main() -> None:
    """Trace completed workflow runs."""


def _fail(console: Console, message: str) -> NoReturn:
    """Report a fatal error to the console and to the Actions runner."""
    console.print(f"[red]Error:[/red] {message}")
    # Workflow command picked up by the runner, mirroring core.setFailed.
    print(f"::error::{message}", flush=True)
    raise typer.Exit(code=1)


def _render_summary(console: Console, summary: RunTraceSummary) -> None:
    status = "[green]OK[/green]" if summary.success else "[red]ERROR[/red]"
    console.print(f"Trace [bold]{summary.trace_id}[/bold] exported ({status})")
    console.print(f"Jobs traced: {len(summary.job_results)}")
    if summary.end_time is None:
        console.print("[yellow]No completed jobs; root span ends at export.[/yellow]")
    for result in summary.failed_jobs:
        console.print(f"[yellow]Warning:[/yellow] {result.error}")


@app.command("export")
def export(
    exporter: Annotated[
        str | None,
        typer.Option("--exporter", help="Span exporter: otlp, console or none."),
    ] = None,
    endpoint: Annotated[
        str | None,
        typer.Option("--endpoint", help="OTLP/HTTP traces endpoint."),
    ] = None,
    service_name: Annotated[
        str | None,
        typer.Option("--service-name", help="Override the service.name resource."),
    ] = None,
    github_token: Annotated[
        str | None,
        typer.Option("--github-token", help="Token used to list workflow jobs."),
    ] = None,
    event_path: Annotated[
        Path | None,
        typer.Option("--event-path", help="Path to the workflow_run payload."),
    ] = None,
    event_name: Annotated[
        str | None,
        typer.Option("--event-name", help="Name of the triggering event."),
    ] = None,
    repository: Annotated[
        str | None,
        typer.Option("--repository", help="Repository as owner/repo."),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level."),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option("--log-format", help="Log format: text or json."),
    ] = None,
) -> None:
    """Build and export the trace of a completed workflow run."""
    console = Console()
    try:
        settings = get_settings(refresh=True)
        configure_logging(
            log_level or str(settings.get("LOG_LEVEL")),
            log_format or str(settings.get("LOG_FORMAT")),
        )
        exporter_overrides = {
            "exporter": exporter,
            "endpoint": endpoint,
            "service_name": service_name,
        }
        github_overrides = {
            "token": github_token,
            "event_path": event_path,
            "event_name": event_name,
            "repository": repository,
        }
        exporter_settings = ExporterSettings.model_validate(
            ExporterSettings.from_mapping(settings).model_dump()
            | {key: value for key, value in exporter_overrides.items() if value}
        )
        github_settings = GitHubSettings.model_validate(
            GitHubSettings.from_mapping(settings).model_dump()
            | {key: value for key, value in github_overrides.items() if value}
        )
    except ValueError as exc:
        _fail(console, f"Invalid configuration: {exc}")

    try:
        summary = asyncio.run(export_workflow_run(exporter_settings, github_settings))
    except ActionsTraceError as exc:
        _fail(console, str(exc))
    except Exception as exc:
        logger.exception("Unexpected error while exporting the workflow run")
        _fail(console, f"Unexpected error: {exc}")
    _render_summary(console, summary)


def run() -> None:
    """Entry point used by console scripts."""
    console = Console()
    try:
        exit_code = app(standalone_mode=False)
    except click.UsageError as exc:
        console.print(f"[red]Error:[/red] {exc.message}")
        if exc.ctx and exc.ctx.command_path:
            help_cmd = f"{exc.ctx.command_path} --help"
            console.print(f"\nRun '[cyan]{help_cmd}[/cyan]' for usage information.")
        sys.exit(2)
    sys.exit(exit_code or 0)


__all__ = ["app", "run"]
