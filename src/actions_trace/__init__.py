"""Export GitHub Actions workflow runs as OpenTelemetry traces."""

from actions_trace.export import export_workflow_run
from actions_trace.tracing import RunTraceSummary, build_run_trace


__all__ = ["RunTraceSummary", "build_run_trace", "export_workflow_run"]
