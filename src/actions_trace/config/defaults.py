"""Default configuration values."""

from __future__ import annotations


_DEFAULTS: dict[str, object] = {
    "EXPORTER": "otlp",
    "OTLP_ENDPOINT": None,
    "OTLP_HEADERS": None,
    "OTLP_TIMEOUT": 10.0,
    "GRAFANA_INSTANCE_ID": None,
    "GRAFANA_ACCESS_TOKEN": None,
    "SERVICE_NAME": None,
    "GITHUB_TOKEN": None,
    "GITHUB_API_URL": "https://api.github.com",
    "GITHUB_EVENT_NAME": None,
    "GITHUB_EVENT_PATH": None,
    "GITHUB_REPOSITORY": None,
    "JOBS_PER_PAGE": 100,
    "LOG_LEVEL": "INFO",
    "LOG_FORMAT": "text",
}

# Variables set by the Actions runner, consulted when the prefixed one is unset.
_ENV_FALLBACKS: dict[str, tuple[str, ...]] = {
    "OTLP_ENDPOINT": ("INPUT_GRAFANAENDPOINT",),
    "GRAFANA_INSTANCE_ID": ("INPUT_GRAFANAINSTANCEID",),
    "GRAFANA_ACCESS_TOKEN": ("INPUT_GRAFANAACCESSPOLICYTOKEN",),
    "SERVICE_NAME": ("INPUT_OTELSERVICENAME",),
    "GITHUB_TOKEN": ("INPUT_GITHUBTOKEN", "GITHUB_TOKEN"),
    "GITHUB_API_URL": ("GITHUB_API_URL",),
    "GITHUB_EVENT_NAME": ("GITHUB_EVENT_NAME",),
    "GITHUB_EVENT_PATH": ("GITHUB_EVENT_PATH",),
    "GITHUB_REPOSITORY": ("GITHUB_REPOSITORY",),
}
