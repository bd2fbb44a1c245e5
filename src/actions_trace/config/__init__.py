"""Runtime configuration helpers for the workflow run exporter."""

from __future__ import annotations
import os
from collections.abc import Mapping
from functools import lru_cache
from typing import Literal, cast
from dynaconf import Dynaconf
from actions_trace.config.defaults import _DEFAULTS, _ENV_FALLBACKS
from actions_trace.config.exporter_settings import ExporterKind, ExporterSettings
from actions_trace.config.github_settings import GitHubSettings


LogFormat = Literal["text", "json"]
"""Supported log output formats."""

_EXPORTERS = {"otlp", "console", "none"}
_LOG_FORMATS = {"text", "json"}


def _build_loader() -> Dynaconf:
    """Create a Dynaconf loader wired to environment variables only."""
    return Dynaconf(
        envvar_prefix="ACTIONS_TRACE",
        settings_files=[],
        load_dotenv=True,
        environments=False,
    )


def _lookup(source: Dynaconf, key: str, environ: Mapping[str, str]) -> object:
    value = source.get(key)
    if value not in (None, ""):
        return value
    for name in _ENV_FALLBACKS.get(key, ()):
        candidate = environ.get(name)
        if candidate:
            return candidate
    return _DEFAULTS[key]


def _normalize_settings(
    source: Dynaconf, environ: Mapping[str, str] | None = None
) -> Dynaconf:
    """Validate and fill defaults on the raw Dynaconf settings."""
    env = os.environ if environ is None else environ

    normalized = Dynaconf(
        envvar_prefix="ACTIONS_TRACE",
        settings_files=[],
        load_dotenv=False,
        environments=False,
    )

    exporter = str(_lookup(source, "EXPORTER", env)).strip().lower()
    if exporter not in _EXPORTERS:
        msg = "ACTIONS_TRACE_EXPORTER must be one of 'otlp', 'console', or 'none'."
        raise ValueError(msg)
    normalized.set("EXPORTER", cast(ExporterKind, exporter))

    for key in (
        "OTLP_ENDPOINT",
        "OTLP_HEADERS",
        "GRAFANA_INSTANCE_ID",
        "GRAFANA_ACCESS_TOKEN",
        "SERVICE_NAME",
        "GITHUB_TOKEN",
        "GITHUB_EVENT_NAME",
        "GITHUB_EVENT_PATH",
        "GITHUB_REPOSITORY",
    ):
        normalized.set(key, _lookup(source, key, env))

    timeout_raw = _lookup(source, "OTLP_TIMEOUT", env)
    try:
        timeout = float(cast(float, timeout_raw))
    except (TypeError, ValueError) as exc:
        raise ValueError("ACTIONS_TRACE_OTLP_TIMEOUT must be numeric.") from exc
    if timeout <= 0:
        msg = "ACTIONS_TRACE_OTLP_TIMEOUT must be greater than zero."
        raise ValueError(msg)
    normalized.set("OTLP_TIMEOUT", timeout)

    api_url = str(_lookup(source, "GITHUB_API_URL", env)).rstrip("/")
    normalized.set("GITHUB_API_URL", api_url)

    per_page_raw = _lookup(source, "JOBS_PER_PAGE", env)
    try:
        per_page = int(cast(int, per_page_raw))
    except (TypeError, ValueError) as exc:
        raise ValueError("ACTIONS_TRACE_JOBS_PER_PAGE must be an integer.") from exc
    if not 1 <= per_page <= 100:
        msg = "ACTIONS_TRACE_JOBS_PER_PAGE must be between 1 and 100."
        raise ValueError(msg)
    normalized.set("JOBS_PER_PAGE", per_page)

    normalized.set("LOG_LEVEL", str(_lookup(source, "LOG_LEVEL", env)).upper())
    log_format = str(_lookup(source, "LOG_FORMAT", env)).strip().lower()
    if log_format not in _LOG_FORMATS:
        msg = "ACTIONS_TRACE_LOG_FORMAT must be either 'text' or 'json'."
        raise ValueError(msg)
    normalized.set("LOG_FORMAT", cast(LogFormat, log_format))

    return normalized


@lru_cache(maxsize=1)
def _load_settings() -> Dynaconf:
    """Load settings once and cache the normalized Dynaconf instance."""
    return _normalize_settings(_build_loader())


def get_settings(*, refresh: bool = False) -> Dynaconf:
    """Return the cached Dynaconf settings, reloading them if requested."""
    if refresh:
        _load_settings.cache_clear()
    return _load_settings()


__all__ = [
    "ExporterKind",
    "ExporterSettings",
    "GitHubSettings",
    "LogFormat",
    "get_settings",
]
