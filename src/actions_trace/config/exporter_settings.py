"""Configuration model describing how spans are exported."""

from __future__ import annotations
import base64
import json
from collections.abc import Mapping
from typing import Any, Literal, cast
from pydantic import BaseModel, Field, field_validator
from actions_trace.config.defaults import _DEFAULTS


ExporterKind = Literal["otlp", "console", "none"]


def _parse_headers(value: object | None) -> dict[str, str]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {str(key): str(val) for key, val in value.items()}
    text = str(value).strip()
    if not text:
        return {}
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        headers: dict[str, str] = {}
        for entry in text.split(","):
            key, _, val = entry.partition("=")
            if key.strip() and val.strip():
                headers[key.strip()] = val.strip()
        return headers
    if isinstance(parsed, Mapping):
        return {str(key): str(val) for key, val in parsed.items()}
    return {}


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class ExporterSettings(BaseModel):
    """Span exporter configuration derived from environment variables."""

    exporter: ExporterKind = Field(
        default=cast(ExporterKind, _DEFAULTS["EXPORTER"])
    )
    endpoint: str | None = Field(
        default=None, description="OTLP/HTTP traces endpoint."
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Additional HTTP headers for the exporter."
    )
    timeout: float = Field(
        default=float(cast(float, _DEFAULTS["OTLP_TIMEOUT"])), gt=0.0
    )
    grafana_instance_id: str | None = None
    grafana_access_token: str | None = None
    service_name: str | None = None

    @field_validator("exporter", mode="before")
    @classmethod
    def _coerce_exporter(cls, value: object) -> str:
        if value is None:
            return str(_DEFAULTS["EXPORTER"])
        return str(value).strip().lower()

    @field_validator(
        "endpoint",
        "grafana_instance_id",
        "grafana_access_token",
        "service_name",
        mode="before",
    )
    @classmethod
    def _coerce_optional(cls, value: object | None) -> str | None:
        return _optional_str(value)

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_headers(cls, value: object | None) -> dict[str, str]:
        return _parse_headers(value)

    def authorization_header(self) -> str | None:
        """Return a Basic auth header for Grafana Cloud when credentials exist."""
        if not self.grafana_instance_id or not self.grafana_access_token:
            return None
        credentials = f"{self.grafana_instance_id}:{self.grafana_access_token}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    def export_headers(self) -> dict[str, str]:
        """Return every header sent with OTLP export requests."""
        headers = dict(self.headers)
        authorization = self.authorization_header()
        if authorization is not None:
            headers["Authorization"] = authorization
        return headers

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any]) -> ExporterSettings:
        """Build exporter settings from the normalized Dynaconf mapping."""
        return cls(
            exporter=source.get("EXPORTER", _DEFAULTS["EXPORTER"]),
            endpoint=source.get("OTLP_ENDPOINT"),
            headers=source.get("OTLP_HEADERS"),
            timeout=source.get("OTLP_TIMEOUT", _DEFAULTS["OTLP_TIMEOUT"]),
            grafana_instance_id=source.get("GRAFANA_INSTANCE_ID"),
            grafana_access_token=source.get("GRAFANA_ACCESS_TOKEN"),
            service_name=source.get("SERVICE_NAME"),
        )


__all__ = ["ExporterKind", "ExporterSettings"]
