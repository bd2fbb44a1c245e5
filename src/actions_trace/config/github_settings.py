"""Configuration model for the GitHub side of an export."""

from __future__ import annotations
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast
from pydantic import BaseModel, Field, field_validator
from actions_trace.config.defaults import _DEFAULTS


class GitHubSettings(BaseModel):
    """Where to find the triggering event and how to reach the REST API."""

    token: str | None = None
    api_url: str = Field(default=str(_DEFAULTS["GITHUB_API_URL"]))
    event_name: str | None = None
    event_path: Path | None = None
    repository: str | None = None
    per_page: int = Field(
        default=int(cast(int, _DEFAULTS["JOBS_PER_PAGE"])), ge=1, le=100
    )

    @field_validator("token", "event_name", "repository", mode="before")
    @classmethod
    def _coerce_optional(cls, value: object | None) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("event_path", mode="before")
    @classmethod
    def _coerce_path(cls, value: object | None) -> object | None:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value

    @field_validator("api_url", mode="before")
    @classmethod
    def _coerce_api_url(cls, value: object | None) -> str:
        if value is None:
            return str(_DEFAULTS["GITHUB_API_URL"])
        return str(value).rstrip("/")

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any]) -> GitHubSettings:
        """Build GitHub settings from the normalized Dynaconf mapping."""
        return cls(
            token=source.get("GITHUB_TOKEN"),
            api_url=source.get("GITHUB_API_URL", _DEFAULTS["GITHUB_API_URL"]),
            event_name=source.get("GITHUB_EVENT_NAME"),
            event_path=source.get("GITHUB_EVENT_PATH"),
            repository=source.get("GITHUB_REPOSITORY"),
            per_page=source.get("JOBS_PER_PAGE", _DEFAULTS["JOBS_PER_PAGE"]),
        )


__all__ = ["GitHubSettings"]
