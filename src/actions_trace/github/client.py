"""Async client for the GitHub Actions REST API."""

from __future__ import annotations
import logging
from types import TracebackType
from typing import Any
import httpx
from pydantic import ValidationError
from actions_trace.errors import GitHubAPIError
from actions_trace.models import Job, JobsPage


logger = logging.getLogger(__name__)

_DEFAULT_API_URL = "https://api.github.com"
_API_VERSION = "2022-11-28"


class GitHubClient:
    """Small wrapper around :class:`httpx.AsyncClient` for workflow jobs."""

    def __init__(
        self,
        *,
        token: str | None,
        base_url: str = _DEFAULT_API_URL,
        timeout: float = 30.0,
        per_page: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create a client bound to the provided API endpoint."""
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
            "User-Agent": "actions-trace",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )
        self._per_page = per_page

    async def __aenter__(self) -> GitHubClient:
        """Return the client for use in an ``async with`` block."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the client when leaving the ``async with`` block."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _get_json(
        self, path: str, *, params: dict[str, Any], description: str
    ) -> Any:
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = (
                f"GitHub API request failed with status {status} "
                f"while fetching {description}"
            )
            raise GitHubAPIError(msg, response=exc.response) from exc
        except httpx.HTTPError as exc:
            msg = f"Unable to reach the GitHub API while fetching {description}"
            raise GitHubAPIError(msg) from exc

        logger.debug("GET %s -> %s: %s", path, response.status_code, response.text)
        try:
            return response.json()
        except ValueError as exc:
            msg = f"GitHub API returned invalid JSON while fetching {description}"
            raise GitHubAPIError(msg, response=response) from exc

    async def list_workflow_run_jobs(
        self, owner: str, repo: str, run_id: int
    ) -> JobsPage:
        """Return every job of a workflow run, following pagination."""
        path = f"/repos/{owner}/{repo}/actions/runs/{run_id}/jobs"
        description = f"jobs for run {run_id}"
        jobs: list[Job] = []
        total_count = 0
        page = 1
        while True:
            payload = await self._get_json(
                path,
                params={"per_page": self._per_page, "page": page},
                description=description,
            )
            try:
                listing = JobsPage.model_validate(payload)
            except ValidationError as exc:
                msg = f"GitHub API returned an unexpected payload for {description}"
                raise GitHubAPIError(msg) from exc

            total_count = listing.total_count
            jobs.extend(listing.jobs)
            if not listing.jobs or len(jobs) >= total_count:
                break
            page += 1
        return JobsPage(total_count=total_count, jobs=jobs)


__all__ = ["GitHubClient"]
