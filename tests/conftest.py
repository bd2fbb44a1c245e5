"""Shared fixtures for the exporter tests."""

from __future__ import annotations
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
import pytest
from tests.factories import SpanCapture, workflow_run_payload


@pytest.fixture()
def capture() -> Iterator[SpanCapture]:
    spans = SpanCapture()
    yield spans
    spans.provider.shutdown()


@pytest.fixture()
def event_file(tmp_path: Path) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(workflow_run_payload()), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    logger = logging.getLogger("actions_trace")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith(("ACTIONS_TRACE_", "INPUT_", "GITHUB_")):
            monkeypatch.delenv(name, raising=False)
