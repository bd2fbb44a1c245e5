"""Shared helpers for span status and timestamps."""

from __future__ import annotations
import logging
from datetime import UTC, datetime
from opentelemetry.trace import Span, Status, StatusCode


logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def set_span_status(
    span: Span, success: bool, description: str | None = None
) -> None:
    """Mark ``span`` OK when ``success`` is true, ERROR otherwise.

    OpenTelemetry only keeps a description on ERROR statuses, so it is
    dropped for OK.
    """
    if success:
        span.set_status(Status(StatusCode.OK))
    else:
        span.set_status(Status(StatusCode.ERROR, description))


def to_epoch_nanos(value: datetime | None) -> int | None:
    """Convert a timestamp to integer nanoseconds since the Unix epoch."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    delta = value - _EPOCH
    seconds = delta.days * 86_400 + delta.seconds
    return seconds * 1_000_000_000 + delta.microseconds * 1_000


def resolve_end_time(
    start: datetime | None, end: datetime | None
) -> datetime | None:
    """Return ``end`` clamped so that it never precedes a known ``start``."""
    if start is None or end is None:
        return end
    if end < start:
        logger.debug(
            "End time %s precedes start time %s; clamping.",
            end.isoformat(),
            start.isoformat(),
        )
        return start
    return end


def format_timestamp(value: datetime | None) -> str | None:
    """Render an optional timestamp as ISO-8601 for span attributes."""
    return value.isoformat() if value is not None else None


__all__ = [
    "format_timestamp",
    "resolve_end_time",
    "set_span_status",
    "to_epoch_nanos",
]
