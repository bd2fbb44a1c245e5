"""Child spans for the steps of a job."""

from __future__ import annotations
import logging
from collections.abc import Sequence
from opentelemetry.context import Context
from opentelemetry.trace import Tracer
from actions_trace.models import Step
from actions_trace.tracing.attributes import (
    build_step_attributes,
    remove_unset_attributes,
)
from actions_trace.tracing.spans import (
    resolve_end_time,
    set_span_status,
    to_epoch_nanos,
)


logger = logging.getLogger(__name__)


def process_steps(
    steps: Sequence[Step], tracer: Tracer, parent_context: Context
) -> int:
    """Open and close one span per step, in input order.

    Steps are handled strictly one after another so that the emitted spans
    follow the order of ``steps``. The step ``number`` is informational and
    is not used for sorting. A step that cannot be traced is recorded on its
    own span and the remaining steps are still processed. Returns the number
    of spans opened.
    """
    opened = 0
    for step in steps:
        span = tracer.start_span(
            f"Step: {step.name}",
            context=parent_context,
            start_time=to_epoch_nanos(step.started_at),
        )
        opened += 1
        try:
            span.set_attributes(remove_unset_attributes(build_step_attributes(step)))
            set_span_status(
                span,
                step.conclusion == "success",
                f"conclusion: {step.conclusion}",
            )
        except Exception as exc:
            logger.exception("Failed to trace step %s (%s)", step.number, step.name)
            span.record_exception(exc)
        finally:
            end_time = resolve_end_time(step.started_at, step.completed_at)
            span.end(end_time=to_epoch_nanos(end_time))
    return opened


__all__ = ["process_steps"]
