"""Build the ordered display records handed to the stepper."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .contracts import (
    RequestMetadata,
    StepContent,
    StepDescriptor,
    StepDisplayRecord,
    StepKey,
    StepStatus,
    StepperMode,
)
from .presentation import (
    actor_phrase,
    date_phrase,
    build_display_record,
    format_full_date,
    to_display_record,
)
from .status import RequestType, WorkflowStatus, is_terminal, rank_of
from .steps import StepSequence, build_step_sequence, step_for_status

logger = logging.getLogger(__name__)


def _cancelled_record(
    metadata: Optional[RequestMetadata], now: Optional[datetime]
) -> StepDisplayRecord:
    meta = metadata or RequestMetadata()
    details = []
    if meta.cancelled_on:
        details.append(f"Cancelled on {format_full_date(meta.cancelled_on)}")
    if meta.cancelled_by:
        details.append(f"Cancelled by {meta.cancelled_by}")
    return StepDisplayRecord(
        id=StepKey.CANCELLED.value,
        title="Cancelled",
        description1=date_phrase("Cancelled", meta.cancelled_on, now),
        description2=actor_phrase(None, meta.cancelled_by),
        status=StepStatus.ERROR,
        content=StepContent(
            title="Request Cancelled",
            description=meta.cancel_reason or "No reason was recorded",
            details=details,
        ),
        is_clickable=True,
    )


def _on_hold_record(
    metadata: Optional[RequestMetadata], now: Optional[datetime]
) -> StepDisplayRecord:
    meta = metadata or RequestMetadata()
    details = []
    if meta.on_hold_since:
        details.append(f"On hold since {format_full_date(meta.on_hold_since)}")
    if meta.on_hold_by:
        details.append(f"Placed on hold by {meta.on_hold_by}")
    return StepDisplayRecord(
        id=StepKey.ON_HOLD.value,
        title="On Hold",
        description1=date_phrase("On hold since", meta.on_hold_since, now),
        description2=meta.on_hold_reason or actor_phrase(None, meta.on_hold_by),
        status=StepStatus.BLOCKED,
        content=StepContent(
            title="Request On Hold",
            description=meta.on_hold_reason or "No reason was recorded",
            details=details,
        ),
        is_clickable=True,
    )


def _stop_status(
    current_status: WorkflowStatus,
    metadata: Optional[RequestMetadata],
    fallback: WorkflowStatus,
) -> WorkflowStatus:
    previous = metadata.previous_status if metadata else None
    if previous is None or is_terminal(previous):
        logger.warning(
            f"{current_status.value} request has no usable previous status; "
            f"truncating at {fallback.value}"
        )
        return fallback
    return previous


def _stop_step(steps: StepSequence, stop_status: WorkflowStatus) -> StepDescriptor:
    step = step_for_status(steps, stop_status)
    if step is not None:
        return step
    # Statuses without a step of their own stop at the last step they passed.
    reached = [s for s in steps if rank_of(s.associated_status) <= rank_of(stop_status)]
    return reached[-1] if reached else steps[0]


def _truncate_at_stop(
    steps: StepSequence,
    current_status: WorkflowStatus,
    stop_status: WorkflowStatus,
    metadata: Optional[RequestMetadata],
    now: Optional[datetime],
) -> List[StepDisplayRecord]:
    stop = _stop_step(steps, stop_status)
    cancelled = current_status is WorkflowStatus.CANCELLED
    logger.debug(f"Truncating {current_status.value} request at step {stop.key.value}")

    records: List[StepDisplayRecord] = []
    for step in steps:
        paused = step.key is stop.key and not cancelled
        status = StepStatus.WARNING if paused else StepStatus.COMPLETED
        records.append(
            build_display_record(step, status, "progress", metadata, now, paused=paused)
        )
        if step.key is stop.key:
            break

    if cancelled:
        records.append(_cancelled_record(metadata, now))
    else:
        records.append(_on_hold_record(metadata, now))
    return records


def get_steps_for_stepper(
    request_type: RequestType | str | None,
    current_status: Optional[WorkflowStatus | str] = None,
    mode: StepperMode = "progress",
    metadata: Optional[RequestMetadata] = None,
    now: Optional[datetime] = None,
    fallback: WorkflowStatus = WorkflowStatus.DRAFT,
) -> List[StepDisplayRecord]:
    """Return the ordered display records for a request.

    Cancelled and On Hold requests are cut off at the step they stopped in
    (``metadata.previous_status``, or ``fallback`` when none was recorded)
    and end with a terminal record.

    Args:
        request_type: Request type selecting the step definitions.
        current_status: Current request status, ``None`` before a request exists.
        mode: ``"informational"`` previews the process, ``"progress"`` tracks a request.
        metadata: Snapshot of the request used for descriptions and overrides.
        now: Reference instant for relative dates. Defaults to the current time.
        fallback: Truncation point for terminal requests without a previous status.
    """
    now = now or datetime.now(timezone.utc)
    status = WorkflowStatus.parse(current_status)

    if mode == "progress" and status is not None and is_terminal(status):
        stop_status = _stop_status(status, metadata, fallback)
        steps = build_step_sequence(request_type, stop_status, metadata)
        return _truncate_at_stop(steps, status, stop_status, metadata, now)

    steps = build_step_sequence(request_type, status, metadata)
    return [to_display_record(step, status, mode, metadata, now) for step in steps]
