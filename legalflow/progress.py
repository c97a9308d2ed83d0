"""Progress percentage and colour for request list views."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel

from .contracts import RequestMetadata
from .status import WorkflowStatus, is_terminal

ProgressColor = Literal["green", "yellow", "red", "blue", "gray"]

# Position of each status when the Assign Attorney committee was used.
_WITH_COMMITTEE: Dict[WorkflowStatus, int] = {
    WorkflowStatus.DRAFT: 1,
    WorkflowStatus.LEGAL_INTAKE: 2,
    WorkflowStatus.ASSIGN_ATTORNEY: 3,
    WorkflowStatus.IN_REVIEW: 4,
    WorkflowStatus.CLOSEOUT: 5,
    WorkflowStatus.AWAITING_FINRA_DOCUMENTS: 6,
    WorkflowStatus.COMPLETED: 7,
}

_WITHOUT_COMMITTEE: Dict[WorkflowStatus, int] = {
    WorkflowStatus.DRAFT: 1,
    WorkflowStatus.LEGAL_INTAKE: 2,
    WorkflowStatus.ASSIGN_ATTORNEY: 3,
    WorkflowStatus.IN_REVIEW: 3,
    WorkflowStatus.CLOSEOUT: 4,
    WorkflowStatus.AWAITING_FINRA_DOCUMENTS: 5,
    WorkflowStatus.COMPLETED: 6,
}


class ProgressSnapshot(BaseModel):
    progress: float
    current_step: int
    total_steps: int
    used_assign_attorney_step: bool
    color: ProgressColor


def _as_date(value: Optional[datetime | date]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def determine_progress_color(
    status: Optional[WorkflowStatus],
    target_return_date: Optional[datetime | date] = None,
    today: Optional[date] = None,
) -> ProgressColor:
    """Colour a progress bar by status and days left until the target date."""
    status = WorkflowStatus.parse(status)
    if status is WorkflowStatus.CANCELLED:
        return "gray"
    if status is WorkflowStatus.ON_HOLD:
        return "blue"
    if status in (WorkflowStatus.COMPLETED, WorkflowStatus.AWAITING_FINRA_DOCUMENTS):
        return "green"

    target = _as_date(target_return_date)
    if target is None:
        return "gray"
    today = today or datetime.now(timezone.utc).date()
    days_remaining = (target - today).days
    if days_remaining < 0:
        return "red"
    if days_remaining <= 1:
        return "yellow"
    return "green"


def calculate_progress(
    status: Optional[WorkflowStatus],
    metadata: Optional[RequestMetadata] = None,
    today: Optional[date] = None,
    fallback: WorkflowStatus = WorkflowStatus.DRAFT,
) -> ProgressSnapshot:
    """Compute how far a request has travelled along its actual path.

    The Assign Attorney step only counts when the request was sent to the
    committee. Cancelled and On Hold requests report the progress of the
    status they stopped at.
    """
    meta = metadata or RequestMetadata()
    parsed = WorkflowStatus.parse(status)
    used_committee = meta.submitted_to_assign_attorney_on is not None

    effective = parsed
    if parsed is not None and is_terminal(parsed):
        effective = meta.previous_status or fallback

    if used_committee:
        total_steps = 6
        current_step = _WITH_COMMITTEE.get(effective, 1)
    else:
        total_steps = 5
        current_step = _WITHOUT_COMMITTEE.get(effective, 1)

    progress = (current_step - 1) / (total_steps - 1) * 100
    progress = max(0.0, min(100.0, progress))

    return ProgressSnapshot(
        progress=progress,
        current_step=current_step,
        total_steps=total_steps,
        used_assign_attorney_step=used_committee,
        color=determine_progress_color(parsed, meta.target_return_date, today),
    )
