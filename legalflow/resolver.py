"""Classify each visual step against the current request status."""

from __future__ import annotations

from typing import Optional

from .contracts import RequestMetadata, StepDescriptor, StepKey, StepStatus
from .status import WAITING_ON_SUBMITTER, WorkflowStatus
from .steps import includes_finra_step

_VISUAL_ORDER = {
    WorkflowStatus.DRAFT: 1,
    WorkflowStatus.LEGAL_INTAKE: 2,
    WorkflowStatus.ASSIGN_ATTORNEY: 2,
    WorkflowStatus.IN_REVIEW: 3,
    WorkflowStatus.CLOSEOUT: 4,
    WorkflowStatus.AWAITING_FINRA_DOCUMENTS: 5,
}


def visual_order(status: Optional[WorkflowStatus], has_finra_step: bool = False) -> int:
    """Return the stepper slot for ``status``.

    Completed sits one slot past the last visible step, so it depends on
    whether the FINRA step is shown. Unknown and terminal statuses return 0.
    """
    parsed = WorkflowStatus.parse(status)
    if parsed is WorkflowStatus.COMPLETED:
        return 6 if has_finra_step else 5
    return _VISUAL_ORDER.get(parsed, 0)


def _waiting_on_submitter(metadata: Optional[RequestMetadata]) -> bool:
    if metadata is None or not metadata.is_current_user_submitter:
        return False
    return WAITING_ON_SUBMITTER in (
        metadata.legal_review_status,
        metadata.compliance_review_status,
    )


def resolve_step_status(
    step: StepDescriptor,
    current_status: Optional[WorkflowStatus],
    metadata: Optional[RequestMetadata] = None,
) -> StepStatus:
    """Resolve the display status of ``step`` for a request at ``current_status``.

    Never raises: a missing or unknown status leaves the step pending.
    """
    status = WorkflowStatus.parse(current_status)
    if status is None:
        return StepStatus.PENDING
    if status is WorkflowStatus.CANCELLED:
        return StepStatus.ERROR
    if status is WorkflowStatus.ON_HOLD:
        return StepStatus.WARNING

    if status is WorkflowStatus.COMPLETED and step.key in (
        StepKey.CLOSEOUT,
        StepKey.FINRA,
    ):
        return StepStatus.COMPLETED
    if status is WorkflowStatus.AWAITING_FINRA_DOCUMENTS:
        if step.key is StepKey.CLOSEOUT:
            return StepStatus.COMPLETED
        if step.key is StepKey.FINRA:
            return StepStatus.CURRENT

    has_finra = includes_finra_step(status, metadata)
    current_order = visual_order(status, has_finra)
    step_order = visual_order(step.associated_status, has_finra)

    if step_order < current_order:
        return StepStatus.COMPLETED
    if step_order == current_order:
        if step.key is StepKey.IN_REVIEW and _waiting_on_submitter(metadata):
            return StepStatus.WARNING
        return StepStatus.CURRENT
    return StepStatus.PENDING
