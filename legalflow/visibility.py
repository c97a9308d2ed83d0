"""Decide which request form sections render for a request."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from .status import WorkflowStatus, is_terminal, rank_of


class FormSection(str, Enum):
    REQUEST_INFO = "requestInfo"
    APPROVALS = "approvals"
    LEGAL_INTAKE = "legalIntake"
    LEGAL_REVIEW = "legalReview"
    COMPLIANCE_REVIEW = "complianceReview"
    CLOSEOUT = "closeout"
    FINRA_DOCUMENTS = "finraDocuments"


# Status at which each section first carries data.
SECTION_STATUS: Dict[FormSection, WorkflowStatus] = {
    FormSection.REQUEST_INFO: WorkflowStatus.DRAFT,
    FormSection.APPROVALS: WorkflowStatus.DRAFT,
    FormSection.LEGAL_INTAKE: WorkflowStatus.LEGAL_INTAKE,
    FormSection.LEGAL_REVIEW: WorkflowStatus.IN_REVIEW,
    FormSection.COMPLIANCE_REVIEW: WorkflowStatus.IN_REVIEW,
    FormSection.CLOSEOUT: WorkflowStatus.CLOSEOUT,
    FormSection.FINRA_DOCUMENTS: WorkflowStatus.AWAITING_FINRA_DOCUMENTS,
}


def should_show_form_section(
    section_status: Optional[WorkflowStatus],
    current_status: Optional[WorkflowStatus],
    previous_status: Optional[WorkflowStatus] = None,
    fallback: WorkflowStatus = WorkflowStatus.DRAFT,
) -> bool:
    """Return whether the section tied to ``section_status`` should render.

    Outside Cancelled/On Hold every section renders. For those statuses only
    sections the request reached before it stopped are shown, using
    ``fallback`` when no previous status was recorded.
    """
    if not is_terminal(current_status):
        return True
    reached = WorkflowStatus.parse(previous_status)
    if reached is None or is_terminal(reached):
        reached = fallback
    return rank_of(section_status) <= rank_of(reached)


def visible_form_sections(
    current_status: Optional[WorkflowStatus],
    previous_status: Optional[WorkflowStatus] = None,
    fallback: WorkflowStatus = WorkflowStatus.DRAFT,
) -> List[FormSection]:
    return [
        section
        for section, status in SECTION_STATUS.items()
        if should_show_form_section(status, current_status, previous_status, fallback)
    ]
