"""Work out who a request is waiting on."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

from .contracts import RequestMetadata
from .status import WAITING_ON_SUBMITTER, ReviewAudience, WorkflowStatus

LEGAL_ADMIN = "LegalAdmin"
ATTORNEY_ASSIGNER = "AttorneyAssigner"
COMPLIANCE_USERS = "ComplianceUsers"


class WaitingOn(BaseModel):
    kind: Literal["user", "group", "none"]
    identifier: str = ""
    display_name: str


def _user(login: Optional[str], name: Optional[str]) -> WaitingOn:
    return WaitingOn(
        kind="user", identifier=login or name or "", display_name=name or "Unknown"
    )


def _nobody(display_name: str) -> WaitingOn:
    return WaitingOn(kind="none", display_name=display_name)


def _submitter(meta: RequestMetadata) -> WaitingOn:
    if meta.submitted_by or meta.submitted_by_login:
        return _user(meta.submitted_by_login, meta.submitted_by)
    return _user(meta.created_by_login, meta.created_by)


def _has_submitter(meta: RequestMetadata) -> bool:
    return any(
        (meta.submitted_by, meta.submitted_by_login, meta.created_by, meta.created_by_login)
    )


def _waiting_in_review(meta: RequestMetadata) -> WaitingOn:
    if WAITING_ON_SUBMITTER in (meta.legal_review_status, meta.compliance_review_status):
        if _has_submitter(meta):
            return _submitter(meta)

    audience = meta.review_audience
    if audience in (ReviewAudience.LEGAL, ReviewAudience.BOTH):
        has_attorney = bool(meta.assigned_attorney or meta.assigned_attorney_login)
        if meta.legal_review_status == "Waiting On Attorney" and has_attorney:
            return _user(meta.assigned_attorney_login, meta.assigned_attorney)
        if meta.legal_review_status in ("In Progress", "Not Started"):
            if has_attorney:
                return _user(meta.assigned_attorney_login, meta.assigned_attorney)
            return WaitingOn(
                kind="group",
                identifier=LEGAL_ADMIN,
                display_name="Legal Admin (to assign attorney)",
            )

    if audience in (ReviewAudience.COMPLIANCE, ReviewAudience.BOTH):
        if meta.compliance_review_status in (
            "Waiting On Compliance",
            "In Progress",
            "Not Started",
        ):
            return WaitingOn(
                kind="group", identifier=COMPLIANCE_USERS, display_name="Compliance Users"
            )

    return _nobody("In Review")


def determine_waiting_on(
    status: Optional[WorkflowStatus], metadata: Optional[RequestMetadata] = None
) -> WaitingOn:
    """Return the user or group the request is waiting on."""
    meta = metadata or RequestMetadata()
    status = WorkflowStatus.parse(status)

    if status is WorkflowStatus.CANCELLED:
        return _nobody("Request cancelled")
    if status is WorkflowStatus.ON_HOLD:
        if meta.on_hold_by:
            return _user(None, meta.on_hold_by)
        return _nobody("On hold")
    if status is WorkflowStatus.COMPLETED:
        return _nobody("Request completed")
    if status in (
        WorkflowStatus.DRAFT,
        WorkflowStatus.CLOSEOUT,
        WorkflowStatus.AWAITING_FINRA_DOCUMENTS,
    ):
        return _submitter(meta)
    if status is WorkflowStatus.LEGAL_INTAKE:
        return WaitingOn(kind="group", identifier=LEGAL_ADMIN, display_name="Legal Admin")
    if status is WorkflowStatus.ASSIGN_ATTORNEY:
        return WaitingOn(
            kind="group",
            identifier=ATTORNEY_ASSIGNER,
            display_name="Attorney Assignment Committee",
        )
    if status is WorkflowStatus.IN_REVIEW:
        return _waiting_in_review(meta)
    return _nobody("Unknown")


def waiting_on_display_text(waiting_on: WaitingOn) -> str:
    if waiting_on.kind == "none":
        return waiting_on.display_name
    return f"Waiting on: {waiting_on.display_name}"


_ACTIONS = {
    WorkflowStatus.DRAFT: "Complete form and submit request",
    WorkflowStatus.LEGAL_INTAKE: "Review request and assign attorney or send to committee",
    WorkflowStatus.ASSIGN_ATTORNEY: "Assign attorney to request",
    WorkflowStatus.IN_REVIEW: "Complete review and provide feedback",
    WorkflowStatus.CLOSEOUT: "Enter tracking ID and close out request",
    WorkflowStatus.AWAITING_FINRA_DOCUMENTS: "Upload FINRA documents",
    WorkflowStatus.ON_HOLD: "Resume request when ready",
}


def action_text(waiting_on: WaitingOn, status: Optional[WorkflowStatus]) -> str:
    """Describe what needs to happen next."""
    status = WorkflowStatus.parse(status)
    if waiting_on.kind == "none":
        if status is WorkflowStatus.COMPLETED:
            return "Request has been completed"
        if status is WorkflowStatus.CANCELLED:
            return "Request has been cancelled"
        return "No action required"
    return _ACTIONS.get(status, "Action required")
