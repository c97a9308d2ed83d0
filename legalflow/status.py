"""Workflow statuses and their ordering."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

WAITING_ON_SUBMITTER = "Waiting On Submitter"


class WorkflowStatus(str, Enum):
    """Status stored on a legal review request."""

    DRAFT = "Draft"
    LEGAL_INTAKE = "Legal Intake"
    ASSIGN_ATTORNEY = "Assign Attorney"
    IN_REVIEW = "In Review"
    CLOSEOUT = "Closeout"
    AWAITING_FINRA_DOCUMENTS = "Awaiting FINRA Documents"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    ON_HOLD = "On Hold"

    @classmethod
    def parse(cls, value: Any) -> Optional["WorkflowStatus"]:
        """Return the status matching ``value`` or ``None`` when unknown.

        Accepts members, stored values ("In Review"), member names
        ("IN_REVIEW") and the legacy "Awaiting Foreside Documents" spelling.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip()
        if text in _LEGACY_VALUES:
            return _LEGACY_VALUES[text]
        try:
            return cls(text)
        except ValueError:
            pass
        return cls.__members__.get(text.upper().replace(" ", "_"))


_LEGACY_VALUES = {
    "Awaiting Foreside Documents": WorkflowStatus.AWAITING_FINRA_DOCUMENTS,
}


class RequestType(str, Enum):
    COMMUNICATION = "Communication"
    GENERAL_REVIEW = "General Review"
    IMA_REVIEW = "IMA Review"


class ReviewAudience(str, Enum):
    LEGAL = "Legal"
    COMPLIANCE = "Compliance"
    BOTH = "Both"


TERMINAL_RANK = 99

# Legal Intake and Assign Attorney share a rank; terminal statuses sit above
# everything so they never compare as "before" an in-flight status.
STATUS_ORDER: Dict[WorkflowStatus, int] = {
    WorkflowStatus.DRAFT: 1,
    WorkflowStatus.LEGAL_INTAKE: 2,
    WorkflowStatus.ASSIGN_ATTORNEY: 2,
    WorkflowStatus.IN_REVIEW: 3,
    WorkflowStatus.CLOSEOUT: 4,
    WorkflowStatus.AWAITING_FINRA_DOCUMENTS: 5,
    WorkflowStatus.COMPLETED: 6,
    WorkflowStatus.CANCELLED: TERMINAL_RANK,
    WorkflowStatus.ON_HOLD: TERMINAL_RANK,
}


def rank_of(status: Any) -> int:
    """Return the ordering rank of ``status``; unknown values rank 0."""
    parsed = WorkflowStatus.parse(status)
    if parsed is None:
        return 0
    return STATUS_ORDER.get(parsed, 0)


def is_at_or_before(a: Any, b: Any) -> bool:
    return rank_of(a) <= rank_of(b)


def is_terminal(status: Any) -> bool:
    """``True`` for the Cancelled and On Hold overlay statuses."""
    return WorkflowStatus.parse(status) in (
        WorkflowStatus.CANCELLED,
        WorkflowStatus.ON_HOLD,
    )
