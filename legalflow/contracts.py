"""Core data contracts for the workflow stepper."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .status import ReviewAudience, WorkflowStatus

StepperMode = Literal["informational", "progress"]


class StepKey(str, Enum):
    """Identifier of a visual step in the stepper."""

    DRAFT = "draft"
    LEGAL_INTAKE = "legalIntake"
    IN_REVIEW = "inReview"
    CLOSEOUT = "closeout"
    FINRA = "finra"
    CANCELLED = "cancelled"
    ON_HOLD = "onHold"


class StepStatus(str, Enum):
    COMPLETED = "completed"
    CURRENT = "current"
    PENDING = "pending"
    WARNING = "warning"
    ERROR = "error"
    BLOCKED = "blocked"


class StepContent(BaseModel):
    """Informational content shown when a step is opened."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    details: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    estimated_duration: Optional[str] = None
    required_fields: List[str] = Field(default_factory=list)
    who_is_involved: List[str] = Field(default_factory=list)


class StepDescriptor(BaseModel):
    """Static definition of one visual step."""

    model_config = ConfigDict(frozen=True)

    key: StepKey
    label: str
    description: str
    associated_status: WorkflowStatus
    is_optional: bool = False
    content: Optional[StepContent] = None
    order: int


class RequestMetadata(BaseModel):
    """Read-only projection of a request used to phrase and classify steps.

    Accepts snake_case or camelCase keys. Timestamps may arrive as ISO
    strings; naive values are taken to be UTC so that every timestamp on the
    model compares with every other.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    created_on: Optional[datetime] = None
    created_by: Optional[str] = None
    created_by_login: Optional[str] = None
    submitted_on: Optional[datetime] = None
    submitted_by: Optional[str] = None
    submitted_by_login: Optional[str] = None
    submitted_to_assign_attorney_on: Optional[datetime] = None
    target_return_date: Optional[datetime] = None

    legal_intake_completed_on: Optional[datetime] = None
    legal_intake_completed_by: Optional[str] = None
    legal_intake_completed_by_login: Optional[str] = None
    assigned_attorney: Optional[str] = None
    assigned_attorney_login: Optional[str] = None

    review_audience: Optional[ReviewAudience] = None
    review_started_on: Optional[datetime] = None
    legal_review_status: Optional[str] = None
    legal_review_outcome: Optional[str] = None
    legal_review_completed: bool = False
    legal_review_completed_on: Optional[datetime] = None
    legal_review_completed_by: Optional[str] = None
    legal_review_completed_by_login: Optional[str] = None
    compliance_review_status: Optional[str] = None
    compliance_review_outcome: Optional[str] = None
    compliance_review_completed: bool = False
    compliance_review_completed_on: Optional[datetime] = None
    compliance_review_completed_by: Optional[str] = None
    compliance_review_completed_by_login: Optional[str] = None

    closeout_started_on: Optional[datetime] = None
    closeout_completed_by: Optional[str] = None
    closeout_completed_by_login: Optional[str] = None
    completed_on: Optional[datetime] = None
    tracking_id: Optional[str] = None

    awaiting_finra_since: Optional[datetime] = None
    finra_completed_on: Optional[datetime] = None
    finra_completed_by: Optional[str] = None
    finra_completed_by_login: Optional[str] = None

    cancelled_on: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancel_reason: Optional[str] = None
    on_hold_since: Optional[datetime] = None
    on_hold_by: Optional[str] = None
    on_hold_reason: Optional[str] = None

    previous_status: Optional[WorkflowStatus] = None
    is_foreside_review_required: bool = False
    is_current_user_submitter: bool = False

    @field_validator("previous_status", mode="before")
    @classmethod
    def _parse_previous_status(cls, v: Any) -> Optional[WorkflowStatus]:
        if v is None or v == "":
            return None
        return WorkflowStatus.parse(v)

    @field_validator("review_audience", mode="before")
    @classmethod
    def _blank_audience(cls, v: Any) -> Any:
        return None if v == "" else v

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, v: Any) -> Any:
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class StepDisplayRecord(BaseModel):
    """A step as handed to the rendering host."""

    id: str
    title: str
    description1: Optional[str] = None
    description2: Optional[str] = None
    status: StepStatus
    content: Optional[StepContent] = None
    is_clickable: bool = False
