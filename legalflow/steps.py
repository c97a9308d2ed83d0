"""Static step definitions and the step sequence pipeline."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from .contracts import RequestMetadata, StepContent, StepDescriptor, StepKey
from .status import RequestType, WorkflowStatus

logger = logging.getLogger(__name__)

StepSequence = Tuple[StepDescriptor, ...]
StepTransformer = Callable[
    [StepSequence, Optional[WorkflowStatus], Optional[RequestMetadata]], StepSequence
]


STEP_CONTENTS: Dict[StepKey, StepContent] = {
    StepKey.DRAFT: StepContent(
        title="Draft Request",
        description="Create and prepare your legal review request",
        details=[
            "Fill in basic request information including title, purpose, and submission type",
            "Select the appropriate submission item and target return date",
            "Choose whether legal, compliance, or both reviews are required",
            "Add pre-submission approvals with supporting documents",
        ],
        tips=[
            "Save your work frequently as a draft",
            "Gather all necessary approvals before submission",
            "Be clear and specific in your purpose statement",
        ],
        estimated_duration="30-60 minutes",
        required_fields=[
            "Request Title",
            "Purpose",
            "Submission Type",
            "Submission Item",
            "Target Return Date",
            "Review Audience",
            "At least one approval",
        ],
        who_is_involved=[
            "Submitter",
            "Approvers (Communications, Portfolio Manager, etc.)",
        ],
    ),
    StepKey.LEGAL_INTAKE: StepContent(
        title="Legal Intake",
        description="Request is reviewed and triaged by Legal Admin",
        details=[
            "Legal Admin reviews the request details and all submitted materials",
            "Verifies that all required approvals are in place",
            "Confirms the review audience (Legal, Compliance, or Both)",
            "Assigns an attorney directly or sends the request to the assignment committee",
        ],
        tips=[
            "Ensure your request details are complete and accurate",
            "All supporting documents should be uploaded",
            "Respond promptly to any questions from Legal Admin",
        ],
        estimated_duration="1-2 business days",
        who_is_involved=["Legal Admin", "Attorney Assignment Committee"],
    ),
    StepKey.IN_REVIEW: StepContent(
        title="In Review",
        description="Legal and/or Compliance review in progress",
        details=[
            "Assigned attorney conducts legal review of materials",
            "Compliance team conducts compliance review (if required)",
            "Reviewers may request additional information or clarifications",
            "Review continues until outcome is determined",
        ],
        tips=[
            "Respond quickly to reviewer questions",
            "Check status updates regularly",
            "Provide any additional materials promptly",
        ],
        estimated_duration="Varies by submission type (see turnaround time)",
        who_is_involved=["Assigned Attorney", "Compliance Reviewers"],
    ),
    StepKey.CLOSEOUT: StepContent(
        title="Closeout",
        description="Final steps and request completion",
        details=[
            "All required reviews have been completed",
            "Tracking ID is assigned if required (Compliance + Foreside/Retail)",
            "Final documentation is prepared",
            "Request is marked as complete",
        ],
        tips=[
            "Review the final outcomes from all reviewers",
            "Save all final documentation for your records",
            "Materials can now be used per review outcomes",
        ],
        estimated_duration="1 business day",
        who_is_involved=["Submitter", "Legal Admin"],
    ),
    StepKey.FINRA: StepContent(
        title="FINRA Documents",
        description="Foreside review documents are collected for FINRA filing",
        details=[
            "Required when compliance marks the request for Foreside review",
            "Submitter uploads the FINRA filing documents",
            "Request completes once the documents are received",
        ],
        tips=["Upload the filing letter and any Foreside comments together"],
        estimated_duration="Varies",
        who_is_involved=["Submitter", "Compliance"],
    ),
}


_CANONICAL_STEPS: StepSequence = (
    StepDescriptor(
        key=StepKey.DRAFT,
        label="Draft",
        description="Create request",
        associated_status=WorkflowStatus.DRAFT,
        content=STEP_CONTENTS[StepKey.DRAFT],
        order=1,
    ),
    StepDescriptor(
        key=StepKey.LEGAL_INTAKE,
        label="Legal Intake",
        description="Triage & assign",
        associated_status=WorkflowStatus.LEGAL_INTAKE,
        content=STEP_CONTENTS[StepKey.LEGAL_INTAKE],
        order=2,
    ),
    StepDescriptor(
        key=StepKey.IN_REVIEW,
        label="Review",
        description="Legal/Compliance review",
        associated_status=WorkflowStatus.IN_REVIEW,
        content=STEP_CONTENTS[StepKey.IN_REVIEW],
        order=3,
    ),
    StepDescriptor(
        key=StepKey.CLOSEOUT,
        label="Closeout",
        description="Final steps",
        associated_status=WorkflowStatus.CLOSEOUT,
        content=STEP_CONTENTS[StepKey.CLOSEOUT],
        order=4,
    ),
)

FINRA_STEP = StepDescriptor(
    key=StepKey.FINRA,
    label="FINRA Documents",
    description="Awaiting FINRA documents",
    associated_status=WorkflowStatus.AWAITING_FINRA_DOCUMENTS,
    is_optional=True,
    content=STEP_CONTENTS[StepKey.FINRA],
    order=5,
)

# All request types currently share the canonical sequence.
_STEPS_BY_TYPE: Dict[RequestType, StepSequence] = {
    RequestType.COMMUNICATION: _CANONICAL_STEPS,
    RequestType.GENERAL_REVIEW: _CANONICAL_STEPS,
    RequestType.IMA_REVIEW: _CANONICAL_STEPS,
}


def steps_for(request_type: RequestType | str | None) -> StepSequence:
    """Return the static step sequence for ``request_type``."""
    try:
        key = RequestType(request_type) if request_type is not None else None
    except ValueError:
        key = None
    return _STEPS_BY_TYPE.get(key, _CANONICAL_STEPS)


def includes_finra_step(
    current_status: Optional[WorkflowStatus],
    metadata: Optional[RequestMetadata] = None,
) -> bool:
    """Whether the FINRA documents step belongs in the sequence."""
    if WorkflowStatus.parse(current_status) is WorkflowStatus.AWAITING_FINRA_DOCUMENTS:
        return True
    return bool(metadata and metadata.is_foreside_review_required)


def _append_finra_step(
    steps: StepSequence,
    current_status: Optional[WorkflowStatus],
    metadata: Optional[RequestMetadata],
) -> StepSequence:
    if not includes_finra_step(current_status, metadata):
        return steps
    if any(step.key is StepKey.FINRA for step in steps):
        return steps
    return steps + (FINRA_STEP,)


STEP_TRANSFORMERS: Tuple[StepTransformer, ...] = (_append_finra_step,)


def build_step_sequence(
    request_type: RequestType | str | None,
    current_status: Optional[WorkflowStatus] = None,
    metadata: Optional[RequestMetadata] = None,
    transformers: Tuple[StepTransformer, ...] = STEP_TRANSFORMERS,
) -> StepSequence:
    """Build the step sequence for a request by applying ``transformers``."""
    steps = steps_for(request_type)
    for transform in transformers:
        steps = transform(steps, current_status, metadata)
    logger.debug(
        f"Built step sequence for {request_type}: {[s.key.value for s in steps]}"
    )
    return steps


def step_for_status(
    steps: StepSequence, status: Optional[WorkflowStatus]
) -> Optional[StepDescriptor]:
    """Return the step representing ``status`` within ``steps``.

    Assign Attorney is shown as part of the Legal Intake step.
    """
    parsed = WorkflowStatus.parse(status)
    if parsed is WorkflowStatus.ASSIGN_ATTORNEY:
        parsed = WorkflowStatus.LEGAL_INTAKE
    return next((s for s in steps if s.associated_status is parsed), None)
