"""Turn step descriptors into display records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple

from .contracts import (
    RequestMetadata,
    StepDescriptor,
    StepDisplayRecord,
    StepKey,
    StepStatus,
    StepperMode,
)
from .resolver import resolve_step_status
from .status import ReviewAudience, WorkflowStatus

Descriptions = Tuple[Optional[str], Optional[str]]

_CLICKABLE = (StepStatus.COMPLETED, StepStatus.CURRENT)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_friendly_date(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Format ``value`` relative to ``now`` ("today", "3 days ago", ...)."""
    if value is None:
        return ""
    value = _as_utc(value)
    now = _as_utc(now or datetime.now(timezone.utc))
    diff_days = (now.date() - value.date()).days

    if diff_days == 0:
        return "today"
    if diff_days == 1:
        return "yesterday"
    if 1 < diff_days < 7:
        return f"{diff_days} days ago"
    if 7 <= diff_days < 14:
        return "last week"
    if 14 <= diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    if 30 <= diff_days < 60:
        return "last month"
    return f"{value:%b} {value.day}, {value.year}"


def format_full_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    value = _as_utc(value)
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value:%A, %B} {value.day}, {value.year} at {hour}:{value:%M} {suffix}"


def date_phrase(prefix: str, value: Optional[datetime], now: Optional[datetime]) -> str:
    if value is None:
        return prefix
    return f"{prefix} {format_friendly_date(value, now)}"


def actor_phrase(login: Optional[str], name: Optional[str]) -> Optional[str]:
    if name:
        return f"by {name}"
    if login:
        return f"by {login}"
    return None


def _last_review(
    meta: RequestMetadata,
) -> Tuple[Optional[datetime], Optional[str], Optional[str]]:
    """Return (date, login, name) of the review that finished last.

    With a "Both" audience the later of the two completions wins; when only
    one side finished, that side is used.
    """
    legal = (
        meta.legal_review_completed_on,
        meta.legal_review_completed_by_login,
        meta.legal_review_completed_by,
    )
    compliance = (
        meta.compliance_review_completed_on,
        meta.compliance_review_completed_by_login,
        meta.compliance_review_completed_by,
    )
    if meta.review_audience is ReviewAudience.LEGAL:
        return legal
    if meta.review_audience is ReviewAudience.COMPLIANCE:
        return compliance
    if meta.review_audience is ReviewAudience.BOTH:
        if legal[0] and compliance[0]:
            return legal if legal[0] > compliance[0] else compliance
        if legal[0]:
            return legal
        return compliance
    return (None, None, None)


def _review_progress(meta: RequestMetadata) -> Optional[str]:
    parts = []
    if meta.review_audience in (ReviewAudience.LEGAL, ReviewAudience.BOTH):
        if meta.legal_review_completed:
            parts.append(f"Legal: {meta.legal_review_outcome or 'Completed'}")
        else:
            parts.append("Legal: In Progress")
    if meta.review_audience in (ReviewAudience.COMPLIANCE, ReviewAudience.BOTH):
        if meta.compliance_review_completed:
            parts.append(f"Compliance: {meta.compliance_review_outcome or 'Completed'}")
        else:
            parts.append("Compliance: In Progress")
    return " | ".join(parts) or None


def _audience_phrase(meta: RequestMetadata) -> Optional[str]:
    if meta.review_audience is None:
        return None
    return f"{meta.review_audience.value} review"


def _describe_draft(meta, status, now) -> Optional[Descriptions]:
    if status is StepStatus.COMPLETED and meta.submitted_on:
        return (
            date_phrase("Submitted", meta.submitted_on, now),
            actor_phrase(meta.submitted_by_login, meta.submitted_by),
        )
    if status is StepStatus.CURRENT and meta.created_on:
        return (
            date_phrase("Created", meta.created_on, now),
            actor_phrase(meta.created_by_login, meta.created_by),
        )
    return None


def _describe_legal_intake(meta, status, now) -> Optional[Descriptions]:
    if status is StepStatus.COMPLETED and meta.legal_intake_completed_on:
        if meta.assigned_attorney or meta.assigned_attorney_login:
            who = actor_phrase(meta.assigned_attorney_login, meta.assigned_attorney)
        else:
            who = actor_phrase(
                meta.legal_intake_completed_by_login, meta.legal_intake_completed_by
            )
        return date_phrase("Completed", meta.legal_intake_completed_on, now), who
    if status is StepStatus.CURRENT and meta.submitted_on:
        if meta.assigned_attorney:
            return (
                "Pending committee",
                actor_phrase(meta.assigned_attorney_login, meta.assigned_attorney),
            )
        return date_phrase("Waiting since", meta.submitted_on, now), "Pending triage"
    return None


def _describe_in_review(meta, status, now) -> Optional[Descriptions]:
    if status is StepStatus.COMPLETED:
        date, login, name = _last_review(meta)
        who = actor_phrase(login, name) or _audience_phrase(meta)
        return date_phrase("Completed", date or meta.closeout_started_on, now), who
    if status is StepStatus.WARNING:
        return (
            date_phrase("In review since", meta.review_started_on, now),
            "Waiting on submitter",
        )
    if status is StepStatus.CURRENT:
        return (
            date_phrase("In review since", meta.review_started_on, now),
            _review_progress(meta) or _audience_phrase(meta),
        )
    return None


def _describe_closeout(meta, status, now) -> Optional[Descriptions]:
    tracking = f"ID: {meta.tracking_id}" if meta.tracking_id else None
    finished_on = meta.completed_on or meta.awaiting_finra_since
    if status is StepStatus.COMPLETED and finished_on:
        who = actor_phrase(meta.closeout_completed_by_login, meta.closeout_completed_by)
        return date_phrase("Completed", finished_on, now), who or tracking
    if status is StepStatus.CURRENT and meta.closeout_started_on:
        return (
            date_phrase("Started", meta.closeout_started_on, now),
            tracking or "Pending completion",
        )
    return None


def _describe_finra(meta, status, now) -> Optional[Descriptions]:
    if status is StepStatus.COMPLETED and meta.finra_completed_on:
        return (
            date_phrase("Completed", meta.finra_completed_on, now),
            actor_phrase(meta.finra_completed_by_login, meta.finra_completed_by),
        )
    if status is StepStatus.CURRENT:
        return (
            date_phrase("Waiting since", meta.awaiting_finra_since, now),
            "Pending FINRA documents",
        )
    return None


_DESCRIBERS = {
    StepKey.DRAFT: _describe_draft,
    StepKey.LEGAL_INTAKE: _describe_legal_intake,
    StepKey.IN_REVIEW: _describe_in_review,
    StepKey.CLOSEOUT: _describe_closeout,
    StepKey.FINRA: _describe_finra,
}


def describe_step(
    step: StepDescriptor,
    status: StepStatus,
    metadata: Optional[RequestMetadata] = None,
    now: Optional[datetime] = None,
    paused: bool = False,
) -> Descriptions:
    """Return the two description lines for ``step`` in ``status``.

    ``paused`` marks the step an On Hold request stopped at. It reads like
    the active step; only the review step's submitter warning has its own
    phrasing.
    """
    describer = _DESCRIBERS.get(step.key)
    if metadata is not None and describer is not None:
        phrased_as = status
        review_warning = step.key is StepKey.IN_REVIEW and not paused
        if status is StepStatus.WARNING and not review_warning:
            phrased_as = StepStatus.CURRENT
        described = describer(metadata, phrased_as, now)
        if described is not None:
            return described
    return step.description, "Optional" if step.is_optional else None


def build_display_record(
    step: StepDescriptor,
    status: StepStatus,
    mode: StepperMode = "progress",
    metadata: Optional[RequestMetadata] = None,
    now: Optional[datetime] = None,
    paused: bool = False,
) -> StepDisplayRecord:
    """Assemble the display record for ``step`` with an already known status."""
    description1, description2 = describe_step(step, status, metadata, now, paused)
    title = step.label
    if step.key is StepKey.DRAFT and status is StepStatus.COMPLETED:
        title = "Request"
    return StepDisplayRecord(
        id=step.key.value,
        title=title,
        description1=description1,
        description2=description2,
        status=status,
        content=step.content,
        is_clickable=mode == "informational" or status in _CLICKABLE,
    )


def to_display_record(
    step: StepDescriptor,
    current_status: Optional[WorkflowStatus],
    mode: StepperMode = "progress",
    metadata: Optional[RequestMetadata] = None,
    now: Optional[datetime] = None,
) -> StepDisplayRecord:
    """Resolve the status of ``step`` and build its display record.

    Informational mode previews the whole process, so every step is pending
    and clickable.
    """
    if mode == "informational":
        status = StepStatus.PENDING
    else:
        status = resolve_step_status(step, current_status, metadata)
    return build_display_record(step, status, mode, metadata, now)
