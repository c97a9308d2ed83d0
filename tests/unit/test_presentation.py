"""Tests for display record assembly."""

from datetime import datetime, timedelta, timezone

import pytest

from legalflow.contracts import RequestMetadata, StepKey, StepStatus
from legalflow.presentation import (
    build_display_record,
    describe_step,
    format_friendly_date,
    format_full_date,
    to_display_record,
)
from legalflow.status import RequestType, WorkflowStatus
from legalflow.steps import FINRA_STEP, steps_for

NOW = datetime(2026, 3, 20, 15, 0, tzinfo=timezone.utc)


def _step(key: StepKey):
    if key is StepKey.FINRA:
        return FINRA_STEP
    return next(s for s in steps_for(RequestType.COMMUNICATION) if s.key is key)


@pytest.mark.parametrize(
    "days,expected",
    [
        (0, "today"),
        (1, "yesterday"),
        (3, "3 days ago"),
        (8, "last week"),
        (21, "3 weeks ago"),
        (45, "last month"),
    ],
)
def test_friendly_dates(days, expected) -> None:
    assert format_friendly_date(NOW - timedelta(days=days), NOW) == expected


def test_friendly_date_falls_back_to_short_date() -> None:
    assert format_friendly_date(datetime(2025, 1, 5, tzinfo=timezone.utc), NOW) == "Jan 5, 2025"
    assert format_friendly_date(None, NOW) == ""


def test_full_date() -> None:
    value = datetime(2026, 3, 16, 9, 5, tzinfo=timezone.utc)
    assert format_full_date(value) == "Monday, March 16, 2026 at 9:05 AM"


def test_draft_renamed_once_submitted() -> None:
    meta = RequestMetadata(
        submitted_on=NOW - timedelta(days=1), submitted_by="Jane Doe"
    )
    record = to_display_record(
        _step(StepKey.DRAFT), WorkflowStatus.LEGAL_INTAKE, "progress", meta, NOW
    )
    assert record.title == "Request"
    assert record.status is StepStatus.COMPLETED
    assert record.description1 == "Submitted yesterday"
    assert record.description2 == "by Jane Doe"
    assert record.is_clickable


def test_draft_current_shows_creator() -> None:
    meta = RequestMetadata(created_on=NOW, created_by_login="jdoe@example.com")
    record = to_display_record(
        _step(StepKey.DRAFT), WorkflowStatus.DRAFT, "progress", meta, NOW
    )
    assert record.title == "Draft"
    assert record.description1 == "Created today"
    assert record.description2 == "by jdoe@example.com"


def test_informational_mode_is_pending_and_clickable() -> None:
    record = to_display_record(
        _step(StepKey.CLOSEOUT), WorkflowStatus.DRAFT, "informational", None, NOW
    )
    assert record.status is StepStatus.PENDING
    assert record.is_clickable
    assert record.description1 == "Final steps"
    assert record.content is not None


def test_pending_steps_are_not_clickable() -> None:
    record = to_display_record(
        _step(StepKey.CLOSEOUT), WorkflowStatus.DRAFT, "progress", None, NOW
    )
    assert record.status is StepStatus.PENDING
    assert not record.is_clickable


def test_optional_step_default_description() -> None:
    assert describe_step(FINRA_STEP, StepStatus.PENDING) == (
        "Awaiting FINRA documents",
        "Optional",
    )


def test_both_audience_uses_later_review() -> None:
    meta = RequestMetadata(
        review_audience="Both",
        legal_review_completed_on=NOW - timedelta(days=3),
        legal_review_completed_by="Lee Legal",
        compliance_review_completed_on=NOW - timedelta(days=1),
        compliance_review_completed_by="Casey Compliance",
    )
    assert describe_step(_step(StepKey.IN_REVIEW), StepStatus.COMPLETED, meta, NOW) == (
        "Completed yesterday",
        "by Casey Compliance",
    )


def test_both_audience_with_one_side_finished() -> None:
    meta = RequestMetadata(
        review_audience="Both",
        legal_review_completed_on=NOW - timedelta(days=2),
        legal_review_completed_by="Lee Legal",
    )
    assert describe_step(_step(StepKey.IN_REVIEW), StepStatus.COMPLETED, meta, NOW) == (
        "Completed 2 days ago",
        "by Lee Legal",
    )


def test_review_falls_back_to_closeout_start() -> None:
    meta = RequestMetadata(review_audience="Both", closeout_started_on=NOW)
    assert describe_step(_step(StepKey.IN_REVIEW), StepStatus.COMPLETED, meta, NOW) == (
        "Completed today",
        "Both review",
    )


def test_review_in_progress_lists_each_side() -> None:
    meta = RequestMetadata(
        review_audience="Both",
        review_started_on=NOW - timedelta(days=2),
        legal_review_completed=True,
        legal_review_outcome="Approved",
    )
    assert describe_step(_step(StepKey.IN_REVIEW), StepStatus.CURRENT, meta, NOW) == (
        "In review since 2 days ago",
        "Legal: Approved | Compliance: In Progress",
    )


def test_review_waiting_on_submitter_record() -> None:
    meta = RequestMetadata(
        review_started_on=NOW,
        is_current_user_submitter=True,
        legal_review_status="Waiting On Submitter",
    )
    record = to_display_record(
        _step(StepKey.IN_REVIEW), WorkflowStatus.IN_REVIEW, "progress", meta, NOW
    )
    assert record.status is StepStatus.WARNING
    assert record.description2 == "Waiting on submitter"
    assert not record.is_clickable


def test_legal_intake_pending_triage() -> None:
    meta = RequestMetadata(submitted_on=NOW)
    assert describe_step(
        _step(StepKey.LEGAL_INTAKE), StepStatus.CURRENT, meta, NOW
    ) == ("Waiting since today", "Pending triage")


def test_legal_intake_completed_prefers_attorney() -> None:
    meta = RequestMetadata(
        legal_intake_completed_on=NOW,
        legal_intake_completed_by="Admin",
        assigned_attorney="Ari Attorney",
    )
    assert describe_step(
        _step(StepKey.LEGAL_INTAKE), StepStatus.COMPLETED, meta, NOW
    ) == ("Completed today", "by Ari Attorney")


def test_closeout_current_shows_tracking_id() -> None:
    meta = RequestMetadata(closeout_started_on=NOW, tracking_id="TRK-9")
    assert describe_step(_step(StepKey.CLOSEOUT), StepStatus.CURRENT, meta, NOW) == (
        "Started today",
        "ID: TRK-9",
    )


def test_warning_reads_like_current_for_paused_step() -> None:
    meta = RequestMetadata(closeout_started_on=NOW)
    assert describe_step(_step(StepKey.CLOSEOUT), StepStatus.WARNING, meta, NOW) == (
        "Started today",
        "Pending completion",
    )


def test_build_display_record_keeps_forced_status() -> None:
    record = build_display_record(_step(StepKey.IN_REVIEW), StepStatus.COMPLETED)
    assert record.status is StepStatus.COMPLETED
    assert record.id == "inReview"
    assert record.title == "Review"


def test_paused_review_step_reads_like_active_review() -> None:
    meta = RequestMetadata(review_started_on=NOW, review_audience="Legal")
    record = build_display_record(
        _step(StepKey.IN_REVIEW), StepStatus.WARNING, "progress", meta, NOW, paused=True
    )
    assert record.description1 == "In review since today"
    assert record.description2 == "Legal: In Progress"
    assert not record.is_clickable
