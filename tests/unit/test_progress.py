"""Tests for progress calculation."""

from datetime import date, datetime, timezone

import pytest

from legalflow.contracts import RequestMetadata
from legalflow.progress import calculate_progress, determine_progress_color
from legalflow.status import WorkflowStatus

TODAY = date(2026, 3, 20)


def test_progress_without_committee() -> None:
    snapshot = calculate_progress(WorkflowStatus.CLOSEOUT, today=TODAY)
    assert snapshot.total_steps == 5
    assert snapshot.current_step == 4
    assert snapshot.progress == pytest.approx(75.0)
    assert not snapshot.used_assign_attorney_step


def test_progress_with_committee() -> None:
    meta = RequestMetadata(
        submitted_to_assign_attorney_on=datetime(2026, 3, 1, tzinfo=timezone.utc)
    )
    snapshot = calculate_progress(WorkflowStatus.IN_REVIEW, meta, TODAY)
    assert snapshot.total_steps == 6
    assert snapshot.current_step == 4
    assert snapshot.progress == pytest.approx(60.0)
    assert snapshot.used_assign_attorney_step


def test_completed_progress_is_clamped() -> None:
    snapshot = calculate_progress(WorkflowStatus.COMPLETED, today=TODAY)
    assert snapshot.progress == 100.0
    assert snapshot.color == "green"


def test_terminal_progress_uses_previous_status() -> None:
    meta = RequestMetadata(previous_status="In Review")
    snapshot = calculate_progress(WorkflowStatus.ON_HOLD, meta, TODAY)
    assert snapshot.current_step == 3
    assert snapshot.color == "blue"

    snapshot = calculate_progress(WorkflowStatus.CANCELLED, today=TODAY)
    assert snapshot.current_step == 1
    assert snapshot.progress == 0.0
    assert snapshot.color == "gray"


@pytest.mark.parametrize(
    "target,expected",
    [
        (None, "gray"),
        (date(2026, 3, 19), "red"),
        (date(2026, 3, 20), "yellow"),
        (date(2026, 3, 21), "yellow"),
        (date(2026, 3, 25), "green"),
    ],
)
def test_progress_color_by_target_date(target, expected) -> None:
    assert determine_progress_color(WorkflowStatus.IN_REVIEW, target, TODAY) == expected


def test_awaiting_finra_is_green() -> None:
    assert (
        determine_progress_color(
            WorkflowStatus.AWAITING_FINRA_DOCUMENTS, date(2020, 1, 1), TODAY
        )
        == "green"
    )
