"""Command line interface for inspecting request workflow state."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from legalflow import (
    RequestMetadata,
    WorkflowStatus,
    calculate_progress,
    get_steps_for_stepper,
    load_config,
    visible_form_sections,
)
from legalflow.status import RequestType
from legalflow.visibility import SECTION_STATUS
from legalflow.waiting_on import action_text, determine_waiting_on, waiting_on_display_text

app = typer.Typer(help="CLI for legal review request workflows")


@app.callback()
def main() -> None:
    """Legalflow CLI entry point."""
    pass


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _parse_status(value: Optional[str], label: str = "status") -> Optional[WorkflowStatus]:
    if value is None:
        return None
    status = WorkflowStatus.parse(value)
    if status is None:
        _fail(f"Unknown {label}: {value}")
    return status


def _load_metadata(path: Optional[Path]) -> Optional[RequestMetadata]:
    if path is None:
        return None
    if not path.exists():
        _fail("Specified metadata file does not exist")
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"Could not read request metadata from {path}: {exc}")
    try:
        return RequestMetadata.model_validate_json(raw)
    except ValidationError as exc:
        _fail(f"Invalid request metadata in {path}: {exc}")


@app.command("steps")
def steps(
    request_type: Optional[str] = typer.Option(None, help="Request type"),
    status: Optional[str] = typer.Option(None, help="Current request status"),
    mode: Optional[str] = typer.Option(None, help="informational or progress"),
    metadata: Optional[Path] = typer.Option(None, help="JSON file with request metadata"),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
) -> None:
    """
    Print the stepper records for a request.

    Each line holds the step id, its status, title and both description lines.

    Example:
        legalflow steps --status "In Review" --metadata request.json
        # Output: draft    completed    Request    Submitted yesterday    by Jane Doe
        #         legalIntake    completed    Legal Intake    ...
    """
    config = load_config()
    current = _parse_status(status)
    meta = _load_metadata(metadata)
    chosen_mode = mode or config.stepper.default_mode
    if chosen_mode not in ("informational", "progress"):
        _fail(f"Unsupported mode: {chosen_mode}")
    chosen_type = request_type or config.stepper.default_request_type
    try:
        chosen_type = RequestType(chosen_type)
    except ValueError:
        _fail(f"Unknown request type: {chosen_type}")

    records = get_steps_for_stepper(
        chosen_type,
        current,
        chosen_mode,
        meta,
        fallback=config.stepper.terminal_fallback_status,
    )
    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in records], indent=2))
        return
    for record in records:
        typer.echo(
            "\t".join(
                [
                    record.id,
                    record.status.value,
                    record.title,
                    record.description1 or "",
                    record.description2 or "",
                ]
            )
        )


@app.command("sections")
def sections(
    status: str = typer.Option(..., help="Current request status"),
    previous_status: Optional[str] = typer.Option(None, help="Status before cancel/hold"),
) -> None:
    """
    List the request form sections and whether each one renders.

    Example:
        legalflow sections --status Cancelled --previous-status "In Review"
        # Output: requestInfo    shown
        #         closeout    hidden
    """
    config = load_config()
    current = _parse_status(status)
    previous = _parse_status(previous_status, "previous status")
    visible = visible_form_sections(
        current, previous, config.stepper.terminal_fallback_status
    )
    for section in SECTION_STATUS:
        state = "shown" if section in visible else "hidden"
        typer.echo(f"{section.value}\t{state}")


@app.command("progress")
def progress(
    status: str = typer.Option(..., help="Current request status"),
    metadata: Optional[Path] = typer.Option(None, help="JSON file with request metadata"),
) -> None:
    """
    Show progress, colour and who the request is waiting on.

    Example:
        legalflow progress --status Closeout --metadata request.json
        # Output: Progress: 75% (step 4 of 5, green)
        #         Waiting on: Jane Doe
        #         Action: Enter tracking ID and close out request
    """
    config = load_config()
    current = _parse_status(status)
    meta = _load_metadata(metadata)
    snapshot = calculate_progress(
        current, meta, fallback=config.stepper.terminal_fallback_status
    )
    waiting_on = determine_waiting_on(current, meta)
    typer.echo(
        f"Progress: {snapshot.progress:.0f}% "
        f"(step {snapshot.current_step} of {snapshot.total_steps}, {snapshot.color})"
    )
    typer.echo(waiting_on_display_text(waiting_on))
    typer.echo(f"Action: {action_text(waiting_on, current)}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
