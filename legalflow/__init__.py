"""Legalflow: workflow step derivation for legal and compliance review requests."""

from .config import LegalflowConfig, load_config
from .contracts import (
    RequestMetadata,
    StepContent,
    StepDescriptor,
    StepDisplayRecord,
    StepKey,
    StepStatus,
)
from .progress import calculate_progress
from .resolver import resolve_step_status, visual_order
from .status import (
    STATUS_ORDER,
    RequestType,
    ReviewAudience,
    WorkflowStatus,
    is_at_or_before,
    rank_of,
)
from .stepper import get_steps_for_stepper
from .steps import build_step_sequence, steps_for
from .visibility import FormSection, should_show_form_section, visible_form_sections

__version__ = "0.1.0"
__all__ = [
    "STATUS_ORDER",
    "FormSection",
    "LegalflowConfig",
    "RequestMetadata",
    "RequestType",
    "ReviewAudience",
    "StepContent",
    "StepDescriptor",
    "StepDisplayRecord",
    "StepKey",
    "StepStatus",
    "WorkflowStatus",
    "build_step_sequence",
    "calculate_progress",
    "get_steps_for_stepper",
    "is_at_or_before",
    "load_config",
    "rank_of",
    "resolve_step_status",
    "should_show_form_section",
    "steps_for",
    "visible_form_sections",
    "visual_order",
]
