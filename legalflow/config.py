from __future__ import annotations

import logging
import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, field_validator

from .status import RequestType, WorkflowStatus

logger = logging.getLogger(__name__)


class StepperConfig(BaseModel):
    """Defaults used when building stepper output."""

    default_mode: Literal["informational", "progress"] = "progress"
    default_request_type: RequestType = RequestType.COMMUNICATION
    terminal_fallback_status: WorkflowStatus = WorkflowStatus.DRAFT

    @field_validator("terminal_fallback_status", mode="before")
    @classmethod
    def _parse_status(cls, v):
        parsed = WorkflowStatus.parse(v)
        if parsed is None:
            raise ValueError(f"Unknown workflow status: {v!r}")
        if parsed in (WorkflowStatus.CANCELLED, WorkflowStatus.ON_HOLD):
            raise ValueError("terminal_fallback_status must be an in-flight status")
        return parsed


class LegalflowConfig(BaseModel):
    """Top-level configuration model."""

    stepper: StepperConfig = StepperConfig()


def load_config(path: Optional[str] = None) -> LegalflowConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to LEGALFLOW_CONFIG env
            variable or 'legalflow.yaml' in the current directory.
    """

    config_path = path or os.getenv("LEGALFLOW_CONFIG", "legalflow.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = LegalflowConfig(**data)
        logger.info(f"Loaded configuration from {config_path}")
    else:
        config = LegalflowConfig()

    env_fallback = os.getenv("LEGALFLOW_TERMINAL_FALLBACK")
    if env_fallback:
        config.stepper = StepperConfig(
            **{**config.stepper.model_dump(), "terminal_fallback_status": env_fallback}
        )
    return config
