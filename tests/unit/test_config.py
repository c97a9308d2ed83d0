"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from legalflow.config import load_config
from legalflow.status import RequestType, WorkflowStatus


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("LEGALFLOW_TERMINAL_FALLBACK", raising=False)
    monkeypatch.setenv("LEGALFLOW_CONFIG", str(tmp_path / "missing.yaml"))

    config = load_config()
    assert config.stepper.default_mode == "progress"
    assert config.stepper.default_request_type is RequestType.COMMUNICATION
    assert config.stepper.terminal_fallback_status is WorkflowStatus.DRAFT


def test_load_config_from_env(tmp_path, monkeypatch):
    monkeypatch.delenv("LEGALFLOW_TERMINAL_FALLBACK", raising=False)
    config_path = tmp_path / "legalflow.yaml"
    config_path.write_text(
        """
stepper:
  default_mode: informational
  default_request_type: IMA Review
  terminal_fallback_status: Legal Intake
"""
    )
    monkeypatch.setenv("LEGALFLOW_CONFIG", str(config_path))

    config = load_config()
    assert config.stepper.default_mode == "informational"
    assert config.stepper.default_request_type is RequestType.IMA_REVIEW
    assert config.stepper.terminal_fallback_status is WorkflowStatus.LEGAL_INTAKE


def test_fallback_env_overrides_file(tmp_path, monkeypatch):
    config_path = tmp_path / "legalflow.yaml"
    config_path.write_text("stepper:\n  default_mode: informational\n")
    monkeypatch.setenv("LEGALFLOW_TERMINAL_FALLBACK", "In Review")

    config = load_config(str(config_path))
    assert config.stepper.default_mode == "informational"
    assert config.stepper.terminal_fallback_status is WorkflowStatus.IN_REVIEW


def test_terminal_fallback_must_be_in_flight(tmp_path, monkeypatch):
    monkeypatch.delenv("LEGALFLOW_TERMINAL_FALLBACK", raising=False)
    config_path = tmp_path / "legalflow.yaml"
    config_path.write_text("stepper:\n  terminal_fallback_status: Cancelled\n")

    with pytest.raises(ValidationError):
        load_config(str(config_path))
