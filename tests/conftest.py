"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from tests.helpers.pipeline import OPTIONAL_ENV, REQUIRED_ENV, make_config

if typ.TYPE_CHECKING:
    from pathlib import Path

    from stargaze.config import PipelineConfig


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    """Return a complete configuration pointing at the fake APIs."""
    return make_config()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Clear stargaze variables and run from a directory without a .env file.

    Each variable is set before being deleted so monkeypatch also removes
    values that a dotenv file loads during the test.
    """
    for name in (*REQUIRED_ENV, *OPTIONAL_ENV):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
