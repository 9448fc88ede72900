"""Unit tests for the relay transform artifact."""

from __future__ import annotations

import typing as typ

import msgspec
import pytest

from stargaze.errors import TransformArtifactError
from stargaze.transform import (
    CAPTURE_EVENT_NAME,
    TRANSFORM_ENV_KEY,
    CaptureProperties,
    load_transform_source,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(scope="module")
def packaged_source() -> str:
    """Return the packaged artifact text."""
    return load_transform_source()


def test_packaged_artifact_registers_transform_handler(packaged_source: str) -> None:
    """The artifact binds a handler to the transform hook."""
    assert 'addHandler("transform"' in packaged_source


def test_packaged_artifact_has_no_module_syntax(packaged_source: str) -> None:
    """The sandbox evaluates a plain script, so nothing is exported."""
    assert "export " not in packaged_source
    assert "exports" not in packaged_source
    assert "import " not in packaged_source
    assert "require(" not in packaged_source


def test_packaged_artifact_mirrors_python_mapping(packaged_source: str) -> None:
    """Every capture property of the Python mapping appears in the artifact."""
    for field in msgspec.structs.fields(CaptureProperties):
        assert f"{field.name}:" in packaged_source
    assert f'"{CAPTURE_EVENT_NAME}"' in packaged_source
    assert f"process.env.{TRANSFORM_ENV_KEY}" in packaged_source
    assert 'action === "created" ? 1 : -1' in packaged_source


def test_override_path_is_read_verbatim(tmp_path: Path) -> None:
    """An override artifact is returned without patching."""
    artifact = tmp_path / "transform.js"
    artifact.write_text('addHandler("transform", (r) => r);\n', encoding="utf-8")

    assert load_transform_source(artifact) == 'addHandler("transform", (r) => r);\n'


def test_missing_artifact_raises(tmp_path: Path) -> None:
    """An unreadable artifact is a fatal error naming the path."""
    missing = tmp_path / "dist" / "transform.js"

    with pytest.raises(TransformArtifactError, match="transform.js"):
        load_transform_source(missing)


def test_empty_artifact_raises(tmp_path: Path) -> None:
    """A whitespace-only artifact is rejected."""
    artifact = tmp_path / "transform.js"
    artifact.write_text("\n  \n", encoding="utf-8")

    with pytest.raises(TransformArtifactError, match="empty"):
        load_transform_source(artifact)
