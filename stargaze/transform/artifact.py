"""Loading of the relay-side transform artifact."""

from __future__ import annotations

import importlib.resources
import typing as typ

from stargaze.errors import TransformArtifactError

if typ.TYPE_CHECKING:
    from importlib.resources.abc import Traversable
    from pathlib import Path

ARTIFACT_RESOURCE = "star_to_capture.js"


def packaged_artifact() -> Traversable:
    """Return the transform artifact shipped with stargaze."""
    return importlib.resources.files("stargaze.transform").joinpath(ARTIFACT_RESOURCE)


def load_transform_source(path: Path | None = None) -> str:
    """Return the transform code submitted with the connection rule.

    Parameters
    ----------
    path
        Artifact to read instead of the one packaged with stargaze.

    Raises
    ------
    TransformArtifactError
        If the artifact cannot be read or holds no code.

    """
    location: Traversable | Path = packaged_artifact() if path is None else path
    try:
        source = location.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TransformArtifactError.unreadable(str(location), str(exc)) from exc

    if not source.strip():
        raise TransformArtifactError.empty(str(location))
    return source
