"""Base and cross-cutting error types for stargaze."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

# Response bodies are echoed into log lines; keep them readable.
_BODY_PREVIEW_LIMIT = 500


def preview_body(body: str) -> str:
    """Return ``body`` truncated for inclusion in an error message."""
    if len(body) > _BODY_PREVIEW_LIMIT:
        return body[:_BODY_PREVIEW_LIMIT] + "..."
    return body


class StargazeError(Exception):
    """Base exception for every fatal provisioning failure.

    The CLI catches this type, logs it and exits with status 1.
    """


class PipelineConfigError(StargazeError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, *, variables: tuple[str, ...] = ()) -> None:
        """Record the offending environment variable names."""
        self.variables = variables
        super().__init__(message)

    @classmethod
    def missing_variables(cls, names: cabc.Iterable[str]) -> PipelineConfigError:
        """Return an error naming every missing required variable."""
        missing = tuple(names)
        joined = ", ".join(missing)
        return cls(
            f"Missing required environment variables: {joined}",
            variables=missing,
        )

    @classmethod
    def invalid_value(
        cls, name: str, value: str, constraint: str
    ) -> PipelineConfigError:
        """Return an error for a present but unusable setting."""
        return cls(f"Invalid {name} {value!r}. {constraint}", variables=(name,))


class TransformArtifactError(StargazeError):
    """Raised when the transform source cannot be loaded for submission."""

    @classmethod
    def unreadable(cls, location: str | Path, detail: str) -> TransformArtifactError:
        """Return an error for an artifact that could not be read."""
        return cls(f"Cannot read transform artifact {location}: {detail}")

    @classmethod
    def empty(cls, location: str | Path) -> TransformArtifactError:
        """Return an error for an artifact with no code in it."""
        return cls(f"Transform artifact {location} is empty")
