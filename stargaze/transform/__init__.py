"""Star event transform: relay artifact and Python mapping."""

from __future__ import annotations

from .artifact import load_transform_source, packaged_artifact
from .mapping import (
    CAPTURE_EVENT_NAME,
    TRANSFORM_ENV_KEY,
    TRANSFORM_NAME,
    star_delta,
    star_event_to_capture,
    transform_body,
    transform_request,
)
from .models import (
    AnalyticsCaptureEvent,
    CaptureProperties,
    GitHubStarEvent,
    RelayRequest,
    StarRepository,
    StarSender,
)

__all__ = [
    "CAPTURE_EVENT_NAME",
    "TRANSFORM_ENV_KEY",
    "TRANSFORM_NAME",
    "AnalyticsCaptureEvent",
    "CaptureProperties",
    "GitHubStarEvent",
    "RelayRequest",
    "StarRepository",
    "StarSender",
    "load_transform_source",
    "packaged_artifact",
    "star_delta",
    "star_event_to_capture",
    "transform_body",
    "transform_request",
]
