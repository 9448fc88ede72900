"""Star event to analytics capture mapping.

This is the Python rendition of the mapping performed by the relay-side
transform artifact (``star_to_capture.js``). Both must stay field-for-field
identical; ``stargaze preview`` uses this module to show what the relay will
forward for a saved webhook payload.
"""

from __future__ import annotations

import typing as typ

import msgspec

from .models import (
    AnalyticsCaptureEvent,
    CaptureProperties,
    GitHubStarEvent,
    RelayRequest,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TRANSFORM_NAME = "github-star-to-posthog-capture"
TRANSFORM_ENV_KEY = "POSTHOG_API_KEY"
CAPTURE_EVENT_NAME = "GitHub Star"
CREATED_ACTION = "created"


def star_delta(action: str) -> int:
    """Return ``1`` for ``"created"`` and ``-1`` for anything else.

    Unknown actions deliberately fall into the ``-1`` branch.
    """
    return 1 if action == CREATED_ACTION else -1


def star_event_to_capture(
    event: GitHubStarEvent, *, api_key: str | None
) -> AnalyticsCaptureEvent:
    """Map a star webhook payload onto an analytics capture event."""
    repository = event.repository
    sender = event.sender
    return AnalyticsCaptureEvent(
        event=CAPTURE_EVENT_NAME,
        api_key=api_key,
        distinct_id=sender.login,
        properties=CaptureProperties(
            repo_name=repository.full_name,
            repo_url=repository.html_url,
            stargazer_username=sender.login,
            stargazer_profile=sender.html_url,
            star_count=repository.stargazers_count,
            action=event.action,
            starred_at=event.starred_at or None,
            count=star_delta(event.action),
        ),
    )


def transform_body(body: object, *, api_key: str | None) -> dict[str, typ.Any]:
    """Decode a raw webhook body and return the capture event as builtins.

    Raises
    ------
    msgspec.ValidationError
        If ``body`` is not a star event. The transform performs no recovery.

    """
    event = msgspec.convert(body, type=GitHubStarEvent)
    return msgspec.to_builtins(star_event_to_capture(event, api_key=api_key))


def transform_request(
    request: RelayRequest, env: cabc.Mapping[str, str]
) -> RelayRequest:
    """Apply the transform to a relay request envelope.

    This is the envelope contract of the relay handler in
    ``star_to_capture.js``: headers are passed through, the body is replaced
    by the capture event, and the analytics key comes from ``env`` (the
    execution environment attached to the transform rule), never from the
    process environment. ``stargaze preview`` runs payloads through it.
    """
    return RelayRequest(
        headers=dict(request.headers),
        body=transform_body(request.body, api_key=env.get(TRANSFORM_ENV_KEY)),
    )
