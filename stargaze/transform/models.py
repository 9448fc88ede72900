"""Payloads consumed and produced by the star transform."""

from __future__ import annotations

import typing as typ

import msgspec


class StarRepository(msgspec.Struct, kw_only=True):
    """Repository summary carried by a star webhook."""

    id: int
    full_name: str
    html_url: str
    stargazers_count: int


class StarSender(msgspec.Struct, kw_only=True):
    """Account that starred or unstarred the repository."""

    login: str
    html_url: str


class GitHubStarEvent(msgspec.Struct, kw_only=True):
    """GitHub ``star`` webhook payload.

    Attributes
    ----------
    action : str
        ``"created"`` or ``"deleted"``. Kept as a plain string: other values
        are not rejected.
    starred_at : str, optional
        ISO 8601 timestamp, only sent for ``"created"``.
    repository : StarRepository
        Repository that was starred.
    sender : StarSender
        Account behind the action.

    """

    action: str
    repository: StarRepository
    sender: StarSender
    starred_at: str | None = None


class CaptureProperties(msgspec.Struct, kw_only=True):
    """Analytics event properties.

    ``starred_at`` is always encoded, as ``null`` when absent.
    """

    repo_name: str
    repo_url: str
    stargazer_username: str
    stargazer_profile: str
    star_count: int
    action: str
    starred_at: str | None
    count: int


class AnalyticsCaptureEvent(msgspec.Struct, kw_only=True):
    """Single-event capture payload posted to the analytics ingestion API."""

    event: str
    api_key: str | None
    distinct_id: str
    properties: CaptureProperties


class RelayRequest(msgspec.Struct, kw_only=True):
    """Request envelope handed to a relay transform handler."""

    headers: dict[str, str] = msgspec.field(default_factory=dict)
    body: typ.Any = None
