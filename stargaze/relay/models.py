"""Typed request and response payloads for the relay API.

Responses are decoded leniently: fields the relay adds beyond the ones
listed here are ignored.
"""

from __future__ import annotations

import typing as typ

import msgspec


class EventSource(msgspec.Struct, kw_only=True):
    """Inbound ingestion endpoint that GitHub delivers webhooks to.

    Attributes
    ----------
    id : str
        Relay identifier of the source.
    name : str
        Deterministic name used for upserts.
    url : str
        Public URL registered as the GitHub webhook target.
    created_at, updated_at : str, optional
        ISO 8601 timestamps reported by the relay.

    """

    id: str
    name: str
    url: str
    created_at: str | None = None
    updated_at: str | None = None


class DestinationConfig(msgspec.Struct, kw_only=True):
    """Delivery settings of a destination."""

    url: str | None = None


class EventDestination(msgspec.Struct, kw_only=True):
    """Outbound delivery target (the analytics capture URL)."""

    id: str
    name: str
    config: DestinationConfig | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def url(self) -> str | None:
        """Return the delivery URL, when the relay reports one."""
        return self.config.url if self.config is not None else None


class Transformation(msgspec.Struct, kw_only=True):
    """Inline transform code and the environment it executes with."""

    name: str
    code: str
    env: dict[str, str] = msgspec.field(default_factory=dict)


class TransformRule(msgspec.Struct, kw_only=True):
    """Connection rule running a transformation on every routed event."""

    type: typ.Literal["transform"] = "transform"
    transformation: Transformation


class Connection(msgspec.Struct, kw_only=True):
    """Binding of one source to one destination."""

    id: str
    name: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class SourceAuth(msgspec.Struct, kw_only=True):
    webhook_secret_key: str


class SourceConfig(msgspec.Struct, kw_only=True):
    auth: SourceAuth


class SourceUpsert(msgspec.Struct, kw_only=True):
    """Body of ``PUT /sources``."""

    name: str
    type: str = "GITHUB"
    config: SourceConfig


class DestinationUpsert(msgspec.Struct, kw_only=True):
    """Body of ``PUT /destinations``."""

    name: str
    config: DestinationConfig


class ConnectionUpsert(msgspec.Struct, kw_only=True):
    """Body of ``PUT /connections``."""

    name: str
    source_id: str
    destination_id: str
    rules: list[TransformRule] = msgspec.field(default_factory=list)
