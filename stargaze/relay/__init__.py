"""Relay (Hookdeck) API client and payload models."""

from __future__ import annotations

from .client import RelayClient, RelayClientConfig
from .errors import RelayAPIError
from .models import (
    Connection,
    ConnectionUpsert,
    DestinationConfig,
    DestinationUpsert,
    EventDestination,
    EventSource,
    SourceAuth,
    SourceConfig,
    SourceUpsert,
    Transformation,
    TransformRule,
)

__all__ = [
    "Connection",
    "ConnectionUpsert",
    "DestinationConfig",
    "DestinationUpsert",
    "EventDestination",
    "EventSource",
    "RelayAPIError",
    "RelayClient",
    "RelayClientConfig",
    "SourceAuth",
    "SourceConfig",
    "SourceUpsert",
    "TransformRule",
    "Transformation",
]
