"""Relay (Hookdeck) API client.

Every write is a ``PUT``, which the relay treats as create-or-update keyed
by the resource name. Calling an upsert twice with the same name returns the
same resource instead of creating a duplicate.
"""

from __future__ import annotations

import dataclasses
import typing as typ

import httpx
import msgspec

from stargaze.config import DEFAULT_HTTP_TIMEOUT_S, DEFAULT_RELAY_API_BASE
from stargaze.logging import get_logger, log_debug

from .errors import RelayAPIError
from .models import (
    Connection,
    ConnectionUpsert,
    DestinationUpsert,
    EventDestination,
    EventSource,
    SourceUpsert,
)

if typ.TYPE_CHECKING:
    from stargaze.config import PipelineConfig

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class RelayClientConfig:
    """Connection settings for :class:`RelayClient`."""

    api_key: str
    base_url: str = DEFAULT_RELAY_API_BASE
    timeout_s: float = DEFAULT_HTTP_TIMEOUT_S

    @classmethod
    def from_pipeline(cls, config: PipelineConfig) -> RelayClientConfig:
        """Derive relay settings from the pipeline configuration."""
        return cls(
            api_key=config.relay_api_key,
            base_url=config.relay_api_base,
            timeout_s=config.http_timeout_s,
        )


class RelayClient:
    """Upsert sources, destinations and connections on the relay."""

    def __init__(
        self,
        config: RelayClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client, creating an HTTP client when none is given."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def upsert_source(self, body: SourceUpsert) -> EventSource:
        """Create or update a source by name."""
        return await self._put("sources", body, EventSource)

    async def upsert_destination(self, body: DestinationUpsert) -> EventDestination:
        """Create or update a destination by name."""
        return await self._put("destinations", body, EventDestination)

    async def upsert_connection(self, body: ConnectionUpsert) -> Connection:
        """Create or update a connection by name."""
        return await self._put("connections", body, Connection)

    async def _put[T](
        self, resource: str, body: msgspec.Struct, response_type: type[T]
    ) -> T:
        url = f"{self._config.base_url.rstrip('/')}/{resource}"
        try:
            response = await self._client.put(
                url,
                content=msgspec.json.encode(body),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise RelayAPIError.transport_error(resource, str(exc)) from exc

        log_debug(logger, "PUT %s -> %d", url, response.status_code)
        # Redirects are not followed, so anything outside 2xx is an error.
        if not response.is_success:
            raise RelayAPIError.http_error(
                resource, response.status_code, response.text
            )

        try:
            return msgspec.json.decode(response.content, type=response_type)
        except msgspec.DecodeError as exc:
            raise RelayAPIError.invalid_response(resource, str(exc)) from exc
