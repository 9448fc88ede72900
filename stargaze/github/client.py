"""GitHub REST client for repository webhooks."""

from __future__ import annotations

import dataclasses
import typing as typ

import httpx
import msgspec

from stargaze.config import DEFAULT_GITHUB_API_BASE, DEFAULT_HTTP_TIMEOUT_S
from stargaze.logging import get_logger, log_debug

from .errors import GitHubAPIError
from .models import GitHubWebhook

if typ.TYPE_CHECKING:
    from stargaze.config import PipelineConfig

    from .models import WebhookPayload

logger = get_logger(__name__)

_HOOKS_PAGE_SIZE = 100


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubHooksConfig:
    """Configuration for the GitHub hooks client."""

    token: str
    api_base: str = DEFAULT_GITHUB_API_BASE
    timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    user_agent: str = "stargaze/0.1"

    @classmethod
    def from_pipeline(cls, config: PipelineConfig) -> GitHubHooksConfig:
        """Derive GitHub settings from the pipeline configuration."""
        return cls(
            token=config.github_token,
            api_base=config.github_api_base,
            timeout_s=config.http_timeout_s,
        )


class GitHubHooksClient:
    """List, create and update webhooks of a single repository."""

    def __init__(
        self,
        config: GitHubHooksConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"token {config.token}",
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": config.user_agent,
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _hooks_url(self, owner: str, name: str) -> str:
        return f"{self._config.api_base.rstrip('/')}/repos/{owner}/{name}/hooks"

    async def list_hooks(self, owner: str, name: str) -> list[GitHubWebhook]:
        """Return the webhooks configured on ``owner/name``.

        Only the first page is read; a repository carries at most a handful
        of hooks.
        """
        response = await self._send(
            "listing webhooks",
            "GET",
            self._hooks_url(owner, name),
            params={"per_page": _HOOKS_PAGE_SIZE},
        )
        return self._decode("listing webhooks", response, list[GitHubWebhook])

    async def create_hook(
        self, owner: str, name: str, payload: WebhookPayload
    ) -> GitHubWebhook:
        """Create a webhook on ``owner/name``."""
        response = await self._send(
            "creating webhook",
            "POST",
            self._hooks_url(owner, name),
            content=msgspec.json.encode(payload),
        )
        return self._decode("creating webhook", response, GitHubWebhook)

    async def update_hook(
        self, owner: str, name: str, hook_id: int, payload: WebhookPayload
    ) -> GitHubWebhook:
        """Update webhook ``hook_id`` on ``owner/name`` in place."""
        response = await self._send(
            f"updating webhook {hook_id}",
            "PATCH",
            f"{self._hooks_url(owner, name)}/{hook_id}",
            content=msgspec.json.encode(payload),
        )
        return self._decode(f"updating webhook {hook_id}", response, GitHubWebhook)

    async def _send(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        params: dict[str, typ.Any] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        headers = {"Content-Type": "application/json"} if content is not None else None
        try:
            response = await self._client.request(
                method, url, params=params, content=content, headers=headers
            )
        except httpx.HTTPError as exc:
            raise GitHubAPIError.transport_error(operation, str(exc)) from exc

        log_debug(logger, "%s %s -> %d", method, url, response.status_code)
        # A renamed repository answers with a redirect, which is not followed.
        if not response.is_success:
            raise GitHubAPIError.http_error(
                operation, response.status_code, response.text
            )
        return response

    @staticmethod
    def _decode[T](operation: str, response: httpx.Response, type_: type[T]) -> T:
        try:
            return msgspec.json.decode(response.content, type=type_)
        except msgspec.DecodeError as exc:
            raise GitHubAPIError.invalid_response(operation, str(exc)) from exc
