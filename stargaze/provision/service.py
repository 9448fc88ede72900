"""Idempotent provisioning of the GitHub → relay → analytics pipeline.

The provisioner converges remote state on a fixed target in four strictly
sequential steps:

1. upsert the relay source receiving GitHub webhooks,
2. upsert the relay destination pointing at the analytics capture URL,
3. upsert the connection carrying the transform rule,
4. create or update the repository's star webhook.

Relay writes are upserts keyed by name and the GitHub step looks up the
existing hook first, so re-running the provisioner converges instead of
duplicating resources. Nothing is rolled back when a later step fails;
rerunning completes the pipeline.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from stargaze.github import (
    GitHubAPIError,
    GitHubHooksClient,
    GitHubHooksConfig,
    WebhookPayload,
    find_star_webhook,
)
from stargaze.logging import get_logger, log_info, log_warning
from stargaze.relay import (
    ConnectionUpsert,
    DestinationConfig,
    DestinationUpsert,
    RelayClient,
    RelayClientConfig,
    SourceAuth,
    SourceConfig,
    SourceUpsert,
    Transformation,
    TransformRule,
)
from stargaze.transform import (
    TRANSFORM_ENV_KEY,
    TRANSFORM_NAME,
    load_transform_source,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from stargaze.config import PipelineConfig
    from stargaze.github import GitHubWebhook
    from stargaze.relay import Connection, EventDestination, EventSource

logger = get_logger(__name__)


class WebhookAction(enum.StrEnum):
    """Outcome of the GitHub webhook step."""

    CREATED = "created"
    UPDATED = "updated"


@dataclasses.dataclass(frozen=True, slots=True)
class WebhookSync:
    """Identifier of the synchronised hook and how it was written."""

    hook_id: int
    action: WebhookAction


@dataclasses.dataclass(frozen=True, slots=True)
class ProvisioningResult:
    """Remote resources the pipeline is made of after a successful run."""

    source: EventSource
    destination: EventDestination
    connection: Connection
    webhook: WebhookSync


class PipelineProvisioner:
    """Create or update every pipeline resource for one repository."""

    def __init__(
        self,
        config: PipelineConfig,
        *,
        relay: RelayClient,
        github: GitHubHooksClient,
        load_transform: cabc.Callable[[Path | None], str] = load_transform_source,
    ) -> None:
        """Bind the provisioner to its configuration and API clients."""
        self._config = config
        self._relay = relay
        self._github = github
        self._load_transform = load_transform

    async def ensure_event_source(self) -> EventSource:
        """Upsert the relay source that receives the GitHub webhooks."""
        source = await self._relay.upsert_source(
            SourceUpsert(
                name=self._config.source_name,
                config=SourceConfig(
                    auth=SourceAuth(webhook_secret_key=self._config.webhook_secret)
                ),
            )
        )
        log_info(logger, "Relay source ready: %s (%s)", source.id, source.name)
        log_info(logger, "Relay source URL: %s", source.url)
        return source

    async def ensure_event_destination(self) -> EventDestination:
        """Upsert the relay destination delivering to the analytics API."""
        destination = await self._relay.upsert_destination(
            DestinationUpsert(
                name=self._config.destination_name,
                config=DestinationConfig(url=self._config.capture_url),
            )
        )
        log_info(
            logger,
            "Relay destination ready: %s (%s)",
            destination.id,
            destination.name,
        )
        return destination

    async def ensure_connection(
        self, source_id: str, destination_id: str
    ) -> Connection:
        """Upsert the connection routing the source through the transform.

        Raises
        ------
        TransformArtifactError
            If the transform code cannot be loaded. Nothing is sent then.
        RelayAPIError
            If the relay rejects the connection.

        """
        code = self._load_transform(self._config.transform_path)
        rule = TransformRule(
            transformation=Transformation(
                name=TRANSFORM_NAME,
                code=code,
                env={TRANSFORM_ENV_KEY: self._config.analytics_api_key},
            )
        )
        connection = await self._relay.upsert_connection(
            ConnectionUpsert(
                name=self._config.connection_name,
                source_id=source_id,
                destination_id=destination_id,
                rules=[rule],
            )
        )
        log_info(logger, "Relay connection ready: %s", connection.id)
        return connection

    async def find_existing_webhook(self) -> GitHubWebhook | None:
        """Return the repository's star webhook, or None.

        A failed listing is logged and reported as "no webhook", which makes
        the sync step create a new hook. When the failure was transient this
        can leave a duplicate hook behind.
        """
        try:
            hooks = await self._github.list_hooks(
                self._config.repo_owner, self._config.repo_name
            )
        except GitHubAPIError as exc:
            log_warning(
                logger,
                "Could not list webhooks for %s, assuming none exist: %s",
                self._config.repo_slug,
                exc,
            )
            return None
        return find_star_webhook(hooks)

    async def sync_github_webhook(self, source_url: str) -> WebhookSync:
        """Point the repository's star webhook at ``source_url``.

        Updates the existing canonical hook in place (PATCH) or creates one
        (POST). Either write failing raises :class:`GitHubAPIError`.
        """
        payload = WebhookPayload.for_star_events(
            source_url, self._config.webhook_secret
        )
        owner, name = self._config.repo_owner, self._config.repo_name
        existing = await self.find_existing_webhook()

        if existing is not None:
            log_info(logger, "Updating existing GitHub webhook %d", existing.id)
            hook = await self._github.update_hook(owner, name, existing.id, payload)
            action = WebhookAction.UPDATED
        else:
            log_info(logger, "Creating GitHub webhook for %s", self._config.repo_slug)
            hook = await self._github.create_hook(owner, name, payload)
            action = WebhookAction.CREATED

        log_info(
            logger,
            "GitHub webhook %s for repository %s (id %d)",
            action,
            self._config.repo_slug,
            hook.id,
        )
        return WebhookSync(hook_id=hook.id, action=action)

    async def run(self) -> ProvisioningResult:
        """Provision every resource in dependency order."""
        log_info(
            logger,
            "Setting up the GitHub -> relay -> analytics pipeline for %s",
            self._config.repo_slug,
        )
        source = await self.ensure_event_source()
        destination = await self.ensure_event_destination()
        connection = await self.ensure_connection(source.id, destination.id)
        webhook = await self.sync_github_webhook(source.url)
        log_info(logger, "Pipeline for %s is set up", self._config.repo_slug)
        return ProvisioningResult(
            source=source,
            destination=destination,
            connection=connection,
            webhook=webhook,
        )


async def provision_pipeline(config: PipelineConfig) -> ProvisioningResult:
    """Build the API clients for ``config`` and run the provisioner once."""
    relay = RelayClient(RelayClientConfig.from_pipeline(config))
    github = GitHubHooksClient(GitHubHooksConfig.from_pipeline(config))
    try:
        return await PipelineProvisioner(config, relay=relay, github=github).run()
    finally:
        await relay.aclose()
        await github.aclose()
