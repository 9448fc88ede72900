"""Typed models for GitHub repository webhooks."""

from __future__ import annotations

import msgspec

# GitHub names every repository webhook "web"; it is the only accepted value.
DEFAULT_HOOK_NAME = "web"
STAR_EVENT = "star"


class WebhookConfig(msgspec.Struct, kw_only=True):
    """Delivery settings of a repository webhook.

    GitHub never echoes ``secret`` back in clear text, so it is optional on
    decoded hooks.
    """

    url: str
    content_type: str = "json"
    secret: str | None = None
    insecure_ssl: str | None = None


class GitHubWebhook(msgspec.Struct, kw_only=True):
    """Repository webhook as listed by ``GET /repos/{owner}/{repo}/hooks``."""

    id: int
    name: str
    active: bool = True
    events: list[str] = msgspec.field(default_factory=list)
    config: WebhookConfig | None = None
    type: str | None = None

    def is_star_hook(self) -> bool:
        """Return True for the canonical star-event webhook."""
        return self.name == DEFAULT_HOOK_NAME and STAR_EVENT in self.events


class HookTarget(msgspec.Struct, kw_only=True):
    """Delivery settings sent when creating or updating a hook."""

    url: str
    content_type: str
    secret: str


class WebhookPayload(msgspec.Struct, kw_only=True):
    """Body of the create (POST) and update (PATCH) hook calls."""

    name: str = DEFAULT_HOOK_NAME
    active: bool = True
    events: list[str] = msgspec.field(default_factory=lambda: [STAR_EVENT])
    config: HookTarget

    @classmethod
    def for_star_events(cls, url: str, secret: str) -> WebhookPayload:
        """Build the canonical payload delivering star events to ``url``."""
        return cls(config=HookTarget(url=url, content_type="json", secret=secret))


def find_star_webhook(hooks: list[GitHubWebhook]) -> GitHubWebhook | None:
    """Return the first canonical star webhook in ``hooks``, if any.

    Only the hook name and event set are compared, not the target URL, so a
    hook pointing at an older source URL is still reused.
    """
    return next((hook for hook in hooks if hook.is_star_hook()), None)
