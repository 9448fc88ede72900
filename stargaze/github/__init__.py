"""GitHub repository webhook client and models."""

from __future__ import annotations

from .client import GitHubHooksClient, GitHubHooksConfig
from .errors import GitHubAPIError
from .models import (
    DEFAULT_HOOK_NAME,
    STAR_EVENT,
    GitHubWebhook,
    HookTarget,
    WebhookConfig,
    WebhookPayload,
    find_star_webhook,
)

__all__ = [
    "DEFAULT_HOOK_NAME",
    "STAR_EVENT",
    "GitHubAPIError",
    "GitHubHooksClient",
    "GitHubHooksConfig",
    "GitHubWebhook",
    "HookTarget",
    "WebhookConfig",
    "WebhookPayload",
    "find_star_webhook",
]
