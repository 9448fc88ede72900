"""Pipeline configuration.

The configuration is read once, at startup, into an immutable
:class:`PipelineConfig` that is passed explicitly to every component.

Required environment variables:

- ``GITHUB_TOKEN``: GitHub token allowed to manage repository webhooks
- ``HOOKDECK_API_KEY``: relay (Hookdeck) API key
- ``POSTHOG_API_KEY``: analytics project API key injected into the transform
- ``POSTHOG_HOST``: analytics ingestion host, e.g. ``https://us.i.posthog.com``
- ``REPO_OWNER`` / ``REPO_NAME``: repository whose stars are forwarded
- ``GITHUB_WEBHOOK_SECRET``: shared secret between GitHub and the relay source

Optional environment variables:

- ``HOOKDECK_API_BASE``: relay API base URL
- ``GITHUB_API_BASE``: GitHub REST API base URL
- ``STARGAZE_HTTP_TIMEOUT_S``: per-request timeout in seconds
- ``STARGAZE_TRANSFORM_PATH``: transform artifact to submit instead of the
  packaged one

Usage
-----
>>> config = PipelineConfig.from_env({
...     "GITHUB_TOKEN": "ghp",
...     "HOOKDECK_API_KEY": "hd",
...     "POSTHOG_API_KEY": "phc",
...     "POSTHOG_HOST": "https://eu.i.posthog.com/",
...     "REPO_OWNER": "acme",
...     "REPO_NAME": "widget",
...     "GITHUB_WEBHOOK_SECRET": "s3cret",
... })
>>> config.source_name
'gh-stars-src-acme-widget'
>>> config.capture_url
'https://eu.i.posthog.com/i/v0/e/'

"""

from __future__ import annotations

import dataclasses as dc
import math
import os
import typing as typ
from pathlib import Path

from stargaze.common.slug import repo_slug, resource_slug
from stargaze.errors import PipelineConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_RELAY_API_BASE = "https://api.hookdeck.com/2025-01-01"
DEFAULT_GITHUB_API_BASE = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT_S = 30.0

# PostHog single-event capture path, appended to POSTHOG_HOST.
CAPTURE_PATH = "/i/v0/e/"

REQUIRED_VARIABLES: tuple[str, ...] = (
    "GITHUB_TOKEN",
    "HOOKDECK_API_KEY",
    "POSTHOG_API_KEY",
    "POSTHOG_HOST",
    "REPO_OWNER",
    "REPO_NAME",
    "GITHUB_WEBHOOK_SECRET",
)
TRANSFORM_PATH_VARIABLE = "STARGAZE_TRANSFORM_PATH"


def transform_path_from_env(
    environ: cabc.Mapping[str, str] | None = None,
) -> Path | None:
    """Return the transform artifact override, or None when unset or blank."""
    env = os.environ if environ is None else environ
    raw = env.get(TRANSFORM_PATH_VARIABLE, "").strip()
    return Path(raw) if raw else None


@dc.dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Settings shared by the provisioner and its API clients.

    Attributes
    ----------
    github_token
        Token used for the GitHub hooks API.
    relay_api_key
        Bearer token for the relay API.
    analytics_api_key
        Analytics key handed to the transform through its env map.
    analytics_host
        Analytics ingestion host, without the capture path.
    repo_owner, repo_name
        Repository whose star events are forwarded.
    webhook_secret
        Secret shared by the GitHub webhook and the relay source.
    relay_api_base, github_api_base
        API base URLs.
    http_timeout_s
        Per-request timeout applied to both API clients.
    transform_path
        Optional override for the transform artifact location.

    """

    github_token: str
    relay_api_key: str
    analytics_api_key: str
    analytics_host: str
    repo_owner: str
    repo_name: str
    webhook_secret: str
    relay_api_base: str = DEFAULT_RELAY_API_BASE
    github_api_base: str = DEFAULT_GITHUB_API_BASE
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    transform_path: Path | None = None

    @property
    def repo_slug(self) -> str:
        """Return the ``owner/name`` identifier of the repository."""
        return repo_slug(self.repo_owner, self.repo_name)

    @property
    def resource_suffix(self) -> str:
        """Return the suffix shared by every relay resource name."""
        return resource_slug(self.repo_owner, self.repo_name)

    @property
    def source_name(self) -> str:
        return f"gh-stars-src-{self.resource_suffix}"

    @property
    def destination_name(self) -> str:
        return f"posthog-{self.resource_suffix}"

    @property
    def connection_name(self) -> str:
        return f"gh-stars-conn-{self.resource_suffix}"

    @property
    def capture_url(self) -> str:
        """Return the analytics capture endpoint used as relay destination."""
        return f"{self.analytics_host.rstrip('/')}{CAPTURE_PATH}"

    @staticmethod
    def _parse_timeout(raw: str | None) -> float:
        if raw is None or not raw.strip():
            return DEFAULT_HTTP_TIMEOUT_S
        try:
            timeout = float(raw)
        except ValueError as exc:
            raise PipelineConfigError.invalid_value(
                "STARGAZE_HTTP_TIMEOUT_S", raw, "Must be a positive number"
            ) from exc
        if not math.isfinite(timeout) or timeout <= 0:
            raise PipelineConfigError.invalid_value(
                "STARGAZE_HTTP_TIMEOUT_S", raw, "Must be a positive number"
            )
        return timeout

    @classmethod
    def from_env(
        cls, environ: cabc.Mapping[str, str] | None = None
    ) -> PipelineConfig:
        """Build configuration from environment variables.

        Parameters
        ----------
        environ
            Mapping to read from. ``None`` reads ``os.environ``.

        Raises
        ------
        PipelineConfigError
            If any required variable is missing or blank, or an optional
            variable holds an unusable value.

        """
        env = os.environ if environ is None else environ
        values = {name: env.get(name, "").strip() for name in REQUIRED_VARIABLES}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise PipelineConfigError.missing_variables(missing)

        return cls(
            github_token=values["GITHUB_TOKEN"],
            relay_api_key=values["HOOKDECK_API_KEY"],
            analytics_api_key=values["POSTHOG_API_KEY"],
            analytics_host=values["POSTHOG_HOST"],
            repo_owner=values["REPO_OWNER"],
            repo_name=values["REPO_NAME"],
            webhook_secret=values["GITHUB_WEBHOOK_SECRET"],
            relay_api_base=(
                env.get("HOOKDECK_API_BASE", "").strip() or DEFAULT_RELAY_API_BASE
            ),
            github_api_base=(
                env.get("GITHUB_API_BASE", "").strip() or DEFAULT_GITHUB_API_BASE
            ),
            http_timeout_s=cls._parse_timeout(env.get("STARGAZE_HTTP_TIMEOUT_S")),
            transform_path=transform_path_from_env(env),
        )
