"""Unit tests for PipelineConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from stargaze.config import (
    DEFAULT_GITHUB_API_BASE,
    DEFAULT_HTTP_TIMEOUT_S,
    DEFAULT_RELAY_API_BASE,
    PipelineConfig,
    transform_path_from_env,
)
from stargaze.errors import PipelineConfigError
from tests.helpers.pipeline import REQUIRED_ENV


class TestFromEnv:
    """Tests for PipelineConfig.from_env."""

    def test_reads_required_values_and_defaults(self) -> None:
        """Required values are read; optional ones fall back to defaults."""
        config = PipelineConfig.from_env(REQUIRED_ENV)

        assert config.github_token == "ghp_test"
        assert config.relay_api_key == "hd_test"
        assert config.analytics_api_key == "phc_test"
        assert config.repo_slug == "acme/widget"
        assert config.relay_api_base == DEFAULT_RELAY_API_BASE
        assert config.github_api_base == DEFAULT_GITHUB_API_BASE
        assert config.http_timeout_s == DEFAULT_HTTP_TIMEOUT_S
        assert config.transform_path is None

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace in values is ignored."""
        env = {**REQUIRED_ENV, "REPO_OWNER": "  acme  "}

        assert PipelineConfig.from_env(env).repo_owner == "acme"

    def test_missing_github_token_is_reported(self) -> None:
        """A missing token names the variable."""
        env = {k: v for k, v in REQUIRED_ENV.items() if k != "GITHUB_TOKEN"}

        with pytest.raises(PipelineConfigError) as exc:
            PipelineConfig.from_env(env)

        assert exc.value.variables == ("GITHUB_TOKEN",)
        assert "GITHUB_TOKEN" in str(exc.value)

    def test_blank_values_count_as_missing(self) -> None:
        """Every blank variable is listed, in declaration order."""
        env = {**REQUIRED_ENV, "POSTHOG_HOST": " ", "GITHUB_WEBHOOK_SECRET": ""}

        with pytest.raises(PipelineConfigError) as exc:
            PipelineConfig.from_env(env)

        assert exc.value.variables == ("POSTHOG_HOST", "GITHUB_WEBHOOK_SECRET")

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a mapping the process environment is used."""
        for name, value in REQUIRED_ENV.items():
            monkeypatch.setenv(name, value)
        monkeypatch.setenv("REPO_NAME", "gadget")

        assert PipelineConfig.from_env().repo_name == "gadget"

    def test_optional_overrides(self) -> None:
        """Optional variables override the defaults."""
        env = {
            **REQUIRED_ENV,
            "HOOKDECK_API_BASE": "https://relay.test/v1",
            "GITHUB_API_BASE": "https://ghe.test/api/v3",
            "STARGAZE_HTTP_TIMEOUT_S": "5.5",
            "STARGAZE_TRANSFORM_PATH": "build/transform.js",
        }

        config = PipelineConfig.from_env(env)

        assert config.relay_api_base == "https://relay.test/v1"
        assert config.github_api_base == "https://ghe.test/api/v3"
        assert config.http_timeout_s == 5.5
        assert config.transform_path == Path("build/transform.js")

    @pytest.mark.parametrize("raw", ["soon", "0", "-3", "nan", "inf"])
    def test_rejects_invalid_timeout(self, raw: str) -> None:
        """Timeouts must be positive finite numbers."""
        env = {**REQUIRED_ENV, "STARGAZE_HTTP_TIMEOUT_S": raw}

        with pytest.raises(PipelineConfigError, match="STARGAZE_HTTP_TIMEOUT_S"):
            PipelineConfig.from_env(env)


class TestDerivedNames:
    """Tests for the deterministic resource names."""

    def test_resource_names_derive_from_repository(self) -> None:
        """Names are stable for a repository so upserts converge."""
        config = PipelineConfig.from_env(REQUIRED_ENV)

        assert config.resource_suffix == "acme-widget"
        assert config.source_name == "gh-stars-src-acme-widget"
        assert config.destination_name == "posthog-acme-widget"
        assert config.connection_name == "gh-stars-conn-acme-widget"

    @pytest.mark.parametrize(
        "host",
        ["https://us.i.posthog.com", "https://us.i.posthog.com/"],
    )
    def test_capture_url_appends_capture_path(self, host: str) -> None:
        """The capture path is appended without doubling slashes."""
        config = PipelineConfig.from_env({**REQUIRED_ENV, "POSTHOG_HOST": host})

        assert config.capture_url == "https://us.i.posthog.com/i/v0/e/"


class TestTransformPathFromEnv:
    """Tests for the transform artifact override."""

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_means_packaged_artifact(self, raw: str) -> None:
        """Blank values select the packaged artifact."""
        assert transform_path_from_env({"STARGAZE_TRANSFORM_PATH": raw}) is None
        assert transform_path_from_env({}) is None

    def test_value_is_stripped(self) -> None:
        """Surrounding whitespace is dropped from the path."""
        env = {"STARGAZE_TRANSFORM_PATH": " dist/transform.js "}

        assert transform_path_from_env(env) == Path("dist/transform.js")

    def test_reads_os_environ_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without a mapping the process environment is used."""
        monkeypatch.setenv("STARGAZE_TRANSFORM_PATH", "build/t.js")

        assert transform_path_from_env() == Path("build/t.js")
