"""Command-line entry point for provisioning and inspecting the pipeline."""

from __future__ import annotations

import argparse
import asyncio
import os
from pathlib import Path

import msgspec
from dotenv import load_dotenv

from stargaze.config import PipelineConfig, transform_path_from_env
from stargaze.errors import PipelineConfigError, StargazeError
from stargaze.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)
from stargaze.provision import provision_pipeline
from stargaze.transform import (
    TRANSFORM_ENV_KEY,
    RelayRequest,
    load_transform_source,
    transform_request,
)

logger = get_logger(__name__)

_DEFAULT_ENV_FILE = Path(".env")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stargaze",
        description="Forward GitHub star events to analytics through a webhook relay.",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=_DEFAULT_ENV_FILE,
        help="Dotenv file loaded before reading the environment (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level; defaults to STARGAZE_LOG_LEVEL or INFO",
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser(
        "provision", help="Create or update the relay resources and GitHub webhook"
    )

    preview = commands.add_parser(
        "preview", help="Run the transform locally on a saved star payload"
    )
    preview.add_argument("payload", type=Path, help="GitHub star webhook JSON file")
    preview.add_argument(
        "--api-key",
        default=None,
        help=f"Analytics key to embed; defaults to {TRANSFORM_ENV_KEY}",
    )

    source = commands.add_parser(
        "transform-source", help="Print the transform code submitted to the relay"
    )
    source.add_argument(
        "--path",
        type=Path,
        default=None,
        help=(
            "Artifact to print; defaults to STARGAZE_TRANSFORM_PATH "
            "or the packaged one"
        ),
    )
    return parser


def _provision() -> int:
    try:
        config = PipelineConfig.from_env()
    except PipelineConfigError as exc:
        log_error(logger, "%s", exc)
        return 1

    try:
        result = asyncio.run(provision_pipeline(config))
    except StargazeError as exc:
        log_error(logger, "Provisioning failed: %s", exc)
        return 1

    log_info(
        logger,
        "Source %s, destination %s, connection %s, webhook %d (%s)",
        result.source.id,
        result.destination.id,
        result.connection.id,
        result.webhook.hook_id,
        result.webhook.action,
    )
    return 0


def _preview(payload_path: Path, api_key: str | None) -> int:
    key = api_key or os.environ.get(TRANSFORM_ENV_KEY)
    env = {TRANSFORM_ENV_KEY: key} if key else {}
    try:
        request = RelayRequest(
            headers={"x-github-event": "star"},
            body=msgspec.json.decode(payload_path.read_bytes()),
        )
        transformed = transform_request(request, env)
    except OSError as exc:
        log_error(logger, "Cannot read payload %s: %s", payload_path, exc)
        return 1
    except msgspec.DecodeError as exc:
        log_error(logger, "Payload %s is not a star event: %s", payload_path, exc)
        return 1

    output = msgspec.json.format(msgspec.json.encode(transformed.body), indent=2)
    print(output.decode())
    return 0


def _transform_source(path: Path | None) -> int:
    if path is None:
        path = transform_path_from_env()
    try:
        source = load_transform_source(path)
    except StargazeError as exc:
        log_error(logger, "%s", exc)
        return 1
    print(source, end="" if source.endswith("\n") else "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the stargaze command line.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 on configuration or provisioning failure.

    """
    args = _build_parser().parse_args(argv)

    env_file: Path = args.env_file
    if env_file.is_file():
        load_dotenv(env_file, override=False)

    raw_level = args.log_level or os.environ.get("STARGAZE_LOG_LEVEL")
    normalized_level, invalid_level = configure_logging(raw_level or "INFO")
    if raw_level and invalid_level:
        log_warning(
            logger,
            "Invalid log level %r, falling back to %s",
            raw_level,
            normalized_level,
        )

    try:
        if args.command == "preview":
            return _preview(args.payload, args.api_key)
        if args.command == "transform-source":
            return _transform_source(args.path)
        return _provision()
    except Exception as exc:  # noqa: BLE001 - last-resort handler for the exit code
        log_exception(logger, "Unexpected error in stargaze", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
