"""Command-line entrypoint that serves the API with uvicorn."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Sequence

import uvicorn
from pydantic import ValidationError

from mediacat.core.config import Settings, env_usage, get_settings
from mediacat.core.logging import configure_logging
from mediacat.utils.redaction import redact_secrets


def build_parser() -> argparse.ArgumentParser:
    width = max(len(env) for env, _ in env_usage())
    lines = ["environment variables:"]
    lines.extend(f"  {env.ljust(width)}  {detail}" for env, detail in env_usage())
    parser = argparse.ArgumentParser(
        prog="mediacat",
        description="Serve the media catalog API.",
        epilog="\n".join(lines),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )
    return parser


def render_config(config: Settings) -> str:
    """Return the settings as JSON with credentials scrubbed."""
    return redact_secrets(json.dumps(config.model_dump(), indent=2, sort_keys=True))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as exc:
        parser.error(f"invalid configuration:\n{exc}")

    if args.print_config:
        print(render_config(settings))
        return

    configure_logging(settings)
    logger = logging.getLogger("mediacat.server")
    logger.info("Starting %s on %s:%s", settings.app_name, settings.server_host, settings.server_port)
    uvicorn.run(
        "mediacat.main:app",
        host=settings.server_host,
        port=settings.server_port,
        timeout_graceful_shutdown=settings.server_shutdown_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    main()
