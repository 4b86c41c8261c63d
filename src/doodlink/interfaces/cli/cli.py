from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx
import structlog

from doodlink.domain.exceptions import DoodLinkError
from doodlink.infrastructure.config import AppConfig, load_config
from doodlink.infrastructure.logging.setup import configure_logging
from doodlink.interfaces.composition import build_resolver

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="doodlink",
        description="Resolve a Doodstream embed URL to a direct download link.",
    )

    parser.add_argument("url", help="Doodstream embed URL (e.g. https://dood.li/e/abc123).")
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Print name/quality/size/headers as JSON instead of the bare link.",
    )
    parser.add_argument(
        "--probe-size",
        action="store_true",
        default=None,
        help="HEAD the direct link to fill the metadata size.",
    )

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--timeout",
        default=None,
        type=float,
        help="Override per-request timeout in seconds.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    return parser.parse_args(argv)


async def _run(config: AppConfig, url: str, *, metadata: bool) -> str:
    async with build_resolver(config) as resolver:
        if metadata:
            result = await resolver.get_metadata(url)
            return json.dumps(result.to_dict(), indent=2)
        return await resolver.get_direct_link(url)


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, resolves one URL and
    prints the result on stdout.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.timeout is not None:
        cli_overrides["http_timeout_seconds"] = args.timeout
    if args.probe_size:
        cli_overrides["probe_file_size"] = True
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )

    configure_logging(config)

    try:
        output = asyncio.run(_run(config, args.url, metadata=args.metadata))
    except (DoodLinkError, httpx.HTTPError) as exc:
        log.error("resolve_failed", url=args.url, error=str(exc))
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(start())
