"""Composition root: builds the HTTP client, fetcher and resolver from config."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import structlog

from doodlink.domain.entities import VideoMetadata
from doodlink.infrastructure.common.fetcher import HttpFetcher
from doodlink.infrastructure.config import AppConfig, load_config
from doodlink.infrastructure.hoster_resolvers import DoodStreamResolver

log = structlog.get_logger(__name__)


def create_resolver(
    config: AppConfig, http_client: httpx.AsyncClient
) -> DoodStreamResolver:
    """Wire a resolver onto a caller-owned client."""
    fetcher = HttpFetcher(
        http_client,
        default_headers=config.request_headers(),
        timeout_seconds=config.http_timeout_seconds,
    )
    return DoodStreamResolver(
        fetcher,
        base_url=config.doodstream_base_url,
        probe_size=config.probe_file_size,
        probe_timeout_seconds=config.probe_timeout_seconds,
    )


@asynccontextmanager
async def build_resolver(
    config: AppConfig | None = None,
) -> AsyncIterator[DoodStreamResolver]:
    """Yield a ready resolver and close its HTTP client on exit."""
    config = config or load_config()
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        follow_redirects=True,
    )
    log.debug("http_client_initialized", timeout=config.http_timeout_seconds)
    try:
        yield create_resolver(config, http_client)
    finally:
        await http_client.aclose()
        log.debug("http_client_closed")


async def get_direct_link(embed_url: str, config: AppConfig | None = None) -> str:
    """Resolve a Doodstream embed URL to a direct download link."""
    async with build_resolver(config) as resolver:
        return await resolver.get_direct_link(embed_url)


async def get_metadata(
    embed_url: str, config: AppConfig | None = None
) -> VideoMetadata:
    """Resolve a Doodstream embed URL to a link plus playback metadata."""
    async with build_resolver(config) as resolver:
        return await resolver.get_metadata(embed_url)
