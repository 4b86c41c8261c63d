"""Shared test fixtures for the doodlink test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from doodlink.infrastructure.common.fetcher import HttpFetcher
from doodlink.infrastructure.config import AppConfig

# ---------------------------------------------------------------------------
# Infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config() -> AppConfig:
    """AppConfig with pure defaults."""
    return AppConfig()


@pytest.fixture()
def mock_client() -> AsyncMock:
    """Async httpx client stub; tests set ``get``/``head`` side effects."""
    return AsyncMock(spec=httpx.AsyncClient)


@pytest.fixture()
def fetcher(mock_client: AsyncMock, config: AppConfig) -> HttpFetcher:
    """HttpFetcher over the mocked client with the default header set."""
    return HttpFetcher(
        mock_client,
        default_headers=config.request_headers(),
        timeout_seconds=config.http_timeout_seconds,
    )
