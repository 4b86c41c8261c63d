"""Shared fixtures for integration tests.

These tests use real infrastructure components (httpx client, fetcher,
resolver) with mocked HTTP via respx.
"""

from __future__ import annotations

import pytest
import respx


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Isolated respx router for tests that leave some routes uncalled."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def embed_html() -> str:
    """A DoodStream embed page with a relative pass_md5 URL and a token."""
    return (
        "<html><body><script>\n"
        "$.get('/pass_md5/abc123-42/q9w8e7r6', function(data) {\n"
        "  dsplayer.src({src: data + makePlay()});\n"
        "});\n"
        "function makePlay(){ return 'Xx?token=k3yT0ken9&expiry=' + Date.now(); }\n"
        "</script></body></html>"
    )
