"""Integration tests for the full resolution pipeline.

Real httpx transport intercepted by respx; resolver wired through the
composition root exactly as the CLI does it.
"""

from __future__ import annotations

import re

import httpx
import pytest
import respx

from doodlink.domain.exceptions import (
    EmptyResponseError,
    ExtractionError,
    HttpStatusError,
    InvalidInputError,
)
from doodlink.infrastructure.config import AppConfig
from doodlink.interfaces.composition import (
    build_resolver,
    get_direct_link,
    get_metadata,
)

pytestmark = pytest.mark.integration

EMBED_URL = "https://dood.li/e/abc123"
PASS_MD5_URL = "https://dood.li/pass_md5/abc123-42/q9w8e7r6"
VIDEO_BASE = "https://vx12.cloudatacdn.com/u5kj/abc123~"
LINK_RE = re.compile(
    rf"^{re.escape(VIDEO_BASE)}[A-Za-z0-9]{{10}}\?token=k3yT0ken9&expiry=\d+$"
)


class TestGetDirectLink:
    @pytest.mark.asyncio
    @respx.mock
    async def test_resolves_link(self, embed_html: str) -> None:
        embed_route = respx.get(EMBED_URL).respond(200, text=embed_html)
        pass_route = respx.get(PASS_MD5_URL).respond(200, text=VIDEO_BASE + "\n")

        link = await get_direct_link(EMBED_URL, AppConfig())

        assert LINK_RE.match(link)
        assert embed_route.called
        assert pass_route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_fixed_headers(self, embed_html: str) -> None:
        embed_route = respx.get(EMBED_URL).respond(200, text=embed_html)
        pass_route = respx.get(PASS_MD5_URL).respond(200, text=VIDEO_BASE)

        await get_direct_link(EMBED_URL, AppConfig())

        for route in (embed_route, pass_route):
            request = route.calls.last.request
            assert request.headers["Referer"] == "https://dood.li/"
            assert request.headers["Origin"] == "https://dood.li"
            assert request.headers["Accept"] == "*/*"
            assert request.headers["Accept-Language"] == "en-US,en;q=0.9"

    @pytest.mark.asyncio
    @respx.mock
    async def test_custom_origin_used_for_pass_md5(self, embed_html: str) -> None:
        respx.get("https://d000d.com/e/abc123").respond(200, text=embed_html)
        pass_route = respx.get("https://d000d.com/pass_md5/abc123-42/q9w8e7r6").respond(
            200, text=VIDEO_BASE
        )

        config = AppConfig(doodstream_base_url="https://d000d.com")
        await get_direct_link("https://d000d.com/e/abc123", config)

        assert pass_route.called
        assert pass_route.calls.last.request.headers["Referer"] == "https://d000d.com/"

    @pytest.mark.asyncio
    async def test_empty_input_makes_no_request(
        self, respx_mock: respx.MockRouter
    ) -> None:
        route = respx_mock.get(url__regex=r".*").respond(200)

        with pytest.raises(InvalidInputError):
            await get_direct_link("", AppConfig())

        assert not route.called

    @pytest.mark.asyncio
    async def test_missing_token_stops_after_first_request(
        self, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(EMBED_URL).respond(
            200, text="<script>$.get('/pass_md5/a/b', cb);</script>"
        )
        pass_route = respx_mock.get("https://dood.li/pass_md5/a/b").respond(
            200, text=VIDEO_BASE
        )

        with pytest.raises(ExtractionError) as exc_info:
            await get_direct_link(EMBED_URL, AppConfig())

        assert exc_info.value.field == "token"
        assert exc_info.value.source_url == EMBED_URL
        assert not pass_route.called

    @pytest.mark.asyncio
    async def test_router_routes_do_not_leak_into_global_mock(
        self, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(url__regex=r".*").respond(200)

        assert len(respx.mock.routes) == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_blank_pass_md5_body(self, embed_html: str) -> None:
        respx.get(EMBED_URL).respond(200, text=embed_html)
        respx.get(PASS_MD5_URL).respond(200, text="  \n")

        with pytest.raises(EmptyResponseError):
            await get_direct_link(EMBED_URL, AppConfig())

    @pytest.mark.asyncio
    @respx.mock
    async def test_not_found_embed(self) -> None:
        respx.get(EMBED_URL).respond(404, text="Not Found")

        with pytest.raises(HttpStatusError) as exc_info:
            await get_direct_link(EMBED_URL, AppConfig())

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_redirected_embed_followed(self, embed_html: str) -> None:
        respx.get("https://dood.li/d/abc123").respond(
            302, headers={"Location": EMBED_URL}
        )
        respx.get(EMBED_URL).respond(200, text=embed_html)
        respx.get(PASS_MD5_URL).respond(200, text=VIDEO_BASE)

        link = await get_direct_link("https://dood.li/d/abc123", AppConfig())

        assert LINK_RE.match(link)


class TestGetMetadata:
    @pytest.mark.asyncio
    @respx.mock
    async def test_metadata(self, embed_html: str) -> None:
        respx.get(EMBED_URL).respond(200, text=embed_html)
        respx.get(PASS_MD5_URL).respond(200, text=VIDEO_BASE)

        meta = await get_metadata(EMBED_URL, AppConfig())

        assert LINK_RE.match(meta.mp4)
        assert meta.name == "doodstream_abc123.mp4"
        assert meta.quality == "Unknown"
        assert meta.size is None
        assert meta.headers == AppConfig().request_headers()

    @pytest.mark.asyncio
    @respx.mock
    async def test_metadata_with_size_probe(self, embed_html: str) -> None:
        respx.get(EMBED_URL).respond(200, text=embed_html)
        respx.get(PASS_MD5_URL).respond(200, text=VIDEO_BASE)
        head_route = respx.head(url__startswith=VIDEO_BASE).respond(
            200, headers={"Content-Length": "734003200"}
        )

        meta = await get_metadata(EMBED_URL, AppConfig(probe_file_size=True))

        assert meta.size == 734003200
        assert head_route.calls.last.request.url == httpx.URL(meta.mp4)


class TestBuildResolver:
    @pytest.mark.asyncio
    async def test_client_closed_on_exit(self) -> None:
        async with build_resolver(AppConfig()) as resolver:
            fetcher = resolver._fetcher
            client = fetcher._http
            assert not client.is_closed
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_fetcher_uses_configured_timeout(self) -> None:
        async with build_resolver(AppConfig(http_timeout_seconds=7.5)) as resolver:
            assert resolver._fetcher.timeout_seconds == 7.5
