"""DoodStream hoster resolver: builds direct download links from embed pages.

Extraction: GET embed page → extract /pass_md5/ URL + token →
GET pass_md5 endpoint → append random suffix + token + expiry.

Pipeline failures raise a ``DoodLinkError`` subclass and transport errors
propagate as ``httpx.HTTPError``. There are no retries and no partial
results.
"""

from __future__ import annotations

import random
import re
import string
import time
from urllib.parse import urljoin, urlparse

import httpx
import structlog

from doodlink.domain.entities import UNKNOWN_QUALITY, VideoMetadata
from doodlink.domain.exceptions import (
    DoodLinkError,
    EmptyResponseError,
    ExtractionError,
    InvalidInputError,
)
from doodlink.infrastructure.common.extractors import extract_first
from doodlink.infrastructure.common.fetcher import HttpFetcher

from ._size_probe import probe_file_size

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://dood.li"

RANDOM_STRING_CHARS = string.ascii_letters + string.digits
RANDOM_STRING_LENGTH = 10

# $.get('/pass_md5/<id>/<hash>', function(data) { ... })
PASS_MD5_PATTERN = re.compile(r"\$\.get\('([^']*/pass_md5/[^']*)'")
TOKEN_PATTERN = re.compile(r"token=([a-zA-Z0-9]+)")


def extract_pass_md5_url(
    html: str, embed_url: str, base_url: str = DEFAULT_BASE_URL
) -> str:
    """Return the absolute pass_md5 URL found in an embed page.

    Relative fragments are joined against *base_url*.
    """
    fragment = extract_first(PASS_MD5_PATTERN, html)
    if not fragment:
        raise ExtractionError("pass_md5", embed_url)
    if fragment.startswith("http"):
        return fragment
    return urljoin(base_url, fragment)


def extract_token(html: str, embed_url: str) -> str:
    """Return the ``token=`` value found in an embed page."""
    token = extract_first(TOKEN_PATTERN, html)
    if not token:
        raise ExtractionError("token", embed_url)
    return token


def generate_random_string(length: int = RANDOM_STRING_LENGTH) -> str:
    return "".join(random.choices(RANDOM_STRING_CHARS, k=length))


def build_direct_link(video_base_url: str, token: str) -> str:
    """Append a random suffix, the token and the current Unix time."""
    expiry = int(time.time())
    return f"{video_base_url}{generate_random_string()}?token={token}&expiry={expiry}"


def derive_file_name(embed_url: str) -> str:
    """``https://dood.li/e/abc123`` → ``doodstream_abc123.mp4``."""
    segments = [part for part in urlparse(embed_url).path.split("/") if part]
    file_id = segments[-1] if segments else "video"
    return f"doodstream_{file_id}.mp4"


class DoodStreamResolver:
    """Resolves DoodStream embed pages to direct download links.

    Both requests go through the shared ``HttpFetcher`` with its default
    header set (User-Agent, Referer, Origin, Accept, Accept-Language).
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        *,
        base_url: str = DEFAULT_BASE_URL,
        probe_size: bool = False,
        probe_timeout_seconds: float = 10.0,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url
        self._probe_size = probe_size
        self._probe_timeout = probe_timeout_seconds

    @property
    def name(self) -> str:
        return "doodstream"

    async def get_direct_link(self, embed_url: str) -> str:
        """Fetch the embed page and build a time-limited direct link."""
        if not embed_url:
            raise InvalidInputError("Embed URL cannot be empty")

        log.info("doodstream_resolve_started", url=embed_url)
        try:
            direct_link = await self._resolve(embed_url)
        except (DoodLinkError, httpx.HTTPError) as exc:
            log.error("doodstream_resolve_failed", url=embed_url, error=str(exc))
            raise

        log.info("doodstream_resolved", url=embed_url)
        return direct_link

    async def get_metadata(self, embed_url: str) -> VideoMetadata:
        """Resolve *embed_url* and wrap the link with playback metadata."""
        mp4 = await self.get_direct_link(embed_url)
        headers = self._fetcher.default_headers

        size: int | None = None
        if self._probe_size:
            size = await probe_file_size(
                self._fetcher,
                mp4,
                headers,
                self.name,
                timeout_seconds=self._probe_timeout,
            )

        return VideoMetadata(
            mp4=mp4,
            name=derive_file_name(embed_url),
            quality=UNKNOWN_QUALITY,
            size=size,
            headers=headers,
        )

    async def _resolve(self, embed_url: str) -> str:
        resp = await self._fetcher.request(embed_url)
        html = resp.text

        pass_md5_url = extract_pass_md5_url(html, embed_url, self._base_url)
        log.debug("doodstream_pass_md5_extracted", pass_md5_url=pass_md5_url)
        token = extract_token(html, embed_url)
        log.debug("doodstream_token_extracted", token=token)

        video_base_url = await self._fetch_video_base_url(pass_md5_url)
        direct_link = build_direct_link(video_base_url, token)
        log.debug("doodstream_direct_link_built", direct_link=direct_link[:120])
        return direct_link

    async def _fetch_video_base_url(self, pass_md5_url: str) -> str:
        resp = await self._fetcher.request(pass_md5_url)
        video_base_url = resp.text.strip()
        if not video_base_url:
            raise EmptyResponseError(pass_md5_url)
        log.debug("doodstream_video_base_received", base=video_base_url[:80])
        return video_base_url
