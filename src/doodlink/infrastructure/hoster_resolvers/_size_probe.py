"""Optional HEAD probe that reads the byte size of a resolved video URL."""

from __future__ import annotations

import httpx
import structlog

from doodlink.domain.exceptions import DoodLinkError
from doodlink.infrastructure.common.fetcher import HttpFetcher

log = structlog.get_logger(__name__)


async def probe_file_size(
    fetcher: HttpFetcher,
    url: str,
    headers: dict[str, str],
    hoster: str,
    *,
    timeout_seconds: float = 10.0,
) -> int | None:
    """HEAD-check a CDN URL and return its ``Content-Length``.

    The probe is advisory: a missing or non-numeric header, an error
    status, a timeout or a network error is logged as a warning and
    yields ``None`` instead of raising.

    Parameters
    ----------
    fetcher:
        Shared fetcher (carries the client and deadline handling).
    url:
        The video CDN URL to probe.
    headers:
        Playback headers (e.g. ``Referer``) required by the CDN.
    hoster:
        Hoster name used as prefix in structured log events
        (e.g. ``"doodstream"`` → ``"doodstream_size_probe_failed"``).
    timeout_seconds:
        Deadline for the HEAD request.
    """
    try:
        resp = await fetcher.head(url, headers, timeout_seconds=timeout_seconds)
    except (DoodLinkError, httpx.HTTPError) as exc:
        log.warning(f"{hoster}_size_probe_failed", url=url[:120], error=str(exc))
        return None

    content_length = resp.headers.get("content-length")
    if content_length is None or not content_length.strip().isdigit():
        log.debug(f"{hoster}_size_unknown", url=url[:120])
        return None
    return int(content_length)
