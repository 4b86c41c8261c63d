"""Deadline-bounded HTTP fetcher shared by hoster resolvers.

Wraps a caller-owned ``httpx.AsyncClient``.  Each request runs under an
``asyncio.wait_for`` deadline, which cancels the in-flight request when
it expires and is released on every exit path.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

import httpx
import structlog

from doodlink.domain.exceptions import HttpStatusError, RequestTimeoutError

log = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpFetcher:
    """Issues GET/HEAD requests with fixed headers and a hard deadline.

    Raises ``RequestTimeoutError`` when the deadline passes and
    ``HttpStatusError`` for any status outside the 2xx range.  Other
    ``httpx.HTTPError`` failures are logged and re-raised unchanged.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        default_headers: Mapping[str, str],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._http = http_client
        self._default_headers = dict(default_headers)
        self._timeout = timeout_seconds

    @property
    def default_headers(self) -> dict[str, str]:
        return dict(self._default_headers)

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    async def request(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """GET *url*; caller headers replace the default set when given."""
        return await self._send("GET", url, headers)

    async def head(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        timeout_seconds: float | None = None,
    ) -> httpx.Response:
        """HEAD *url* with the same header and deadline rules as ``request``."""
        return await self._send("HEAD", url, headers, timeout_seconds=timeout_seconds)

    async def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        *,
        timeout_seconds: float | None = None,
    ) -> httpx.Response:
        timeout = timeout_seconds if timeout_seconds is not None else self._timeout
        send_headers = dict(headers) if headers is not None else self.default_headers
        handler = self._http.head if method == "HEAD" else self._http.get

        try:
            resp = await asyncio.wait_for(
                handler(url, headers=send_headers, follow_redirects=True),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            log.warning("fetch_timeout", method=method, url=url, timeout=timeout)
            raise RequestTimeoutError(url, timeout) from exc
        except httpx.HTTPError as exc:
            log.warning("fetch_failed", method=method, url=url, error=str(exc))
            raise

        if not 200 <= resp.status_code < 300:
            log.warning(
                "fetch_http_error",
                method=method,
                status=resp.status_code,
                url=url,
            )
            raise HttpStatusError(resp.status_code, url)

        return resp
