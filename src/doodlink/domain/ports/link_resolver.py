"""Port for resolving hoster embed URLs to direct download links."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from doodlink.domain.entities import VideoMetadata


@runtime_checkable
class LinkResolverPort(Protocol):
    """Resolves a hoster embed page URL to a direct media link.

    Implementations raise a ``DoodLinkError`` subclass on any failure;
    no partial results are returned.
    """

    @property
    def name(self) -> str:
        """Hoster name this resolver handles (e.g. 'doodstream')."""
        ...

    async def get_direct_link(self, embed_url: str) -> str:
        """Resolve an embed URL to a time-limited direct link."""
        ...

    async def get_metadata(self, embed_url: str) -> VideoMetadata:
        """Resolve an embed URL and wrap the link with playback metadata."""
        ...
