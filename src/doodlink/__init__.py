"""Resolve Doodstream embed pages to time-limited direct download links."""

from __future__ import annotations

from doodlink.domain.entities import VideoMetadata
from doodlink.domain.exceptions import (
    DoodLinkError,
    EmptyResponseError,
    ExtractionError,
    HttpStatusError,
    InvalidInputError,
    RequestTimeoutError,
)
from doodlink.interfaces.composition import get_direct_link, get_metadata

__version__ = "0.1.0"

__all__ = [
    "DoodLinkError",
    "EmptyResponseError",
    "ExtractionError",
    "HttpStatusError",
    "InvalidInputError",
    "RequestTimeoutError",
    "VideoMetadata",
    "get_direct_link",
    "get_metadata",
]
