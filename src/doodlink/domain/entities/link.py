"""Domain entities for resolved Doodstream links.

Pure value objects with no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_QUALITY = "Unknown"


@dataclass(frozen=True)
class VideoMetadata:
    """A resolved direct link plus the details needed to play it."""

    mp4: str  # Direct link
    name: str  # e.g. "doodstream_abc123.mp4"
    quality: str = UNKNOWN_QUALITY  # Embed pages carry no quality info
    size: int | None = None  # Bytes, only when the size probe is enabled
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mp4": self.mp4,
            "name": self.name,
            "quality": self.quality,
            "size": self.size,
            "headers": dict(self.headers),
        }
