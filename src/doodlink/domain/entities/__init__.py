from .link import UNKNOWN_QUALITY, VideoMetadata

__all__ = ["UNKNOWN_QUALITY", "VideoMetadata"]
