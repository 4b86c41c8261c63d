"""Hoster resolver implementations for building direct download links."""

from __future__ import annotations

from .doodstream import DoodStreamResolver

__all__ = ["DoodStreamResolver"]
