"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "doodlink",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "doodstream": {
        "base_url": "https://dood.li",
        "accept": "*/*",
        "accept_language": "en-US,en;q=0.9",
    },
    "probe": {
        "file_size": False,
        "timeout_seconds": 10.0,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
