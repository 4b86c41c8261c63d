"""Data extraction utilities."""

from __future__ import annotations

import re


def extract_first(pattern: re.Pattern[str] | str, text: str) -> str | None:
    """Return the first capture group of *pattern* in *text*.

    Args:
        pattern: Compiled or raw regex with exactly one capture group.
        text: Content to search.

    Returns:
        The captured string, or None when the pattern does not match.
    """
    match = re.search(pattern, text)
    if match is None:
        return None
    return match.group(1)
