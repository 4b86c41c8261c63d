"""Common infrastructure utilities."""

from __future__ import annotations
