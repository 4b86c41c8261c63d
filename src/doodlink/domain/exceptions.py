"""Link resolution exceptions."""

from __future__ import annotations


class DoodLinkError(Exception):
    """Base class for all link resolution errors."""


class InvalidInputError(DoodLinkError, ValueError):
    """Raised when the embed URL is empty or missing."""


class RequestTimeoutError(DoodLinkError):
    """Raised when a request does not settle within its deadline."""

    def __init__(self, url: str, timeout_seconds: float) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Request to {url} timed out after {timeout_seconds}s")


class HttpStatusError(DoodLinkError):
    """Raised when a response status is outside the 2xx range."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error {status_code} for {url}")


class ExtractionError(DoodLinkError):
    """Raised when a required value is not found in fetched page content."""

    def __init__(self, field: str, source_url: str) -> None:
        self.field = field
        self.source_url = source_url
        super().__init__(f"{field} not found in {source_url}")


class EmptyResponseError(DoodLinkError):
    """Raised when the pass_md5 endpoint returns a blank body."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Empty video base URL received from {url}")
