"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_USER_AGENT

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/doodstream/probe/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="doodlink", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Hard per-request deadline in seconds.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Doodstream (YAML section: doodstream.*)
    doodstream_base_url: str = Field(
        default="https://dood.li",
        validation_alias=AliasChoices(
            "doodstream_base_url",
            AliasPath("doodstream", "base_url"),
        ),
        description="Service origin used for Referer/Origin and relative pass_md5 URLs.",
    )
    doodstream_accept: str = Field(
        default="*/*",
        validation_alias=AliasChoices(
            "doodstream_accept",
            AliasPath("doodstream", "accept"),
        ),
        description="Accept header value.",
    )
    doodstream_accept_language: str = Field(
        default="en-US,en;q=0.9",
        validation_alias=AliasChoices(
            "doodstream_accept_language",
            AliasPath("doodstream", "accept_language"),
        ),
        description="Accept-Language header value.",
    )

    # File-size probe (YAML section: probe.*)
    probe_file_size: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "probe_file_size",
            AliasPath("probe", "file_size"),
        ),
        description="HEAD the direct link to fill metadata size.",
    )
    probe_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "probe_timeout_seconds",
            AliasPath("probe", "timeout_seconds"),
        ),
        description="Deadline for the size probe HEAD request.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("http_timeout_seconds", "probe_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("doodstream_base_url")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("doodstream_base_url must be an absolute http(s) URL")
        return v.rstrip("/")

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def request_headers(self) -> dict[str, str]:
        """Return a fresh copy of the header set sent with every request."""
        return {
            "User-Agent": self.http_user_agent,
            "Referer": f"{self.doodstream_base_url}/",
            "Origin": self.doodstream_base_url,
            "Accept": self.doodstream_accept,
            "Accept-Language": self.doodstream_accept_language,
        }

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "doodstream": {
                "base_url": self.doodstream_base_url,
                "accept": self.doodstream_accept,
                "accept_language": self.doodstream_accept_language,
            },
            "probe": {
                "file_size": self.probe_file_size,
                "timeout_seconds": self.probe_timeout_seconds,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read DOODLINK_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - DOODLINK_HTTP_TIMEOUT_SECONDS
    - DOODLINK_DOODSTREAM_BASE_URL
    - DOODLINK_PROBE_FILE_SIZE
    - DOODLINK_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="DOODLINK_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    doodstream_base_url: Optional[str] = None
    doodstream_accept: Optional[str] = None
    doodstream_accept_language: Optional[str] = None

    probe_file_size: Optional[bool] = None
    probe_timeout_seconds: Optional[float] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
