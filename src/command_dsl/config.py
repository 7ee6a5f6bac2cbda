"""
config.py

PURPOSE: Configuration loading and settings management.
DEPENDENCIES: pydantic, pydantic-settings

ARCHITECTURE NOTES:
Configuration comes from multiple sources (in priority order):
1. CLI flags (highest priority)
2. Environment variables (COMMAND_DSL_*)
3. Defaults (lowest priority)
"""

import codecs
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class OpenTelemetrySettings(BaseSettings):
    """Settings for OpenTelemetry tracing."""

    enabled: bool = Field(
        default=False,
        description="Export spans for command file parsing",
    )
    service_name: str = Field(
        default="command-dsl",
        description="Service name attached to exported spans",
    )
    endpoint: str = Field(
        default="",
        description="OTLP gRPC endpoint (empty for console only)",
    )

    model_config = {"env_prefix": "COMMAND_DSL_OTEL_"}


class Settings(BaseSettings):
    """Main application settings."""

    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug output",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode command files and byte streams",
    )
    otel: OpenTelemetrySettings = Field(
        default_factory=OpenTelemetrySettings,
        description="OpenTelemetry settings",
    )

    model_config = {"env_prefix": "COMMAND_DSL_"}

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, v: str) -> str:
        """Reject encodings Python cannot decode with."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}") from None
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level and reject names logging does not know."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    def effective_log_level(self) -> str:
        """DEBUG when debug output is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level


def get_settings() -> Settings:
    """Get application settings, loading from environment."""
    return Settings()
