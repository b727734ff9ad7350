"""
Configuration module for the Stitch Proxy.

This module uses Pydantic Settings to load and validate environment variables
for backend selection (HTTP or gRPC), backend addresses, the shared key
forwarded to the stitcher, and server settings.

Environment variables are loaded from .env file or system environment. The
resulting Settings object is frozen: it is built once at startup and handed to
the application factory, never mutated afterwards.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PANO_URL = "http://localhost:8000/stitch"
DEFAULT_GRPC_TARGET = "localhost:50051"
DEFAULT_MAX_UPLOAD_BYTES = 100 << 20  # 100 MiB


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The variable names match the ones the stitcher deployment already uses
    (GRPC, PANO_URL, PANO_KEY), so an existing .env file keeps working.
    """

    # =========================================================================
    # Transport Selection
    # =========================================================================

    GRPC: bool = Field(
        default=False,
        description="Forward uploads over gRPC instead of HTTP multipart",
    )

    # =========================================================================
    # Backend Configuration
    # =========================================================================

    PANO_URL: str = Field(
        default=DEFAULT_PANO_URL,
        description="Pano stitcher HTTP endpoint (used when GRPC is false)",
    )

    PANO_KEY: str = Field(
        default="",
        description="Shared key sent to the stitcher as x-internal-key / request key",
    )

    GRPC_TARGET: str = Field(
        default=DEFAULT_GRPC_TARGET,
        description="host:port of the stitcher gRPC service (used when GRPC is true)",
        min_length=1,
    )

    BACKEND_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None,
        description="Outbound request timeout in seconds (unset means no timeout)",
        gt=0,
    )

    # =========================================================================
    # Upload Limits
    # =========================================================================

    MAX_UPLOAD_BYTES: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        description="Maximum accepted size of an inbound multipart body",
        ge=1,
    )

    # =========================================================================
    # Proxy Server Configuration
    # =========================================================================

    PROXY_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the proxy server",
    )

    PROXY_PORT: int = Field(
        default=8080,
        description="Port to bind the proxy server",
        ge=1,
        le=65535,
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    @property
    def pano_url_str(self) -> str:
        """
        Stitcher URL with the default applied when PANO_URL is set but empty.

        Returns:
            Backend URL string.
        """
        return self.PANO_URL.strip() or DEFAULT_PANO_URL

    @field_validator("GRPC", mode="before")
    @classmethod
    def parse_grpc_flag(cls, v) -> bool:
        """
        Only the literal "true" (any case) enables gRPC.

        Empty, "false", "1", "yes" or anything else keeps HTTP mode, the way
        the stitcher deployment has always read this variable.
        """
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() == "true"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate LOG_LEVEL is a standard logging level name.

        Raises:
            ValueError: If the level is not recognised
        """
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.strip().upper()
        if v not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}, got: {v}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get or create a singleton Settings instance.

    This function is cached so that the settings are loaded only once
    during the application lifecycle.

    Returns:
        Settings instance with all configuration loaded and validated.

    Raises:
        ValidationError: If an environment variable is invalid.
    """
    return Settings()


def validate_configuration(settings: Settings) -> dict:
    """
    Check the settings for combinations that are legal but probably unintended.

    Called during application startup; the warnings are logged, not raised.

    Returns:
        Dictionary with the selected transport and any warnings.

    Example:
        >>> report = validate_configuration(Settings(GRPC=True))
        >>> report["transport"]
        'grpc'
    """
    warnings = []

    if not settings.PANO_KEY:
        warnings.append("PANO_KEY is not set; the stitcher will receive an empty key")

    if settings.GRPC and settings.PANO_URL != DEFAULT_PANO_URL:
        warnings.append("PANO_URL is set but ignored because GRPC is enabled")

    if not settings.GRPC and settings.GRPC_TARGET != DEFAULT_GRPC_TARGET:
        warnings.append("GRPC_TARGET is set but ignored because GRPC is disabled")

    return {
        "transport": "grpc" if settings.GRPC else "http",
        "warnings": warnings,
        "max_upload_bytes": settings.MAX_UPLOAD_BYTES,
    }


if __name__ == "__main__":
    """
    Print the effective configuration:
        python -m stitch_proxy.app.config
    """
    config = get_settings()
    report = validate_configuration(config)

    print("=" * 80)
    print("STITCH PROXY CONFIGURATION")
    print("=" * 80)
    print(f"  Transport:      {report['transport']}")
    if config.GRPC:
        print(f"  gRPC target:    {config.GRPC_TARGET}")
    else:
        print(f"  Pano URL:       {config.pano_url_str}")
    print(f"  Key set:        {'yes' if config.PANO_KEY else 'no'}")
    print(f"  Max upload:     {config.MAX_UPLOAD_BYTES} bytes")
    print(f"  Listen:         {config.PROXY_HOST}:{config.PROXY_PORT}")

    if report["warnings"]:
        print("\n⚠ Warnings:")
        for warning in report["warnings"]:
            print(f"  - {warning}")
