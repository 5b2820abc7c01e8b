"""
Slice Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .viewport import resolve_viewport_size


class SliceSettings(BaseSettings):
    """
    Slice service configuration with validation.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # === Slicing defaults ===
    default_slice_height: int = Field(
        default=675,
        ge=1,
        le=20000,
        description="Target slice height in pixels when a request does not give one (1-20000)"
    )
    default_viewport_size: str = Field(
        default="auto",
        description="Viewport descriptor used when a request does not give one"
    )
    max_slices: int = Field(
        default=500,
        ge=1,
        le=100000,
        description="Largest totalHeight/targetHeight ratio a planning request may ask for (1-100000)"
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR"
    )
    log_format: str = Field(
        default="simple",
        description="Log format: simple or json"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("default_viewport_size")
    @classmethod
    def validate_viewport_size(cls, v: str) -> str:
        """Reject descriptors the viewport parser cannot use."""
        result = resolve_viewport_size(v)
        if not result.ok:
            raise ValueError(f"{result.message} ({result.reason.value})")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(allowed))}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in {"simple", "json"}:
            raise ValueError("log_format must be 'simple' or 'json'")
        return v_lower

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning/error messages.
        """
        issues = []

        if self.is_production and self.log_level == "DEBUG":
            issues.append("WARNING: DEBUG logging enabled in production")

        return issues


@lru_cache()
def get_settings() -> SliceSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached. Tests call get_settings.cache_clear()
    after changing the environment.
    """
    return SliceSettings()


def validate_config_on_startup() -> SliceSettings:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    import logging
    logger = logging.getLogger(__name__)

    try:
        settings = get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")

    issues = settings.validate_production_config()

    for issue in issues:
        logger.warning(issue)

    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  default_slice_height={settings.default_slice_height}")
    logger.info(f"  default_viewport_size={settings.default_viewport_size}")
    logger.info(f"  max_slices={settings.max_slices}")
    logger.info(f"  log_level={settings.log_level} log_format={settings.log_format}")

    return settings
