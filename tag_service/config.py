"""
Tag Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LAYOUT_MODES = {"canvas", "template"}
PACKAGE_FONT_DIR = str(Path(__file__).parent / "fonts")


class TagSettings(BaseSettings):
    """
    Tag service configuration with validation.

    All settings can be overridden via environment variables.
    Validation happens at startup to fail fast on misconfiguration.
    """

    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # === Tag Content ===
    brand_name: str = Field(
        default="TESNIM HOME",
        validation_alias="TAG_BRAND_NAME",
        description="Header text printed at the top of every tag"
    )
    footer_text: str = Field(
        default="TESNIM • www.tesnim.mk",
        validation_alias="TAG_FOOTER_TEXT",
        description="Footer text anchored to the bottom of every tag"
    )
    filename_prefix: str = Field(
        default="tesnim-tag",
        validation_alias="TAG_FILENAME_PREFIX",
        description="Prefix of the suggested download filename"
    )

    # === Fonts ===
    font_dirs: str = Field(
        default=f"{PACKAGE_FONT_DIR},backend/fonts,fonts",
        validation_alias="TAG_FONT_DIRS",
        description="Comma-separated list of directories searched for the tag fonts, in order"
    )
    regular_font_file: str = Field(
        default="Inter-Regular.ttf",
        validation_alias="TAG_REGULAR_FONT",
        description="Regular weight font filename"
    )
    bold_font_file: str = Field(
        default="Inter-Bold.ttf",
        validation_alias="TAG_BOLD_FONT",
        description="Bold weight font filename"
    )

    # === Layout ===
    layout_mode: str = Field(
        default="canvas",
        validation_alias="TAG_LAYOUT_MODE",
        description="Layout mode: 'canvas' (fresh page) or 'template' (overlay on a template PDF)"
    )
    template_path: Optional[str] = Field(
        default=None,
        validation_alias="TAG_TEMPLATE_PATH",
        description="Template PDF used by the 'template' layout mode"
    )

    # === Concurrency & Limits ===
    max_concurrent_renders: int = Field(
        default=5,
        ge=1,
        le=50,
        validation_alias="MAX_CONCURRENT_RENDERS",
        description="Maximum concurrent tag renders (1-50)"
    )

    # === CORS ===
    cors_origins: str = Field(
        default="",
        validation_alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins"
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

    @field_validator("layout_mode")
    @classmethod
    def validate_layout_mode(cls, v: str) -> str:
        """Validate layout mode is a known value."""
        v_lower = v.lower()
        if v_lower not in LAYOUT_MODES:
            raise ValueError(f"layout_mode must be one of: {', '.join(sorted(LAYOUT_MODES))}")
        return v_lower

    @property
    def font_dirs_list(self) -> List[str]:
        """Parse font directories into an ordered list."""
        return [d.strip() for d in self.font_dirs.split(",") if d.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if not self.cors_origins:
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

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

        if self.layout_mode == "template" and not self.template_path:
            issues.append("WARNING: TAG_LAYOUT_MODE=template without TAG_TEMPLATE_PATH, canvas layout will be used")

        if self.is_production and not self.cors_origins:
            issues.append("WARNING: CORS_ORIGINS not configured")

        return issues

    class Config:
        env_prefix = ""  # No prefix, use exact env var names
        case_sensitive = False
        populate_by_name = True  # Allow TagSettings(brand_name=...) in code and tests


@lru_cache()
def get_settings() -> TagSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    Use this function to access configuration throughout the app.
    """
    return TagSettings()


def validate_config_on_startup() -> None:
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
        if issue.startswith("CRITICAL"):
            raise ValueError(issue)
        else:
            logger.warning(issue)

    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  layout_mode={settings.layout_mode}")
    logger.info(f"  template_path={settings.template_path}")
    logger.info(f"  font_dirs={settings.font_dirs_list}")
    logger.info(f"  max_concurrent_renders={settings.max_concurrent_renders}")
