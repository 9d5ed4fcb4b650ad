"""Configuration settings for the resume PDF renderer.

This module provides a Settings class that loads configuration from environment variables
with support for .env files. It uses pydantic for validation and type conversion.
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are optional:
        LOG_LEVEL: Logging level (default: "INFO")
        LATEX_ENABLED: Whether server-side LaTeX compilation is enabled (default: True)
        PDFLATEX_COMMAND: Path to pdflatex executable (default: "pdflatex", looked up on PATH)
        LATEX_TIMEOUT_SECONDS: Hard deadline for one compilation job (default: 60)
        LATEX_COMPILE_PASSES: Number of pdflatex runs per job (default: 1)
        LATEX_TEMPLATES_DIR: Directory holding <template_id>.tex files (default: bundled templates)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    LOG_LEVEL: str = "INFO"

    # LaTeX compilation settings
    LATEX_ENABLED: bool = True
    PDFLATEX_COMMAND: str = "pdflatex"
    LATEX_TIMEOUT_SECONDS: float = 60.0
    LATEX_COMPILE_PASSES: int = 1
    LATEX_TEMPLATES_DIR: Path | None = None

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator("PDFLATEX_COMMAND")
    @classmethod
    def validate_pdflatex_command(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("PDFLATEX_COMMAND must not be empty")
        return v.strip()

    @field_validator("LATEX_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate the compilation deadline is positive."""
        if v <= 0:
            raise ValueError("LATEX_TIMEOUT_SECONDS must be greater than 0")
        return v

    @field_validator("LATEX_COMPILE_PASSES")
    @classmethod
    def validate_compile_passes(cls, v: int) -> int:
        """Validate the number of passes is between 1 and 3."""
        if not 1 <= v <= 3:
            raise ValueError("LATEX_COMPILE_PASSES must be between 1 and 3")
        return v


# Global settings instance - using a function to ensure it's only created once
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    This ensures we only load settings once and cache them. Services read the
    fields of the returned instance on every call, so mutating it at runtime
    (for example flipping LATEX_ENABLED) takes effect without a restart.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
