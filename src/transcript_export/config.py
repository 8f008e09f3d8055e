"""Configuration management for transcript_export.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
Command line flags take precedence over anything loaded here.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from transcript_export.models.options import AttachmentStrategy

__all__ = [
    "ExportSettings",
    "LoggingSettings",
    "PdfSettings",
]


class PdfSettings(BaseSettings):
    """PDF rendering settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIPT_EXPORT_PDF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    page_size: str = "a4"


class LoggingSettings(BaseSettings):
    """Logging output settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIPT_EXPORT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False


class ExportSettings(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        settings = ExportSettings()
        page_size = settings.pdf.page_size
    """

    model_config = SettingsConfigDict(
        env_prefix="TRANSCRIPT_EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pdf: PdfSettings = Field(default_factory=PdfSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    output_dir: Path = Path("conversations")
    # Validated by the CLI like the matching flags: unknown or negative
    # values warn and fall back instead of failing the run
    asset_mode: str = AttachmentStrategy.COPY.value
    thumbnail_width: int = 512
    formats: str = "markdown"  # comma separated: markdown, pdf, both
