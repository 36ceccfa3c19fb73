# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "memory"
    cache_root: Path = Path("~/.docartifacts/cache")
    cache_redis_url: str = ""
    cache_strict: bool = False

    # === Plugins ===
    # Fully qualified class paths, in execution order.
    plugins: list[str] = []
    # Per-plugin options keyed by plugin name; part of the cache fingerprint.
    plugin_options: dict[str, dict[str, Any]] = {}
    plugin_timeout_s: float = 30.0

    # === Parser ===
    parser_preset: Literal["commonmark", "default", "zero"] = "commonmark"
    parser_enable: str = "table,strikethrough"
    parser_html: bool = True

    # === Artifacts ===
    excerpt_length: int = 140
    reading_speed_wpm: int = 265

    # === Batch ===
    max_concurrency: int = 8
    batch_recursive: bool = True
    batch_formats: str = ".md,.markdown"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("batch_formats")
    @classmethod
    def validate_batch_formats(cls, v: str) -> str:  # noqa: N805
        """Every format must be a dotted file extension."""
        for fmt in (f.strip() for f in v.split(",")):
            if fmt and not fmt.startswith("."):
                raise ValueError(f"batch format {fmt!r} must start with '.'")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and self.cache_enabled and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if self.plugin_timeout_s <= 0:
            errors.append("PLUGIN_TIMEOUT_S must be > 0")

        if self.max_concurrency < 1:
            errors.append("MAX_CONCURRENCY must be >= 1")

        if self.reading_speed_wpm < 1:
            errors.append("READING_SPEED_WPM must be >= 1")

        if self.excerpt_length < 1:
            errors.append("EXCERPT_LENGTH must be >= 1")

        if len(set(self.plugins)) != len(self.plugins):
            errors.append("PLUGINS must not list the same class twice")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def parser_enable_list(self) -> list[str]:
        """Parse comma-separated markdown-it rule names to enable."""
        return [r.strip() for r in self.parser_enable.split(",") if r.strip()]

    @property
    def batch_formats_list(self) -> list[str]:
        """Parse comma-separated batch file extensions."""
        return [f.strip().lower() for f in self.batch_formats.split(",") if f.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
