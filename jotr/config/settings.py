"""Configuration settings for jotr with caching utilities."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """jotr settings, read from ``JOTR_*`` environment variables or ``.env``"""

    model_config = SettingsConfigDict(
        env_prefix="JOTR_",
        env_file=[".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Notes root, exposed to templates as {$base_dir}
    base_dir: Path = Path("~/Notes")
    # Defaults to <base_dir>/templates
    templates_dir: Path | None = None

    # Editor command; falls back to $VISUAL / $EDITOR
    editor: str | None = None

    # Logging
    log_level: str = "WARNING"
    log_format: str = "console"
    log_file: Path | None = None

    # Environment
    environment: str = "personal"

    @property
    def base_path(self) -> Path:
        """Absolute notes root with ``~`` expanded"""
        return self.base_dir.expanduser().absolute()

    @property
    def templates_path(self) -> Path:
        """Directory scanned for template files"""
        if self.templates_dir is not None:
            return self.templates_dir.expanduser().absolute()
        return self.base_path / "templates"

    @property
    def resolved_editor(self) -> str | None:
        """Editor command from settings or the environment"""
        return self.editor or os.environ.get("VISUAL") or os.environ.get("EDITOR")

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode"""
        return self.environment.lower() in ["testing", "test"]


_SETTINGS_LOCK = RLock()
_SETTINGS_CACHE: Settings | None = None


def get_settings(*, refresh: bool = False) -> Settings:
    """Return a cached ``Settings`` instance.

    Parameters
    ----------
    refresh:
        When ``True`` the cached instance is discarded and a new one is created.
    """

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        if refresh or _SETTINGS_CACHE is None:
            _SETTINGS_CACHE = Settings()
        return _SETTINGS_CACHE


def clear_settings_cache() -> None:
    """Clear the cached settings instance."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = None


@contextmanager
def override_settings(**overrides: Any) -> Iterator[Settings]:
    """Temporarily override the cached settings within a context."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        previous_settings = _SETTINGS_CACHE

    base_settings = previous_settings or Settings()
    patched_settings = base_settings.model_copy(update=overrides)

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = patched_settings

    try:
        yield patched_settings
    finally:
        with _SETTINGS_LOCK:
            _SETTINGS_CACHE = previous_settings
