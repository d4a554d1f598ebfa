"""Runtime settings, read from ``NUTSHELL_*`` environment variables.

Environment variables:
- NUTSHELL_SED / NUTSHELL_AWK / NUTSHELL_GREP / NUTSHELL_PERL: explicit
  tool paths, used only when they point at an executable
- NUTSHELL_TEXT_BACKEND: "auto" or a backend name (default: "auto")
- NUTSHELL_PROTECT_SINGLE_QUOTES: treat '…' as quoted inside arrays
  (default: False)
- NUTSHELL_LOG_LEVEL: logging level for the CLI (default: "WARNING")

Examples:
    >>> from nutshell.config import Settings
    >>> Settings(log_level="debug").log_level
    'DEBUG'
    >>> Settings(sed="/opt/bin/sed").tool_override("sed")
    '/opt/bin/sed'
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_TOOLS = ("sed", "awk", "grep", "perl")


class Settings(BaseSettings):
    sed: Optional[str] = None
    awk: Optional[str] = None
    grep: Optional[str] = None
    perl: Optional[str] = None

    text_backend: str = "auto"
    protect_single_quotes: bool = False
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="NUTSHELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return level

    @field_validator("text_backend", mode="before")
    @classmethod
    def _normalize_backend(cls, value: str) -> str:
        return str(value).strip().lower() or "auto"

    def tool_override(self, name: str) -> Optional[str]:
        """Explicit path configured for *name*, if any."""
        if name not in _TOOLS:
            return None
        return getattr(self, name)

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
