#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

from .constants import (
    CACHE_DIR,
    CACHE_MAX_ENTRIES,
    DEFAULT_MODEL,
    EVALUATION_BATCH_SIZE,
    EVALUATION_MAX_RETRIES,
    EVALUATION_MAX_TOKENS,
    EVALUATION_TEMPERATURE,
    EVALUATION_TIMEOUT_SECONDS,
    LOG_LEVEL,
    WORD_COUNT_LIMIT,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== API Keys ==========
    anthropic_api_key: str = ""
    anthropic_base_url: Optional[str] = None

    # ========== Model ==========
    model: str = DEFAULT_MODEL
    max_tokens: int = EVALUATION_MAX_TOKENS
    temperature: float = EVALUATION_TEMPERATURE
    max_retries: int = EVALUATION_MAX_RETRIES

    # ========== Analysis ==========
    batch_size: int = EVALUATION_BATCH_SIZE  # model calls issued concurrently per batch
    request_timeout: float = EVALUATION_TIMEOUT_SECONDS
    max_words: int = WORD_COUNT_LIMIT  # 0 = unlimited
    show_progress: bool = False

    # ========== Cache ==========
    cache_enabled: bool = True
    cache_backend: str = "memory"  # memory | file
    cache_max_entries: int = CACHE_MAX_ENTRIES

    # ========== Directories ==========
    cache_dir: Path = BASE_DIR / CACHE_DIR
    logs_dir: Path = BASE_DIR / "logs"

    # ========== Logging ==========
    log_level: str = LOG_LEVEL  # console level; the log file always gets DEBUG
    log_to_file: bool = True

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model

    def get_api_key(self) -> str:
        """Get the model provider API key"""
        if not self.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY not set in .env")
        return self.anthropic_api_key

    def summary(self) -> dict:
        """Configuration summary for logging (no secrets)"""
        return {
            "model": self.model,
            "batch_size": self.batch_size,
            "request_timeout": self.request_timeout,
            "max_words": self.max_words,
            "cache_enabled": self.cache_enabled,
            "cache_backend": self.cache_backend,
        }


# Global settings instance
settings = Settings()
