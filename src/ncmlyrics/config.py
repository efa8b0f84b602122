"""Configuration settings for ncm-lyrics."""

import os
from dataclasses import dataclass
from typing import Tuple

from .exceptions import ConfigError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


# Pipeline sizing (can be overridden via environment variables)
QUEUE_SIZE = _int_env("NCMLYRICS_QUEUE_SIZE", 64)
MAX_CONCURRENT_FETCHES = _int_env("NCMLYRICS_MAX_CONCURRENT_FETCHES", 64)
METADATA_WORKERS = _int_env("NCMLYRICS_METADATA_WORKERS", 8)

# Files
AUDIO_EXTENSIONS: Tuple[str, ...] = ("mp3", "flac", "wav", "ogg")
LYRIC_EXTENSION = "ttml"

# Remote lyric service
LYRIC_API_URL = os.getenv(
    "NCMLYRICS_LYRIC_API_URL",
    "https://music.163.com/api/song/lyric/v1"
    "?tv=0&lv=0&rv=0&kv=0&yv=0&ytv=0&yrv=0&cp=false&id={music_id}",
)
HTTP_TIMEOUT = _float_env("NCMLYRICS_HTTP_TIMEOUT", 10.0)
USER_AGENT = os.getenv("NCMLYRICS_USER_AGENT", "ncm-lyrics/0.1")

# Logging
LOG_LEVEL = os.getenv("NCMLYRICS_LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("NCMLYRICS_LOG_FILE") or None


@dataclass(frozen=True)
class PipelineSettings:
    """Sizing and output options for one pipeline run."""

    queue_size: int = QUEUE_SIZE
    max_concurrent_fetches: int = MAX_CONCURRENT_FETCHES
    metadata_workers: int = METADATA_WORKERS
    audio_extensions: Tuple[str, ...] = AUDIO_EXTENSIONS
    lyric_extension: str = LYRIC_EXTENSION

    def validate(self) -> None:
        if self.queue_size <= 0:
            raise ConfigError("Queue size must be positive")
        if self.max_concurrent_fetches <= 0:
            raise ConfigError("Concurrent fetch limit must be positive")
        if self.metadata_workers <= 0:
            raise ConfigError("Metadata worker count must be positive")
        if not self.audio_extensions:
            raise ConfigError("At least one audio extension is required")
        if not self.lyric_extension or "." in self.lyric_extension:
            raise ConfigError("Invalid lyric extension")


def validate_config() -> None:
    """Validate configuration values."""
    PipelineSettings().validate()

    if HTTP_TIMEOUT <= 0:
        raise ConfigError("Invalid HTTP timeout")

    if "{music_id}" not in LYRIC_API_URL:
        raise ConfigError("Lyric API URL must contain a {music_id} placeholder")

    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigError(f"Invalid log level: {LOG_LEVEL}")
