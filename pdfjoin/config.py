"""Configuration management for the PDF join service."""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class JoinConfig:
    """Configuration for joining PDFs."""
    blank_page_width: float = field(
        default_factory=lambda: float(os.environ.get("BLANK_PAGE_WIDTH", "612"))
    )
    blank_page_height: float = field(
        default_factory=lambda: float(os.environ.get("BLANK_PAGE_HEIGHT", "792"))
    )
    max_file_size_mb: int = field(
        default_factory=lambda: int(os.environ.get("MAX_FILE_SIZE_MB", "100"))
    )
    default_join_format: str = field(
        default_factory=lambda: os.environ.get("DEFAULT_JOIN_FORMAT", "json")
    )


@dataclass
class ServerConfig:
    """Configuration for HTTP server."""
    host: str = field(
        default_factory=lambda: os.environ.get("HTTP_HOST", "0.0.0.0")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("HTTP_PORT", "8089"))
    )


@dataclass
class Config:
    """Main configuration container."""
    join: JoinConfig = field(default_factory=JoinConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Force reload of configuration from environment."""
    global _config
    _config = Config()
    return _config
