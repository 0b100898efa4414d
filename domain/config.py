"""
Configuration module for the BBVA adapter.

All configuration values are loaded from environment variables with sensible defaults.
See .env.example for all available configuration options.
"""
import os
from dataclasses import dataclass, field
from typing import Optional


def _get_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.getenv(key, default))


def _get_optional_str(key: str) -> Optional[str]:
    """Get string from environment variable, treating empty values as unset."""
    return os.getenv(key) or None


@dataclass
class BBVAConfig:
    """Connection settings for the BBVA mobile API."""

    base_url: str = field(default_factory=lambda: os.getenv("BBVA_BASE_URL", "https://servicios.bbva.es"))

    # Timeouts in seconds
    connect_timeout: float = field(default_factory=lambda: _get_float("BBVA_CONNECT_TIMEOUT", 5.0))
    read_timeout: float = field(default_factory=lambda: _get_float("BBVA_READ_TIMEOUT", 20.0))

    # Debugging proxy (e.g. "http://localhost:8888"), disabled unless set
    proxy_url: Optional[str] = field(default_factory=lambda: _get_optional_str("BBVA_PROXY_URL"))


# Global config instance (lazy loaded)
_bbva_config = None


def get_bbva_config() -> BBVAConfig:
    """Get BBVA connection configuration."""
    global _bbva_config
    if _bbva_config is None:
        _bbva_config = BBVAConfig()
    return _bbva_config


def reload_config():
    """Force reload of all configuration from environment variables."""
    global _bbva_config
    _bbva_config = BBVAConfig()
