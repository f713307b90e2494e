"""
Central configuration loaded from environment variables with sensible defaults.
Command-line flags override these at run time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class WebDriverConfig:
    host: str = os.getenv("WEBDRIVER_HOST", "localhost")
    port: int = int(os.getenv("WEBDRIVER_PORT", "4444"))
    # Visible browser window instead of headless
    show_browser: bool = _env_flag("SHOW_BROWSER")
    request_timeout: float = float(os.getenv("WEBDRIVER_TIMEOUT", "60"))


@dataclass(frozen=True)
class ResolverConfig:
    # Wait up to poll_interval * max_polls seconds for the map to recentre
    poll_interval: float = float(os.getenv("POLL_INTERVAL", "0.1"))
    max_polls: int = int(os.getenv("MAX_POLLS", "100"))


@dataclass(frozen=True)
class Settings:
    webdriver: WebDriverConfig = field(default_factory=WebDriverConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    # GeoJSON input only: emit just the features that got new coordinates
    only_changed_places: bool = _env_flag("ONLY_CHANGED_PLACES")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
