"""
Structured logging configuration.
JSON logs in production, human-readable in development.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from gmaps_coords.config import get_settings


def setup_logging(level_name: Optional[str] = None) -> None:
    """Configure logging based on environment."""
    settings = get_settings()
    level = getattr(logging, (level_name or settings.log_level).upper(), logging.INFO)

    if settings.env == "production":
        # JSON structured logging for production (parseable by log aggregators)
        import json_log_formatter

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(json_log_formatter.JSONFormatter())

        root = logging.getLogger()
        root.setLevel(level)
        root.handlers = [handler]
    else:
        _setup_basic_logging(level)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _setup_basic_logging(level: int) -> None:
    """Human-readable logging for development."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
