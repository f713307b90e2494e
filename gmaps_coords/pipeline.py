"""
Run orchestrator.
Ties together input -> reconcile (with one shared browser session) -> output.
Called by the CLI.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

from gmaps_coords.config import get_settings
from gmaps_coords.files import (
    ensure_writable,
    is_csv,
    read_csv_rows,
    read_feature_collection,
    write_feature_collection,
)
from gmaps_coords.models import FeatureCollection
from gmaps_coords.reconcile import RecordReconciler
from gmaps_coords.resolver import CoordinateResolver
from gmaps_coords.webdriver import BrowserSession, WebDriverSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[["RunOptions"], Awaitable[BrowserSession]]


@dataclass(frozen=True)
class RunOptions:
    input_path: Path
    output_path: Path
    only_changed_places: bool = False
    webdriver_host: str = "localhost"
    webdriver_port: int = 4444
    show_browser: bool = False
    poll_interval: float = 0.1
    max_polls: int = 100
    request_timeout: float = 60.0

    @property
    def webdriver_endpoint(self) -> str:
        return f"http://{self.webdriver_host}:{self.webdriver_port}"

    @classmethod
    def from_settings(cls, input_path: Path, output_path: Path, **overrides) -> "RunOptions":
        """Defaults from the environment, with explicit (non-None) overrides."""
        settings = get_settings()
        values = {
            "only_changed_places": settings.only_changed_places,
            "webdriver_host": settings.webdriver.host,
            "webdriver_port": settings.webdriver.port,
            "show_browser": settings.webdriver.show_browser,
            "poll_interval": settings.resolver.poll_interval,
            "max_polls": settings.resolver.max_polls,
            "request_timeout": settings.webdriver.request_timeout,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(input_path=input_path, output_path=output_path, **values)


async def open_webdriver_session(options: RunOptions) -> BrowserSession:
    return await WebDriverSession.connect(
        options.webdriver_endpoint,
        headless=not options.show_browser,
        timeout=options.request_timeout,
    )


async def run(
    options: RunOptions,
    session_factory: Optional[SessionFactory] = None,
) -> FeatureCollection:
    """
    Execute a full run:
      1. Check the output file is writable (fail fast, before any browser work)
      2. Open one browser session for the whole batch
      3. Convert CSV rows or update GeoJSON features
      4. Write the output collection
    The session is always closed, whether or not the run succeeds.
    """
    ensure_writable(options.output_path)

    factory = session_factory or open_webdriver_session
    session = await factory(options)
    start_time = time.monotonic()

    try:
        resolver = CoordinateResolver(
            session,
            poll_interval=options.poll_interval,
            max_polls=options.max_polls,
        )
        reconciler = RecordReconciler(resolver, only_changed_places=options.only_changed_places)

        if is_csv(options.input_path):
            logger.info("Converting CSV %s", options.input_path)
            collection = await reconciler.build_features(read_csv_rows(options.input_path))
        else:
            logger.info("Updating GeoJSON %s", options.input_path)
            collection = await reconciler.update_features(
                read_feature_collection(options.input_path)
            )

        write_feature_collection(options.output_path, collection)
        logger.info("Run complete in %.1fs: %s",
                    time.monotonic() - start_time, reconciler.stats.as_dict())
        return collection
    finally:
        await session.close()
