"""
Resolve a place URL to coordinates.

The map renders client-side and only exposes the place location by rewriting
the browser address to ``.../@lat,lng,...`` once the view is centred on it.
So resolution is:
  1. Take coordinates straight from a ``q=lat,lng`` URL if present (the map
     does not recentre for those, and no browser is needed)
  2. Otherwise navigate the browser to the URL
  3. Poll the current URL at a fixed cadence until it changes and carries an
     ``@lat,lng`` view centre, or the poll budget runs out
"""

from __future__ import annotations

import asyncio
import logging

from gmaps_coords.exceptions import ResolutionTimeout
from gmaps_coords.extract import (
    DIRECT_QUERY_PATTERN,
    VIEW_CENTER_PATTERN,
    extract_coordinates,
)
from gmaps_coords.models import Coordinate
from gmaps_coords.webdriver import BrowserSession

logger = logging.getLogger(__name__)


class CoordinateResolver:
    """
    Resolves place URLs using a browser session lent by the caller.
    The session is shared across the whole batch; the resolver never closes it.
    """

    def __init__(
        self,
        session: BrowserSession,
        poll_interval: float = 0.1,
        max_polls: int = 100,
    ) -> None:
        self.session = session
        self.poll_interval = poll_interval
        self.max_polls = max_polls

    async def resolve(self, url: str) -> Coordinate:
        """
        Return (lng, lat) for ``url``.
        Raises SessionError on transport failure, ResolutionTimeout if the
        browser never lands on a coordinate-bearing URL.
        """
        coords = extract_coordinates(DIRECT_QUERY_PATTERN, url)
        if coords is not None:
            logger.debug("Coordinates taken from query in %s", url)
            return coords

        await self.session.navigate(url)
        for attempt in range(self.max_polls):
            await asyncio.sleep(self.poll_interval)
            redirected_url = await self.session.current_url()
            if redirected_url == url:
                continue
            coords = extract_coordinates(VIEW_CENTER_PATTERN, redirected_url)
            if coords is not None:
                logger.info("Fetched coordinates in %.1f seconds",
                            attempt * self.poll_interval)
                return coords

        raise ResolutionTimeout(url, self.max_polls)


async def resolve_coordinates(
    session: BrowserSession,
    url: str,
    poll_interval: float = 0.1,
    max_polls: int = 100,
) -> Coordinate:
    """Resolve a single URL without keeping a resolver around."""
    resolver = CoordinateResolver(session, poll_interval=poll_interval, max_polls=max_polls)
    return await resolver.resolve(url)
