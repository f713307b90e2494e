"""Shared test doubles. No browser, network, or WebDriver server required."""

from __future__ import annotations

import pytest

from gmaps_coords.exceptions import SessionError


class FakeSession:
    """
    Scripted browser session.

    ``redirects`` maps a navigated URL to the sequence of URLs reported by
    successive ``current_url()`` calls; the last one repeats. URLs without a
    script never change. URLs in ``broken`` raise SessionError on navigate.
    """

    def __init__(self, redirects: dict | None = None, broken: set | None = None):
        self.redirects = redirects or {}
        self.broken = broken or set()
        self.navigations: list[str] = []
        self.url_reads = 0
        self.closed = False
        self._current = "about:blank"
        self._pending: list[str] = []

    async def navigate(self, url: str) -> None:
        if url in self.broken:
            raise SessionError(f"navigation to {url} failed")
        self.navigations.append(url)
        self._current = url
        self._pending = list(self.redirects.get(url, []))

    async def current_url(self) -> str:
        self.url_reads += 1
        if self._pending:
            self._current = self._pending.pop(0) if len(self._pending) > 1 else self._pending[0]
        return self._current

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session():
    """Factory for scripted sessions."""
    return FakeSession
