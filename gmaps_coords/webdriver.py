"""
Minimal async client for the W3C WebDriver protocol.

Only what coordinate lookup needs: open a session, navigate, read the
current URL, and delete the session. Any WebDriver server works
(geckodriver by default, on port 4444).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from gmaps_coords.exceptions import SessionError

logger = logging.getLogger(__name__)


class BrowserSession(Protocol):
    """The browser capability the resolver drives."""

    async def navigate(self, url: str) -> None: ...

    async def current_url(self) -> str: ...

    async def close(self) -> None: ...


def webdriver_capabilities(headless: bool = True) -> dict:
    """New-session payload; headless Firefox unless the browser should be shown."""
    always_match: dict[str, Any] = {}
    if headless:
        always_match["moz:firefoxOptions"] = {"args": ["--headless"]}
    return {"capabilities": {"alwaysMatch": always_match}}


class WebDriverSession:
    """
    One WebDriver session over HTTP.
    Use ``connect()`` to create it; close it with ``close()`` or ``async with``.
    """

    def __init__(self, client: httpx.AsyncClient, session_id: str) -> None:
        self._client = client
        self.session_id = session_id
        self._closed = False

    @classmethod
    async def connect(
        cls,
        endpoint: str,
        headless: bool = True,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "WebDriverSession":
        """Start a new browser session on the WebDriver server at ``endpoint``."""
        client = httpx.AsyncClient(
            base_url=endpoint.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )
        try:
            value = await _send(client, "POST", "/session", json=webdriver_capabilities(headless))
        except SessionError:
            await client.aclose()
            raise

        session_id = value.get("sessionId") if isinstance(value, dict) else None
        if not session_id:
            await client.aclose()
            raise SessionError(f"WebDriver at {endpoint} returned no session id")

        logger.info("WebDriver session %s opened at %s (headless=%s)",
                    session_id, endpoint, headless)
        return cls(client, session_id)

    async def navigate(self, url: str) -> None:
        await self._command("POST", "/url", json={"url": url})

    async def current_url(self) -> str:
        value = await self._command("GET", "/url")
        if not isinstance(value, str):
            raise SessionError(f"Unexpected current URL value: {value!r}")
        return value

    async def close(self) -> None:
        """Delete the session and release the HTTP client. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._command("DELETE", "")
            logger.info("WebDriver session %s closed", self.session_id)
        finally:
            await self._client.aclose()

    async def _command(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        if self._closed and method != "DELETE":
            raise SessionError(f"WebDriver session {self.session_id} is closed")
        return await _send(self._client, method, f"/session/{self.session_id}{path}", json=json)

    async def __aenter__(self) -> "WebDriverSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


async def _send(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    json: Optional[dict] = None,
) -> Any:
    """Send one WebDriver command and return the ``value`` of its response."""
    try:
        resp = await client.request(method, path, json=json)
    except httpx.HTTPError as e:
        raise SessionError(f"WebDriver request {method} {path} failed: {e}") from e

    try:
        payload = resp.json()
    except ValueError:
        payload = None

    value = payload.get("value") if isinstance(payload, dict) else None

    # Errors come back as {"value": {"error": ..., "message": ...}}
    if isinstance(value, dict) and "error" in value:
        raise SessionError(
            f"WebDriver {method} {path}: {value['error']}: {value.get('message', '')}",
            error_code=value["error"],
        )
    if resp.is_error:
        raise SessionError(f"WebDriver {method} {path} returned HTTP {resp.status_code}")
    if not isinstance(payload, dict):
        raise SessionError(f"WebDriver {method} {path} returned a non-JSON response")
    return value
