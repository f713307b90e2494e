"""Exception hierarchy for coordinate lookup runs."""

from __future__ import annotations


class GmapsCoordsError(Exception):
    """Base exception."""


# ── Per-record failures (logged, record dropped, batch continues) ─────

class ResolutionError(GmapsCoordsError):
    """Coordinates could not be resolved for a single place URL."""


class CoordinateParseError(ResolutionError):
    """A matched coordinate group is not a valid float."""


class SessionError(ResolutionError):
    """The WebDriver session failed while navigating or reading the URL."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class ResolutionTimeout(ResolutionError):
    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(
            f"Failed to get coordinates for {url} before timeout ({attempts} polls)"
        )
        self.url = url
        self.attempts = attempts


class RecordParseError(GmapsCoordsError):
    """A tabular row does not describe a valid place."""


# ── Fatal failures ────────────────────────────────────────────────────

class InputFileError(GmapsCoordsError, OSError):
    """The input file could not be read or parsed."""


class OutputNotWritableError(GmapsCoordsError, OSError):
    """The output file cannot be written."""
