"""CLI entrypoint for gmaps_coords."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from gmaps_coords.exceptions import GmapsCoordsError
from gmaps_coords.logging_config import setup_logging

logger = logging.getLogger("gmaps_coords")

DESCRIPTION = """\
Read GeoJSON and CSV files exported from Google Maps and convert them to
GeoJSON files with coordinates for each place.

First run a WebDriver server in another terminal, such as geckodriver.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gmaps-coords", description=DESCRIPTION)
    parser.add_argument(
        "-i", "--input", required=True, type=Path, metavar="FILE",
        help='Input filename. A ".csv" extension is read as CSV, anything else as GeoJSON.',
    )
    parser.add_argument(
        "-o", "--output", required=True, type=Path, metavar="FILE",
        help="Output filename, GeoJSON formatted",
    )
    parser.add_argument(
        "--only-changed-places", action="store_true", default=None,
        help="(GeoJSON only) Only output features that got updated coordinates",
    )
    parser.add_argument(
        "-p", "--port", type=int, default=None, metavar="PORT",
        help="The port to connect to the WebDriver server (default 4444)",
    )
    parser.add_argument(
        "--host", default=None,
        help="The host of the WebDriver server (default localhost)",
    )
    parser.add_argument(
        "--show-browser", "--noheadless", dest="show_browser",
        action="store_true", default=None,
        help="Show the browser as coordinates are looked up",
    )
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    from gmaps_coords.pipeline import RunOptions, run

    options = RunOptions.from_settings(
        args.input,
        args.output,
        only_changed_places=args.only_changed_places,
        webdriver_host=args.host,
        webdriver_port=args.port,
        show_browser=args.show_browser,
    )

    try:
        asyncio.run(run(options))
    except GmapsCoordsError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
