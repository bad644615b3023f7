"""
Local runner for the booking data manager.

Requests the booking every REFRESH_INTERVAL seconds and prints it to the
console.  Cached data is served while fresh; stale data triggers a
background refresh; failures fall back to the cache.

Usage:
    source .env && python scripts/run.py [--refresh] [--clear]

    --refresh   force a fetch on the first request
    --clear     clear the cache before starting

Environment variables (all optional unless noted):
    BOOKING_SOURCE          - "file" or "http" (default: file)
    BOOKING_JSON_PATH       - JSON file for the file source (default: data/booking.json)
    MOCK_DELAY              - simulated delay of the file source in seconds (default: 1.0)
    BOOKING_URL             - endpoint for the http source (required when BOOKING_SOURCE=http)
    BOOKING_HTTP_TIMEOUT    - HTTP timeout in seconds (default: 10)
    BOOKING_API_KEY         - bearer token for the http source
    DB_PATH                 - SQLite cache path (default: data/booking.db)
    REFRESH_INTERVAL        - seconds between requests (default: 30)
    LOG_LEVEL               - logging level (default: INFO)
"""

import asyncio
import logging
import os
import sys

# Make sure project root is on sys.path when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.adapters.console_renderer import ConsoleBookingRenderer
from src.adapters.factory import create_booking_cache, create_booking_source
from src.data_manager import BookingDataManager

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger(__name__)


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        print(f"ERROR: environment variable {name!r} is not set.", file=sys.stderr)
        sys.exit(1)
    return value


def build_manager() -> BookingDataManager:
    if os.environ.get("BOOKING_SOURCE", "file") == "http":
        _require_env("BOOKING_URL")
    return BookingDataManager(
        source=create_booking_source(),
        cache=create_booking_cache(),
    )


async def main(argv: list[str]) -> None:
    refresh_interval = int(os.environ.get("REFRESH_INTERVAL", "30"))

    manager = build_manager()
    ConsoleBookingRenderer(manager.state)

    if "--clear" in argv:
        manager.clear_cache()

    log.info("Runner started, interval=%ds", refresh_interval)

    force = "--refresh" in argv
    try:
        while True:
            await manager.request_data(force_refresh=force)
            force = False
            log.info("Sleeping %ds …", refresh_interval)
            await asyncio.sleep(refresh_interval)
    finally:
        await manager.wait_for_background_refreshes()


if __name__ == "__main__":
    try:
        asyncio.run(main(sys.argv[1:]))
    except KeyboardInterrupt:
        log.info("Runner stopped.")
