"""
Uptime dashboard sync engine entry point.
Keeps a local view of the monitored services in sync and logs it.
"""

import asyncio
import sys

from loguru import logger

from dashboard.app import DashboardStore
from dashboard.settings import global_settings


def log_summary(store: DashboardStore) -> None:
    """Log one line per cached service."""
    cache = store.cache
    if cache.error:
        logger.warning(f"Showing cached data, last refresh failed: {cache.error}")
    for record in cache.records:
        checked = record.last_checked.isoformat() if record.last_checked else "never"
        logger.info(
            f"  - {record.name} [{record.status.name}] {record.url} "
            f"every {record.interval}s, last checked {checked}"
        )


async def main() -> None:
    """Run the sync loop until interrupted."""
    logger.remove()
    logger.add(sys.stderr, level=global_settings.log_level.upper())
    logger.info(f"Starting dashboard sync against {global_settings.api_url}...")

    store = DashboardStore.from_settings(global_settings)
    store.cache.subscribe(lambda ids: log_summary(store))

    try:
        await store.notifications.load()
        store.scheduler.start()

        logger.info("Dashboard sync is running. Press Ctrl+C to stop.")
        while True:
            await asyncio.sleep(60)

    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Received interrupt signal, shutting down...")
    except Exception as e:
        logger.error(f"Error in main loop: {e}")
    finally:
        await store.close()
        logger.info("Dashboard sync stopped")


if __name__ == "__main__":
    asyncio.run(main())
