"""
Service list sync scheduler.

Uses APScheduler to refresh the ServiceCache immediately on start and then
at a fixed period.
"""

import asyncio
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from loguru import logger

from dashboard.store.cache import ServiceCache
from dashboard.store.cancellation import CancellationToken

DEFAULT_REFRESH_INTERVAL = 30.0


class SyncScheduler:
    """
    Periodic refresh trigger for a ServiceCache.

    ``stop()`` removes the timer before returning and cancels the token
    passed to every scheduled refresh, so responses that arrive later are
    dropped instead of applied. Refreshes already issued keep running in
    their own tasks; shutting APScheduler down does not cancel them.
    """

    def __init__(
        self,
        cache: ServiceCache,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL,
    ):
        self._cache = cache
        self._interval_seconds = interval_seconds
        self.scheduler: AsyncIOScheduler | None = None
        self._token: CancellationToken | None = None
        self._is_running = False
        self._refresh_tasks: set[asyncio.Task] = set()

    async def refresh_job(self, token: CancellationToken) -> None:
        """Issue a scheduled refresh in a task the executor does not own."""
        task = asyncio.create_task(self._run_refresh(token))
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    async def _run_refresh(self, token: CancellationToken) -> None:
        try:
            await self._cache.refresh(token=token)
        except Exception as e:
            logger.error(f"Error in scheduled refresh: {e}")

    def start(self) -> None:
        """
        Start refreshing: once now, then every ``interval_seconds``.

        Must be called from within a running event loop.

        Raises:
            RuntimeError: If the scheduler is already running
        """
        if self._is_running:
            raise RuntimeError("Sync scheduler is already running")

        self._token = CancellationToken()
        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.refresh_job,
            trigger="interval",
            seconds=self._interval_seconds,
            args=[self._token],
            id="service_refresh_job",
            name="Service List Refresh",
            next_run_time=datetime.now(),
            replace_existing=True,
        )
        self.scheduler.start()
        self._is_running = True

        logger.info(f"Sync scheduler started: refreshing every {self._interval_seconds}s")

    def stop(self) -> None:
        """Stop refreshing; safe to call when already stopped."""
        if not self._is_running:
            logger.warning("Sync scheduler is not running")
            return

        if self._token is not None:
            self._token.cancel()
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None
        self._is_running = False
        logger.info("Sync scheduler stopped")

    def is_running(self) -> bool:
        return self._is_running

    async def refresh_now(self) -> bool:
        """Trigger an on-demand refresh outside the periodic schedule."""
        logger.info("Manual refresh triggered")
        return await self._cache.refresh(token=self._token if self._is_running else None)
