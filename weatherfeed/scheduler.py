"""Daily trigger: runs a job once a day at a fixed local wall-clock time."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

DEFAULT_HOUR = 6
DEFAULT_MINUTE = 0


def seconds_until_next_run(now: datetime, hour: int, minute: int) -> float:
    """Seconds from now until the next hour:minute, today or tomorrow."""
    target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class DailyScheduler:
    """Awaits a job every day at hour:minute server local time."""

    def __init__(
        self,
        job: Callable[[], Awaitable[object]],
        hour: int = DEFAULT_HOUR,
        minute: int = DEFAULT_MINUTE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.job = job
        self.hour = hour
        self.minute = minute
        self._clock = clock
        self._running = False
        self._total_runs = 0
        self._total_failures = 0

    async def run_forever(self) -> None:
        self._running = True
        logger.info("Scheduler started, daily at %02d:%02d", self.hour, self.minute)
        while self._running:
            wait = seconds_until_next_run(self._clock(), self.hour, self.minute)
            logger.info("Next scheduled refresh in %.0fs", wait)
            await asyncio.sleep(wait)
            if not self._running:
                break
            await self.run_once()
        logger.info(
            "Scheduler stopped after %d runs (%d failed)",
            self._total_runs, self._total_failures,
        )

    async def run_once(self) -> bool:
        """Run the job once. Returns True on success; failures are logged."""
        self._total_runs += 1
        logger.info("Scheduled run #%d starting", self._total_runs)
        try:
            await self.job()
            return True
        except Exception:
            self._total_failures += 1
            logger.exception("Scheduled run #%d crashed", self._total_runs)
            return False

    def stop(self) -> None:
        self._running = False
