"""Dataset loader: one full refresh cycle, scrape then paginated forecasts."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from functools import partial
from pathlib import Path

from weatherfeed.config.defaults import DEFAULT_OBSERVATION_SOURCES
from weatherfeed.config.schema import FeedConfig
from weatherfeed.ingest.forecast_client import ForecastClient
from weatherfeed.ingest.forecast_fetcher import ForecastFetcher
from weatherfeed.ingest.locations import load_locations
from weatherfeed.ingest.observation_scraper import ObservationScraper
from weatherfeed.ingest.page_source import PlaywrightPageSource
from weatherfeed.models.common import utc_now_iso
from weatherfeed.models.reporting import RefreshSummary
from weatherfeed.models.weather import Dataset
from weatherfeed.pipeline.dataset_store import DatasetStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_DELAY = 1.0  # seconds between forecast pages

CompletionCallback = Callable[[Dataset], Awaitable[None]]


class DatasetLoader:
    """Refreshes the shared dataset. Overlapping refreshes collapse into one."""

    def __init__(
        self,
        store: DatasetStore,
        fetcher: ForecastFetcher,
        scraper: ObservationScraper,
        locations_path: str | Path,
        page_delay_seconds: float = DEFAULT_PAGE_DELAY,
        on_complete: CompletionCallback | None = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.scraper = scraper
        self.locations_path = locations_path
        self.page_delay_seconds = page_delay_seconds
        self.on_complete = on_complete
        self.last_summary: RefreshSummary | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def refresh(self) -> RefreshSummary | None:
        """Run one refresh cycle. Returns None if one is already in progress.

        Failures propagate to the caller; the in-progress flag is always
        cleared first.
        """
        # Checked and set before the first await: no other refresh can interleave.
        if self._running:
            logger.info("Refresh already in progress, skipping")
            return None
        self._running = True

        started = time.monotonic()
        summary = RefreshSummary(started_at=utc_now_iso())
        try:
            await self._run(summary)
            summary.status = "completed"
        except Exception as e:
            summary.status = "failed"
            summary.error = str(e)
            raise
        finally:
            summary.completed_at = utc_now_iso()
            summary.duration_seconds = round(time.monotonic() - started, 3)
            self.last_summary = summary
            self._running = False
            logger.info(
                "Refresh %s: %d today, %d tomorrow, %d yesterday rows "
                "from %d pages in %.1fs",
                summary.status, summary.today_rows, summary.tomorrow_rows,
                summary.yesterday_rows, summary.pages_fetched,
                summary.duration_seconds,
            )

        if self.on_complete is not None:
            await self.on_complete(self.store.get())
        return summary

    async def _run(self, summary: RefreshSummary) -> None:
        self.store.replace(Dataset.empty())

        yesterday = await self.scraper.scrape_all()
        self.store.set_yesterday(yesterday)
        summary.yesterday_rows = len(yesterday)

        locations = load_locations(self.locations_path)
        page = 1
        while True:
            result = await self.fetcher.fetch_page(locations, page)
            # An empty page (past the end, or every fetch failed) ends the cycle
            if not result.today:
                break
            self.store.append_forecast(result.today, result.tomorrow)
            summary.pages_fetched += 1
            summary.today_rows += len(result.today)
            summary.tomorrow_rows += len(result.tomorrow)
            page += 1
            await asyncio.sleep(self.page_delay_seconds)


def build_loader(
    config: FeedConfig,
    store: DatasetStore,
    client: ForecastClient,
    on_complete: CompletionCallback | None = None,
) -> DatasetLoader:
    """Wire a DatasetLoader from config, using Playwright for observations."""
    scrape = config.scrape
    scraper = ObservationScraper(
        session_factory=partial(
            PlaywrightPageSource, headless=scrape.headless, timeout_ms=scrape.timeout_ms
        ),
        sources=scrape.sources or DEFAULT_OBSERVATION_SOURCES,
        row_selector=scrape.row_selector,
        cell_selector=scrape.cell_selector,
    )
    fetcher = ForecastFetcher(
        client,
        page_size=config.forecast.page_size,
        today_index=config.forecast.today_index,
    )
    return DatasetLoader(
        store,
        fetcher,
        scraper,
        locations_path=config.locations_path,
        page_delay_seconds=config.forecast.page_delay_seconds,
        on_complete=on_complete,
    )
