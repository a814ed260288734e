"""Observation scraper: yesterday's extremes and rainfall from mgm.gov.tr."""

import asyncio
import logging
import re
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager

from weatherfeed.config.defaults import DEFAULT_OBSERVATION_SOURCES
from weatherfeed.config.schema import ObservationSource
from weatherfeed.ingest.page_source import PageSource, PlaywrightPageSource
from weatherfeed.ingest.row_builder import merge_observations
from weatherfeed.models.common import ObservationCategory
from weatherfeed.models.weather import Observation, YesterdayRow

logger = logging.getLogger(__name__)

DEFAULT_ROW_SELECTOR = "tr.ng-scope"
DEFAULT_CELL_SELECTOR = "td.ng-binding"

SessionFactory = Callable[[], AbstractAsyncContextManager[PageSource]]

# Leading decimal number, as in "21.4 °C"; trailing units are ignored.
_LEADING_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_observation_value(text: str, category: str) -> float | None:
    """Parse the number a cell starts with; None when it has none.

    Precipitation is published with a decimal comma.
    """
    text = text.strip()
    if category == ObservationCategory.PRECIPITATION:
        text = text.replace(",", ".")
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None
    return float(match.group())


class ObservationScraper:
    def __init__(
        self,
        session_factory: SessionFactory = PlaywrightPageSource,
        sources: Sequence[ObservationSource] = DEFAULT_OBSERVATION_SOURCES,
        row_selector: str = DEFAULT_ROW_SELECTOR,
        cell_selector: str = DEFAULT_CELL_SELECTOR,
    ):
        self.session_factory = session_factory
        self.sources = list(sources)
        self.row_selector = row_selector
        self.cell_selector = cell_selector

    async def scrape_category(
        self, url: str, row_selector: str, category: str
    ) -> list[Observation]:
        """Scrape one observation page into (label, value, category) records."""
        async with self.session_factory() as session:
            await session.load(url, row_selector)
            rows = await session.extract_rows(row_selector, self.cell_selector)

        observations: list[Observation] = []
        for cells in rows:
            if len(cells) < 2:
                logger.debug("Skipping row with %d cells on %s", len(cells), url)
                continue
            observations.append(
                Observation(
                    city_info=cells[0],
                    value=parse_observation_value(cells[1], category),
                    category=category,
                )
            )
        logger.info("Scraped %d rows for %s", len(observations), category)
        return observations

    async def scrape_all(self) -> list[YesterdayRow]:
        """Scrape every source concurrently and merge into one row per district.

        A failure in any category propagates and fails the whole scrape.
        """
        results = await asyncio.gather(
            *(
                self.scrape_category(s.url, self.row_selector, s.category)
                for s in self.sources
            )
        )
        flattened = [obs for batch in results for obs in batch]
        rows = merge_observations(flattened)
        logger.info(
            "Merged %d observations into %d yesterday rows", len(flattened), len(rows)
        )
        return rows
