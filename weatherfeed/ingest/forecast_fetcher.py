"""Forecast fetcher: paginated, concurrent-per-page forecast retrieval."""

import asyncio
import logging
from collections.abc import Sequence

from weatherfeed.errors import MalformedForecastError
from weatherfeed.ingest.forecast_client import ForecastClient
from weatherfeed.ingest.row_builder import build_forecast_row
from weatherfeed.models.weather import ForecastPage, Location

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def page_slice(
    locations: Sequence[Location], page: int, page_size: int = DEFAULT_PAGE_SIZE
) -> list[Location]:
    """Return the 1-indexed page of the location list."""
    if page < 1:
        raise ValueError(f"Page numbers start at 1, got {page}")
    start = (page - 1) * page_size
    return list(locations[start:start + page_size])


class ForecastFetcher:
    def __init__(
        self,
        client: ForecastClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        today_index: int = 0,
    ):
        self.client = client
        self.page_size = page_size
        self.today_index = today_index

    async def fetch_page(
        self, locations: Sequence[Location], page: int
    ) -> ForecastPage:
        """Fetch one page of locations concurrently and build their rows.

        Locations whose fetch failed, or whose response is malformed, are
        left out of both lists. An empty page means the list is exhausted.
        """
        batch = page_slice(locations, page, self.page_size)
        if not batch:
            return ForecastPage()

        responses = await asyncio.gather(
            *(self.client.fetch_one(loc.latitude, loc.longitude) for loc in batch)
        )

        result = ForecastPage()
        for location, response in zip(batch, responses):
            if response is None:
                continue
            try:
                today = build_forecast_row(location, response, self.today_index)
                tomorrow = build_forecast_row(location, response, self.today_index + 1)
            except MalformedForecastError as e:
                logger.warning(
                    "Skipping %s/%s: %s", location.city, location.district, e
                )
                continue
            result.today.append(today)
            result.tomorrow.append(tomorrow)

        logger.info(
            "Forecast page %d: %d/%d locations", page, len(result.today), len(batch)
        )
        return result
