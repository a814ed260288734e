"""Forecast API client: one POST per coordinate pair, no retry."""

import logging

import httpx

from weatherfeed.config.schema import DEFAULT_FORECAST_URL
from weatherfeed.ingest.row_builder import DAILY_FIELDS

logger = logging.getLogger(__name__)

HOURLY_FIELDS = ("cape",)


class ForecastClient:
    def __init__(
        self,
        url: str = DEFAULT_FORECAST_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ForecastClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def build_payload(lat: float, lng: float) -> dict:
        return {
            "latitude": lat,
            "longitude": lng,
            "query": {
                "hourly": list(HOURLY_FIELDS),
                "daily": list(DAILY_FIELDS),
            },
        }

    async def fetch_one(self, lat: float, lng: float) -> dict | None:
        """Fetch the forecast for one coordinate pair.

        Transport, status and decode failures are logged and yield None.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        try:
            resp = await self._client.post(
                self.url,
                json=self.build_payload(lat, lng),
                headers={"Content-Type": "application/json"},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Forecast request failed for %s,%s: %s", lat, lng, e)
            return None
        if not isinstance(data, dict):
            logger.error("Unexpected forecast payload for %s,%s: %r", lat, lng, type(data))
            return None
        return data
